# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import tempfile
import unittest
from pathlib import Path

from clusterctl import Config
from clusterctl import ConfigNotFound
from clusterctl import MalformedConfig
from clusterctl import MissingSetting
from clusterctl.tests._fake_config import write_config


class TestConfig(unittest.TestCase):

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self._dir = Path(self._temp_dir.name)

    def tearDown(self):
        self._temp_dir.cleanup()

    def test_defaults(self):
        config = Config.load(write_config(self._dir)).for_cluster('development0')
        self.assertEqual(config.infra_profile, 'infra')
        self.assertEqual(config.terraforming_path, self._dir / 'terraforming')
        self.assertEqual(config.kubernetes_deployments_revision, 'HEAD')

    def test_cluster_mask_overrides_defaults(self):
        extra = (
            '[production*]\n'
            'infra_profile = infra-production\n'
            '[production1]\n'
            'v1_profile = v1-production1\n'
            )
        config = Config.load(write_config(self._dir, extra))
        self.assertEqual(config.for_cluster('development0').infra_profile, 'infra')
        self.assertEqual(config.for_cluster('production0').infra_profile, 'infra-production')
        self.assertEqual(config.for_cluster('production0').v1_profile, 'v1')
        self.assertEqual(config.for_cluster('production1').v1_profile, 'v1-production1')

    def test_paths_are_expanded(self):
        extra = '[development1]\nassets_cache_path = ~/clusterctl-assets\n'
        config = Config.load(write_config(self._dir, extra)).for_cluster('development1')
        self.assertEqual(config.assets_cache_path, Path.home() / 'clusterctl-assets')

    def test_missing_setting(self):
        path = self._dir / 'config.ini'
        path.write_text('[defaults]\ninfra_profile = infra\n')
        config = Config.load(path).for_cluster('development0')
        with self.assertRaises(MissingSetting) as caught:
            _ = config.terraforming_path
        self.assertIn('terraforming_path', str(caught.exception))

    def test_not_found(self):
        with self.assertRaises(ConfigNotFound):
            Config.load(self._dir / 'absent.ini')

    def test_malformed(self):
        path = self._dir / 'config.ini'
        path.write_text('infra_profile = infra\n')
        with self.assertRaises(MalformedConfig) as caught:
            Config.load(path)
        self.assertIn(str(path), str(caught.exception))
        self.assertNotIn('\n', str(caught.exception))

    def test_duplicate_section(self):
        with self.assertRaises(MalformedConfig):
            Config.load(write_config(self._dir, '[production*]\nv1_profile = a\n[production*]\nv1_profile = b\n'))

    def test_clusters(self):
        self.assertIn('production2', Config.load(write_config(self._dir)).clusters())
        # Appended lines without a header belong to the defaults section.
        config = Config.load(write_config(self._dir, 'clusters = development0\n  development1\n'))
        self.assertEqual(config.clusters(), ['development0', 'development1'])


if __name__ == '__main__':
    unittest.main()
