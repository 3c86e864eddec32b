# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import tempfile
import unittest
from pathlib import Path

from clusterctl import ClusterSession
from clusterctl import Config
from clusterctl import MissingSetting
from clusterctl._manifests import render_heapster_application
from clusterctl._manifests import write_heapster_application
from clusterctl.tests._fake_config import make_session
from clusterctl.tests._fake_config import write_config


class TestHeapsterApplication(unittest.TestCase):

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self._dir = Path(self._temp_dir.name)

    def tearDown(self):
        self._temp_dir.cleanup()

    def test_render(self):
        manifest = render_heapster_application(make_session(self._dir, 'production1'))
        self.assertIn('  name: pp-heapster-production\n', manifest)
        self.assertIn('    namespace: production\n', manifest)
        self.assertIn('      - values-production1.yaml\n', manifest)
        self.assertIn('    repoURL: git@github.com:example/kubernetes-deployments\n', manifest)
        self.assertIn('    targetRevision: HEAD\n', manifest)
        self.assertTrue(manifest.endswith('    automated: {}\n'))

    def test_write_creates_scratch_dir(self):
        extra = f'[development0]\nscratch_dir = {self._dir}/absent/scratch\n'
        session = ClusterSession('development0', Config.load(write_config(self._dir, extra)).for_cluster('development0'))
        path = write_heapster_application(session)
        self.assertEqual(path, self._dir / 'absent/scratch/pp-heapster.yaml')
        self.assertIn('pp-heapster-development', path.read_text())

    def test_repo_is_required(self):
        path = self._dir / 'config.ini'
        path.write_text('[defaults]\ninfra_profile = infra\n')
        session = ClusterSession('development0', Config.load(path).for_cluster('development0'))
        with self.assertRaises(MissingSetting):
            render_heapster_application(session)


if __name__ == '__main__':
    unittest.main()
