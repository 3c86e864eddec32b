# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import fnmatch
import logging
import tempfile
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from pathlib import Path
from typing import Mapping
from typing import Sequence

_logger = logging.getLogger(__name__)

default_config_path = Path('~/.config/clusterctl/config.ini').expanduser()

_default_clusters = [
    'development0',
    'development1',
    'development2',
    'production0',
    'production1',
    'production2',
    ]

_defaults = {
    'assets_cache_path': '~/.cache/clusterctl',
    'kubernetes_deployments_revision': 'HEAD',
    'scratch_dir': tempfile.gettempdir(),
    }


class ConfigError(Exception):
    pass


class ConfigNotFound(ConfigError):

    def __init__(self, path):
        super().__init__(f"Config file {path} does not exist")


class MalformedConfig(ConfigError):

    def __init__(self, path, reason):
        super().__init__(f"Config file {path} cannot be parsed: {reason}")


class MissingSetting(ConfigError):

    def __init__(self, path, cluster_id, key):
        super().__init__(f"Config {path}: {key!r} is not set for {cluster_id}")


class Config:
    """Settings file with overrides per cluster.

    Section "defaults" applies to all clusters. Other section names are
    masks of cluster ids, e.g. "[production*]". Matching sections override
    the defaults and the previous matching sections.
    """

    def __init__(self, path: Path, parser: ConfigParser):
        self._path = path
        self._parser = parser

    @classmethod
    def load(cls, path: Path):
        if not path.exists():
            raise ConfigNotFound(path)
        parser = ConfigParser(interpolation=None)
        with path.open() as f:
            try:
                parser.read_file(f)
            except ConfigParserError as e:
                raise MalformedConfig(path, e.message.splitlines()[0])
        _logger.info("Config %s: sections %s", path, parser.sections())
        return cls(path, parser)

    def clusters(self) -> Sequence[str]:
        if self._parser.has_option('defaults', 'clusters'):
            return self._parser.get('defaults', 'clusters').split()
        return _default_clusters

    def for_cluster(self, cluster_id: str) -> 'ClusterConfig':
        settings = dict(_defaults)
        for section in self._parser.sections():
            mask = '*' if section == 'defaults' else section
            if fnmatch.fnmatchcase(cluster_id, mask):
                _logger.debug("Config %s: section %s: read for %s", self._path, section, cluster_id)
                settings.update(self._parser.items(section))
            else:
                _logger.debug("Config %s: section %s: skip for %s", self._path, section, cluster_id)
        return ClusterConfig(self._path, cluster_id, settings)


class ClusterConfig:

    def __init__(self, path: Path, cluster_id: str, settings: Mapping[str, str]):
        self._path = path
        self._cluster_id = cluster_id
        self._settings = settings

    def __repr__(self):
        return f'<{ClusterConfig.__name__} {self._path} for {self._cluster_id}>'

    @property
    def terraforming_path(self) -> Path:
        return self._get_path('terraforming_path')

    @property
    def kubernetes_deployments_path(self) -> Path:
        return self._get_path('kubernetes_deployments_path')

    @property
    def kubernetes_deployments_repo(self) -> str:
        return self._get('kubernetes_deployments_repo')

    @property
    def kubernetes_deployments_revision(self) -> str:
        return self._get('kubernetes_deployments_revision')

    @property
    def kubernetes_deployments_ssh_key(self) -> Path:
        return self._get_path('kubernetes_deployments_ssh_key')

    @property
    def keybase_secure_manifests_path(self) -> Path:
        return self._get_path('keybase_secure_manifests_path')

    @property
    def assets_cache_path(self) -> Path:
        return self._get_path('assets_cache_path')

    @property
    def scratch_dir(self) -> Path:
        return self._get_path('scratch_dir')

    @property
    def infra_profile(self) -> str:
        return self._get('infra_profile')

    @property
    def v1_profile(self) -> str:
        return self._get('v1_profile')

    def _get(self, key: str) -> str:
        value = self._settings.get(key, '')
        if not value:
            raise MissingSetting(self._path, self._cluster_id, key)
        return value

    def _get_path(self, key: str) -> Path:
        return Path(self._get(key)).expanduser()
