'''
Configuration for release-note collection. Assembled from (in increasing precedence) a YAML file
in the user's home directory (or passed via `--cfg-file`), environment variables and parsed
command line arguments.
'''

import argparse
import dataclasses
import logging
import os
import urllib.parse

import dacite
import yaml

import ccc.github
import ci.util
import github
import release_notes.model as rnm

logger = logging.getLogger(__name__)

default_cfg_file_path = os.path.join(os.path.expanduser('~'), '.release-notes.cfg')


@dataclasses.dataclass(frozen=True)
class ReleaseNotesCfg:
    owner: str
    repository: str
    last: int
    token: str = dataclasses.field(repr=False)
    current: int | None = None
    base: str = 'master'
    relnote_filter: bool = False
    release_name: str | None = None
    tag_name: str | None = None
    prerelease: bool = False
    draft: bool = False
    release_owner: str | None = None
    release_repository: str | None = None
    github_url: str = ccc.github.GITHUB_COM
    session_adapter: ccc.github.SessionAdapter = ccc.github.SessionAdapter.RETRY
    label_lookup_interval: float = 5.0
    outfile: str = '-'
    print_only: bool = False

    @property
    def publish_owner(self) -> str:
        return self.release_owner or self.owner

    @property
    def publish_repository(self) -> str:
        return self.release_repository or self.repository

    @property
    def wants_release(self) -> bool:
        return bool(self.tag_name and self.release_name)


_cfg_field_names = frozenset(f.name for f in dataclasses.fields(ReleaseNotesCfg))
_required_fields = ('owner', 'repository', 'last', 'token')


def _normalise_keys(raw: dict) -> dict:
    return {
        k.replace('-', '_'): v
        for k, v in raw.items()
    }


def _without_empty_values(raw: dict) -> dict:
    return {
        k: v for k, v in raw.items()
        if v is not None and k in _cfg_field_names
    }


def _config_from_file(cfg_file_path: str | None) -> dict:
    if cfg_file_path is None:
        if not os.path.isfile(default_cfg_file_path):
            return {}
        cfg_file_path = default_cfg_file_path
    elif not os.path.isfile(cfg_file_path):
        raise rnm.UsageError(f'not an existing file: {cfg_file_path}')

    try:
        raw = ci.util.parse_yaml_file(cfg_file_path) or {}
    except (ValueError, yaml.YAMLError) as e:
        raise rnm.UsageError(f'failed to parse {cfg_file_path}: {e}') from e

    if not isinstance(raw, dict):
        raise rnm.UsageError(f'expected a mapping in {cfg_file_path}')

    logger.debug(f'read configuration from {cfg_file_path}')
    return _without_empty_values(_normalise_keys(raw))


def _config_from_env(env: dict) -> dict:
    if github_repository := env.get('GITHUB_REPOSITORY'):
        try:
            owner, repository = github.owner_and_repo(github_repository)
        except ValueError as ve:
            raise rnm.UsageError(f'malformed GITHUB_REPOSITORY: {ve}') from ve
    else:
        owner, repository = None, None

    return _without_empty_values({
        'token': env.get('GITHUB_TOKEN'),
        'github_url': env.get('GITHUB_SERVER_URL'),
        'owner': owner,
        'repository': repository,
    })


def _config_from_args(args: argparse.Namespace) -> dict:
    return _without_empty_values(vars(args))


def missing_fields(raw: dict) -> tuple[str]:
    # pull request number 0 does not exist on github, thus treated as unset
    return tuple(
        name for name in _required_fields
        if not raw.get(name)
    )


def load_cfg(
    args: argparse.Namespace,
    env: dict=None,
) -> ReleaseNotesCfg:
    '''
    merges all configuration sources and returns the resulting configuration.

    raises `UsageError` if required values are missing or values are malformed
    '''
    if env is None:
        env = os.environ

    raw = {}
    for source in (
        _config_from_file(getattr(args, 'cfg_file', None)),
        _config_from_env(env),
        _config_from_args(args),
    ):
        raw |= source

    # as for `last`, pull request number 0 means unset, thus "current" defaults to the latest PR
    current = raw.get('current')
    if not current or (isinstance(current, int) and current < 0):
        raw.pop('current', None)

    if missing := missing_fields(raw):
        raise rnm.UsageError(f'missing required value(s): {", ".join(missing)}')

    try:
        cfg = dacite.from_dict(
            data_class=ReleaseNotesCfg,
            data=raw,
            config=dacite.Config(
                cast=[ccc.github.SessionAdapter],
                type_hooks={float: float},
                strict=True,
            ),
        )
    except dacite.DaciteError as de:
        raise rnm.UsageError(f'invalid configuration: {de}') from de

    if cfg.label_lookup_interval < 0:
        raise rnm.UsageError(f'{cfg.label_lookup_interval=} must not be negative')
    github_url = urllib.parse.urlparse(cfg.github_url)
    if not (github_url.scheme and github_url.hostname):
        raise rnm.UsageError(f'{cfg.github_url=} is not an absolute url')
    if cfg.current is not None and cfg.current == cfg.last:
        raise rnm.UsageError(f'last and current PR must differ (both are #{cfg.last})')

    return cfg
