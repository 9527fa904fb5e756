#! /usr/bin/env python3
import argparse
import collections.abc
import logging
import sys

import ccc.github
import ci.log
import ci.util
import release_notes.cfg as rnc
import release_notes.fetch as rnf
import release_notes.model as rnm
import release_notes.publish as rnp
import release_notes.source as rnsrc

logger = logging.getLogger(__name__)

usage = '''usage: release-notes --last=<number> --current=<number>
                     --token=<token> [--base=<branch-name>]
'''

release_usage = '''usage: release-notes --releaseName=<releaseName> --tagName=<tagName>
                     --preRelease
'''


def parse_args(argv: collections.abc.Sequence[str]=None) -> argparse.Namespace:
    '''
    Parses CLI for release notes generation. Options not passed are left as `None`, so that
    values from configuration file and environment are not overwritten.
    '''
    parser = argparse.ArgumentParser(
        description='Generate release notes from pull requests merged between two pull requests',
    )
    parser.add_argument('--repository', help='repository name')
    parser.add_argument('--owner', help='repository owner')
    parser.add_argument(
        '--last',
        type=int,
        help='The PR number of the last versioned release.',
    )
    parser.add_argument(
        '--current',
        type=int,
        help='The PR number of the current versioned release (defaults to most recent PR).',
    )
    parser.add_argument(
        '--token',
        help='Github api token (defaults to GITHUB_TOKEN). See: https://github.com/settings/tokens',
    )
    parser.add_argument('--base', help='The base branch name for PRs to look for.')
    parser.add_argument(
        '--relnote-filter',
        action='store_true',
        default=None,
        help='Whether to filter PRs by the release-note label.',
    )
    parser.add_argument('--releaseName', '--release-name', dest='release_name')
    parser.add_argument('--tagName', '--tag-name', dest='tag_name')
    parser.add_argument(
        '--preRelease', '--prerelease',
        dest='prerelease',
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    parser.add_argument('--draft', action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        '--release-owner',
        help='owner of repository to create release in (defaults to --owner)',
    )
    parser.add_argument(
        '--release-repository',
        help='repository to create release in (defaults to --repository)',
    )
    parser.add_argument('--github-url', help='defaults to https://github.com')
    parser.add_argument(
        '--session-adapter',
        choices=[adapter.value for adapter in ccc.github.SessionAdapter],
    )
    parser.add_argument(
        '--label-lookup-interval',
        type=float,
        help='minimum seconds between label lookups (0 disables pacing)',
    )
    parser.add_argument('--outfile', help='file to write release notes to (- for stdout)')
    parser.add_argument(
        '--print-only',
        action='store_true',
        default=None,
        help='only print release notes, never create a release',
    )
    parser.add_argument('--cfg-file', help=f'defaults to {rnc.default_cfg_file_path}')
    parser.add_argument('--verbose', action='store_true')
    parser.add_argument('--quiet', action='store_true')

    return parser.parse_args(argv)


def github_source(
    cfg: rnc.ReleaseNotesCfg,
    owner: str,
    repository: str,
) -> rnsrc.PullRequestSource:
    github_api = ccc.github.github_api(
        token=cfg.token,
        github_url=cfg.github_url,
        session_adapter=cfg.session_adapter,
    )
    return rnsrc.GithubPullRequestSource(
        github_api=github_api,
        owner=owner,
        repository=repository,
    )


def write_release_notes(
    release_notes: rnm.ReleaseNotes,
    outfile: str='-',
):
    outfh = ci.util.open_outfile(outfile)
    try:
        outfh.write('\n')
        outfh.write(release_notes.header)
        outfh.write('\n')
        outfh.write(release_notes.body)
        outfh.flush()
    finally:
        if outfh is not sys.stdout:
            outfh.close()


def run(
    args: argparse.Namespace,
    env: dict=None,
    source_factory: collections.abc.Callable[..., rnsrc.PullRequestSource]=github_source,
) -> int:
    '''
    generates (and optionally publishes) release notes. Returns the process exit code.
    '''
    try:
        cfg = rnc.load_cfg(args=args, env=env)
    except rnm.UsageError as ue:
        logger.error(ue)
        print(usage, end='')
        return 1

    logger.info(f'collecting release notes for {cfg.owner}/{cfg.repository} ({cfg.base=})')

    source = source_factory(cfg, cfg.owner, cfg.repository)
    try:
        release_notes = rnf.ReleaseNoteBuilder(cfg=cfg, source=source).build()
    except rnm.ReleaseNotesError as rne:
        logger.error(rne)
        return 1

    try:
        write_release_notes(release_notes, outfile=cfg.outfile)
    except OSError as ose:
        logger.error(f'failed to write release notes to {cfg.outfile}: {ose}')
        return 1

    if cfg.print_only:
        return 0

    # XXX exits 1 although notes were written; use --print-only to skip publishing
    if not cfg.wants_release:
        print(release_usage, end='')
        return 1

    draft = rnp.release_draft(cfg=cfg, release_notes=release_notes)
    if (draft.owner, draft.repository) != (cfg.owner, cfg.repository):
        source = source_factory(cfg, draft.owner, draft.repository)

    try:
        url = rnp.publish(draft=draft, source=source)
    except rnm.ReleaseNotesError as rne:
        logger.error(f'error auto release: {rne}')
        return 1

    print('release url:', url)
    return 0


def main(argv: collections.abc.Sequence[str]=None):
    args = parse_args(argv)
    ci.log.configure_default_logging(
        stdout_level=ci.log.level_from_flags(verbose=args.verbose, quiet=args.quiet),
    )
    sys.exit(run(args))


if __name__ == '__main__':
    main()
