'''
utils wrapping github3.py's release-API
'''

import logging

import github3.exceptions
import github3.repos
import github3.repos.release

logger = logging.getLogger(__name__)

# amount of codepoints accepted by github for release bodies (tested empirically)
# see: https://github.com/dead-claudia/github-limits
release_body_limit = 125000


def body_or_replacement(
    body: str,
    replacement: str='body was too large (limit: {limit} / actual: {actual})',
    limit: int=release_body_limit,
) -> tuple[str, bool]:
    '''
    convenience function that will check whether given body is short enough to be accepted
    by GitHub's API. If so, passed body will be returned as first element of returned tuple, else
    replacement value.

    The second value of returned tuple will indicate whether original body was returned. Callers
    may use this hint to perform a mitigation.
    '''
    if len(body) <= limit:
        return body, True

    return replacement.format(
        limit=limit,
        actual=len(body),
    ), False


def release_exists(
    repository: github3.repos.Repository,
    tag_name: str,
) -> bool:
    if not tag_name:
        raise ValueError('tag_name must not be empty')
    try:
        repository.release_from_tag(tag_name)
        return True
    except github3.exceptions.NotFoundError:
        return False


def create_release(
    repository: github3.repos.Repository,
    tag_name: str,
    name: str,
    body: str,
    prerelease: bool=False,
    draft: bool=False,
) -> github3.repos.release.Release:
    body, is_original = body_or_replacement(body, limit=release_body_limit)
    if not is_original:
        logger.warning(f'release body for {tag_name=} exceeds {release_body_limit=} - replaced')

    logger.info(f'creating release {name=} {tag_name=} {prerelease=} {draft=}')
    return repository.create_release(
        tag_name=tag_name,
        name=name,
        body=body,
        prerelease=prerelease,
        draft=draft,
    )
