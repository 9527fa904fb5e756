# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import collections.abc
import itertools
import logging

import github3.issues.label
import github3.pulls
import github3.repos

logger = logging.getLogger(__name__)

max_page_size = 100


# pylint: disable=protected-access
# noinspection PyProtectedMember
def list_pulls(
    repository: github3.repos.Repository,
    base: str,
    state: str='closed',
    sort: str='updated',
    direction: str='desc',
    per_page: int=max_page_size,
) -> collections.abc.Iterator[github3.pulls.ShortPullRequest]:
    url = repository._build_url('pulls', base_url=repository._api)
    return repository._iter(
        -1,
        url,
        github3.pulls.ShortPullRequest,
        params={
            'state': state,
            'base': base,
            'sort': sort,
            'direction': direction,
            'per_page': per_page,
        },
    )


def iter_pull_request_pages(
    repository: github3.repos.Repository,
    base: str,
    per_page: int=max_page_size,
) -> collections.abc.Generator[list[github3.pulls.ShortPullRequest], None, None]:
    '''
    yields closed pull requests against `base`, most recently updated first, in lists of at most
    `per_page` elements. Pages are retrieved lazily, i.e. stopping iteration early saves the
    remaining requests.
    '''
    if not 0 < per_page <= max_page_size:
        raise ValueError(f'{per_page=} must be in range 1..{max_page_size}')

    pulls = list_pulls(
        repository=repository,
        base=base,
        per_page=per_page,
    )
    while page := list(itertools.islice(pulls, per_page)):
        yield page


# pylint: disable=protected-access
# noinspection PyProtectedMember
def label_names(
    repository: github3.repos.Repository,
    number: int,
) -> tuple[str]:
    url = repository._build_url('issues', str(number), 'labels', base_url=repository._api)
    return tuple(
        label.name for label in repository._iter(-1, url, github3.issues.label.Label)
    )
