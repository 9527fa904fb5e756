# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import enum
import functools
import logging
import urllib.parse

import github3
import github3.github
import github3.session

import http_requests

logger = logging.getLogger(__name__)

GITHUB_COM = 'https://github.com'


class SessionAdapter(enum.Enum):
    NONE = 'none'
    RETRY = 'retry'
    CACHE = 'cache'


def github_api_ctor(
    github_url: str=GITHUB_COM,
    verify_ssl: bool=True,
    session_adapter: SessionAdapter=SessionAdapter.RETRY,
):
    '''returns the appropriate github3.GitHub constructor for the given github URL

    In case github_url does not refer to github.com, the c'tor for GithubEnterprise is
    returned with the url argument preset, thus disburdening users to differentiate
    between github.com and non-github.com cases.
    '''
    parsed = urllib.parse.urlparse(github_url)
    if parsed.scheme:
        hostname = parsed.hostname
    else:
        raise ValueError('failed to parse url: ' + str(github_url))

    session = github3.session.GitHubSession()
    session_adapter = SessionAdapter(session_adapter)

    if session_adapter is SessionAdapter.NONE:
        pass
    elif session_adapter is SessionAdapter.RETRY:
        session = http_requests.mount_default_adapter(
            session=session,
            flags=http_requests.AdapterFlag.RETRY,
            max_pool_size=16, # increase with care, might cause github api "secondary-rate-limit"
        )
    elif session_adapter is SessionAdapter.CACHE:
        session = http_requests.mount_default_adapter(
            session=session,
            flags=http_requests.AdapterFlag.CACHE | http_requests.AdapterFlag.RETRY,
            max_pool_size=16,
        )
    else:
        raise NotImplementedError(session_adapter)

    if hostname.lower() == 'github.com':
        return functools.partial(
            github3.github.GitHub,
            session=session,
        )
    else:
        return functools.partial(
            github3.github.GitHubEnterprise,
            url=github_url,
            verify=verify_ssl,
            session=session,
        )


def github_api(
    token: str,
    github_url: str=GITHUB_COM,
    session_adapter: SessionAdapter=SessionAdapter.RETRY,
    verify_ssl: bool=True,
) -> github3.GitHub:
    if not token:
        raise ValueError('token must not be empty')

    github_ctor = github_api_ctor(
        github_url=github_url,
        verify_ssl=verify_ssl,
        session_adapter=session_adapter,
    )
    logger.debug(f'creating github api for {github_url=} {session_adapter=}')

    return github_ctor(token=token)
