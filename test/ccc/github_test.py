import cachecontrol
import github3.github
import pytest
import requests.adapters

import ccc.github as examinee
import http_requests


def test_github_com_ctor():
    ctor = examinee.github_api_ctor(github_url='https://github.com')

    assert ctor.func is github3.github.GitHub
    adapter = ctor.keywords['session'].get_adapter('https://api.github.com')
    assert isinstance(adapter.max_retries, http_requests.LoggingRetry)


def test_enterprise_ctor():
    ctor = examinee.github_api_ctor(
        github_url='https://github.example.org',
        verify_ssl=False,
        session_adapter=examinee.SessionAdapter.NONE,
    )

    assert ctor.func is github3.github.GitHubEnterprise
    assert ctor.keywords['url'] == 'https://github.example.org'
    assert ctor.keywords['verify'] is False
    adapter = ctor.keywords['session'].get_adapter('https://github.example.org')
    assert isinstance(adapter, requests.adapters.HTTPAdapter)
    assert not isinstance(adapter.max_retries, http_requests.LoggingRetry)


def test_invalid_github_url():
    with pytest.raises(ValueError):
        examinee.github_api_ctor(github_url='github.com')

    with pytest.raises(ValueError):
        examinee.github_api(token='')


def test_cache_session_adapter():
    ctor = examinee.github_api_ctor(session_adapter=examinee.SessionAdapter.CACHE)

    adapter = ctor.keywords['session'].get_adapter('https://api.github.com')
    assert isinstance(adapter, cachecontrol.CacheControlAdapter)
    assert isinstance(adapter.max_retries, http_requests.LoggingRetry)
