import collections.abc
import contextlib
import logging
import typing

import github3
import github3.exceptions
import requests

import github.pulls
import github.release
import release_notes.model as rnm

logger = logging.getLogger(__name__)


class PullRequestSource(typing.Protocol):
    '''
    the subset of the GitHub-API needed for collecting release notes and publishing releases
    '''
    def pull_request_pages(
        self,
        base: str,
        per_page: int,
    ) -> collections.abc.Iterable[list[rnm.PullRequest]]: ...

    def labels(self, number: int) -> tuple[str]: ...

    def release_exists(self, tag_name: str) -> bool: ...

    def create_release(self, draft: rnm.ReleaseDraft) -> str: ...


@contextlib.contextmanager
def _translate_errors(action: str):
    try:
        yield
    except (github3.exceptions.GitHubException, requests.RequestException) as e:
        raise rnm.TransportError(f'error contacting github while {action}: {e}') from e


class GithubPullRequestSource:
    def __init__(
        self,
        github_api: github3.GitHub,
        owner: str,
        repository: str,
    ):
        self.github_api = github_api
        self.owner = owner
        self.repository_name = repository
        self._repository = None

    @property
    def repository(self):
        if self._repository is None:
            with _translate_errors(f'retrieving repository {self.owner}/{self.repository_name}'):
                self._repository = self.github_api.repository(
                    owner=self.owner,
                    repository=self.repository_name,
                )
        return self._repository

    def pull_request_pages(
        self,
        base: str,
        per_page: int=github.pulls.max_page_size,
    ) -> collections.abc.Generator[list[rnm.PullRequest], None, None]:
        pages = github.pulls.iter_pull_request_pages(
            repository=self.repository,
            base=base,
            per_page=per_page,
        )
        page_number = 0
        while True:
            page_number += 1
            logger.info(f'Fetching PR list page {page_number:2d}')
            with _translate_errors(f'fetching PR list page {page_number}'):
                page = next(pages, None)
            if page is None:
                return
            yield [rnm.PullRequest.from_github(pr) for pr in page]

    def labels(self, number: int) -> tuple[str]:
        with _translate_errors(f'listing labels of PR #{number}'):
            return github.pulls.label_names(
                repository=self.repository,
                number=number,
            )

    def release_exists(self, tag_name: str) -> bool:
        with _translate_errors(f'looking up release for {tag_name=}'):
            return github.release.release_exists(
                repository=self.repository,
                tag_name=tag_name,
            )

    def create_release(self, draft: rnm.ReleaseDraft) -> str:
        with _translate_errors(f'creating release {draft.name}'):
            release = github.release.create_release(
                repository=self.repository,
                tag_name=draft.tag_name,
                name=draft.name,
                body=draft.body,
                prerelease=draft.prerelease,
                draft=draft.draft,
            )
        if not release:
            raise rnm.TransportError(f'github did not return a release for {draft.tag_name=}')
        return release.html_url
