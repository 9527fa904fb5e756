import datetime

import pytest

import release_notes.model as rnm


epoch = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)


def at(minutes: int) -> datetime.datetime:
    return epoch + datetime.timedelta(minutes=minutes)


class FakeSource:
    def __init__(
        self,
        pages: list[list[rnm.PullRequest]],
        labels: dict[int, tuple[str]]=None,
        existing_tags: set[str]=(),
    ):
        self.pages = pages
        self.labels_by_number = labels or {}
        self.existing_tags = set(existing_tags)
        self.requested_pages = 0
        self.label_requests = []
        self.created_releases = []

    def pull_request_pages(self, base, per_page):
        for page in self.pages:
            self.requested_pages += 1
            yield page

    def labels(self, number):
        self.label_requests.append(number)
        return tuple(self.labels_by_number.get(number, ()))

    def release_exists(self, tag_name):
        return tag_name in self.existing_tags

    def create_release(self, draft):
        self.created_releases.append(draft)
        return f'https://github.com/{draft.owner}/{draft.repository}/releases/tag/{draft.tag_name}'


@pytest.fixture
def pull_request():
    def create(
        number: int,
        merged: int | None,
        updated: int | None=None,
        title: str=None,
        author: str='octocat',
    ) -> rnm.PullRequest:
        '''
        merged / updated are minutes since epoch; updated defaults to merged (or 0 if unmerged)
        '''
        if updated is None:
            updated = merged if merged is not None else 0
        return rnm.PullRequest(
            number=number,
            title=title or f'change {number}',
            author=author,
            updated_at=at(updated),
            merged_at=at(merged) if merged is not None else None,
        )

    return create


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture(name='at')
def at_fixture():
    return at
