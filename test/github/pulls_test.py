import pytest

import github.pulls as examinee


class FakeRepository:
    _api = 'https://api.github.com/repos/acme/widgets'

    def __init__(self, items):
        self.items = items
        self.iter_calls = []
        self.consumed = 0

    def _build_url(self, *args, base_url):
        return '/'.join((base_url, *args))

    def _iter(self, count, url, cls, params=None):
        self.iter_calls.append((count, url, cls, params))
        return self._items()

    def _items(self):
        for item in self.items:
            self.consumed += 1
            yield item


def test_list_pulls_parameters():
    repository = FakeRepository(items=[])

    pulls = examinee.list_pulls(repository=repository, base='release-v1')

    assert list(pulls) == []

    (count, url, _, params), = repository.iter_calls
    assert count == -1
    assert url == 'https://api.github.com/repos/acme/widgets/pulls'
    assert params == {
        'state': 'closed',
        'base': 'release-v1',
        'sort': 'updated',
        'direction': 'desc',
        'per_page': 100,
    }


def test_iter_pull_request_pages():
    repository = FakeRepository(items=list(range(7)))

    pages = examinee.iter_pull_request_pages(
        repository=repository,
        base='master',
        per_page=3,
    )

    assert next(pages) == [0, 1, 2]
    # pages are retrieved lazily
    assert repository.consumed == 3
    assert list(pages) == [[3, 4, 5], [6]]


def test_iter_pull_request_pages_rejects_invalid_page_size():
    repository = FakeRepository(items=[])

    for per_page in (0, 101):
        with pytest.raises(ValueError):
            next(examinee.iter_pull_request_pages(repository, base='master', per_page=per_page))


def test_label_names():
    class Label:
        def __init__(self, name):
            self.name = name

    repository = FakeRepository(items=[Label('release-note'), Label('kind/bug')])

    assert examinee.label_names(repository, 42) == ('release-note', 'kind/bug')
    (_, url, _, _), = repository.iter_calls
    assert url == 'https://api.github.com/repos/acme/widgets/issues/42/labels'
