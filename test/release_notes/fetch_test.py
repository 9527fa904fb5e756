import pytest

import release_notes.cfg as rnc
import release_notes.fetch as examinee
import release_notes.model as rnm
import release_notes.ratelimit


def cfg(**kwargs) -> rnc.ReleaseNotesCfg:
    return rnc.ReleaseNotesCfg(**({
        'owner': 'acme',
        'repository': 'console-web',
        'last': 10,
        'current': 20,
        'token': 'secret',
        'label_lookup_interval': 0,
    } | kwargs))


def builder(source, **kwargs) -> examinee.ReleaseNoteBuilder:
    return examinee.ReleaseNoteBuilder(cfg=cfg(**kwargs), source=source)


def fake_clock_rate_limiter(clock, sleep):
    return release_notes.ratelimit.TokenBucket.from_interval(
        5.0,
        clock=clock,
        sleep=sleep,
    )


def test_only_pull_requests_between_boundaries_are_included(pull_request, fake_source):
    source = fake_source(pages=[
        [
            pull_request(30, merged=300), # merged after current
            pull_request(20, merged=200),
            pull_request(15, merged=150), # between
            pull_request(10, merged=100),
        ],
        [
            pull_request(5, merged=50, updated=110), # merged before last
            pull_request(4, merged=40),
        ],
    ])

    notes = builder(source).build()

    assert [entry.number for entry in notes.entries] == [15]
    assert notes.body == '   * change 15 (#15, @octocat)\n'
    assert source.requested_pages == 2


def test_entries_are_ordered_by_merge_time(pull_request, fake_source):
    source = fake_source(pages=[[
        pull_request(20, merged=200),
        pull_request(13, merged=120, updated=190),
        pull_request(17, merged=170),
        pull_request(12, merged=None, updated=160),
        pull_request(11, merged=110, updated=150),
        pull_request(14, merged=140),
        pull_request(10, merged=100),
    ]])

    notes = builder(source).build()

    numbers = [entry.number for entry in notes.entries]
    assert numbers == [11, 13, 14, 17]
    merge_times = [entry.merged_at for entry in notes.entries]
    assert merge_times == sorted(merge_times)


def test_current_defaults_to_most_recent_pull_request(pull_request, fake_source):
    source = fake_source(pages=[[
        pull_request(25, merged=250),
        pull_request(24, merged=240),
        pull_request(10, merged=100),
    ]])

    notes = builder(source, current=None).build()

    assert notes.markers.current == 25
    assert [entry.number for entry in notes.entries] == [24]
    assert notes.header == (
        'Release notes for PRs between #10 and #25 against branch "master":\n'
    )


def test_fetching_stops_after_last_boundary(pull_request, fake_source):
    source = fake_source(pages=[
        [pull_request(20, merged=200), pull_request(10, merged=100)],
        [pull_request(9, merged=90)],
        [pull_request(8, merged=80)],
    ])

    builder(source).build()

    assert source.requested_pages == 2


def test_missing_boundaries_raise(pull_request, fake_source):
    source = fake_source(pages=[[pull_request(20, merged=200), pull_request(15, merged=150)]])
    with pytest.raises(rnm.BoundaryNotFoundError, match='last PR #10'):
        builder(source).build()

    source = fake_source(pages=[[pull_request(15, merged=150), pull_request(10, merged=100)]])
    with pytest.raises(rnm.BoundaryNotFoundError, match='current PR #20'):
        builder(source).build()

    # unmerged boundary does not count
    source = fake_source(pages=[[
        pull_request(20, merged=200),
        pull_request(10, merged=None, updated=100),
    ]])
    with pytest.raises(rnm.BoundaryNotFoundError):
        builder(source).build()


def test_release_note_label_filter(pull_request, fake_source):
    source = fake_source(
        pages=[[
            pull_request(20, merged=200),
            pull_request(16, merged=160),
            pull_request(15, merged=150),
            pull_request(14, merged=140),
            pull_request(10, merged=100),
            pull_request(5, merged=50),
        ]],
        labels={
            14: ('release-note', 'kind/bug'),
            15: ('release-notes', 'release-note-none'),
            16: ('release-note',),
            5: ('release-note',),
        },
    )

    notes = builder(source, relnote_filter=True).build()

    assert [entry.number for entry in notes.entries] == [14, 16]
    # labels are only looked up for pull requests between boundaries
    assert source.label_requests == [14, 15, 16]


def test_label_lookups_are_rate_limited(pull_request, fake_source):
    now = 0.0
    sleeps = []

    def clock():
        return now

    def sleep(seconds):
        nonlocal now
        sleeps.append(seconds)
        now += seconds

    source = fake_source(
        pages=[[
            pull_request(20, merged=200),
            pull_request(13, merged=130),
            pull_request(12, merged=120),
            pull_request(11, merged=110),
            pull_request(10, merged=100),
        ]],
        labels={11: ('release-note',)},
    )
    notes = examinee.ReleaseNoteBuilder(
        cfg=cfg(relnote_filter=True),
        source=source,
        rate_limiter=fake_clock_rate_limiter(clock, sleep),
    ).build()

    assert [entry.number for entry in notes.entries] == [11]
    assert len(source.label_requests) == 3
    assert sum(sleeps) == pytest.approx(10.0)
    assert now == pytest.approx(10.0)


def test_default_rate_limiter_honours_interval(fake_source):
    rate_limited = builder(fake_source(pages=[]), label_lookup_interval=5.0)
    assert rate_limited.rate_limiter.rate == pytest.approx(0.2)

    assert builder(fake_source(pages=[])).rate_limiter is None
