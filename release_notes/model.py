import dataclasses
import datetime

import github3.pulls


RELEASE_NOTE_LABEL = 'release-note'


class ReleaseNotesError(RuntimeError):
    pass


class UsageError(ReleaseNotesError, ValueError):
    '''
    raised for missing or invalid configuration. Always raised before any request is issued.
    '''
    pass


class TransportError(ReleaseNotesError):
    '''
    raised if a request against the GitHub-API failed
    '''
    pass


class BoundaryNotFoundError(ReleaseNotesError):
    pass


class ReleaseExistsError(ReleaseNotesError):
    pass


@dataclasses.dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    author: str
    updated_at: datetime.datetime
    merged_at: datetime.datetime | None = None

    @property
    def merged(self) -> bool:
        return self.merged_at is not None

    @staticmethod
    def from_github(
        pull_request: github3.pulls.ShortPullRequest,
    ) -> 'PullRequest':
        return PullRequest(
            number=pull_request.number,
            title=pull_request.title,
            author=pull_request.user.login,
            updated_at=pull_request.updated_at,
            merged_at=pull_request.merged_at,
        )


@dataclasses.dataclass
class BoundaryMarkers:
    '''
    reference pull request numbers delimiting the release. Merge timestamps are resolved while
    scanning pull requests.
    '''
    last: int
    current: int | None = None
    last_merged_at: datetime.datetime | None = None
    current_merged_at: datetime.datetime | None = None

    @property
    def resolved(self) -> bool:
        return self.last_merged_at is not None and self.current_merged_at is not None

    def contains(self, pull_request: PullRequest) -> bool:
        '''
        returns whether given pull request was merged strictly between the two boundaries
        '''
        if not self.resolved:
            raise BoundaryNotFoundError(f'boundaries not resolved: {self}')
        if not pull_request.merged:
            return False

        return self.last_merged_at < pull_request.merged_at < self.current_merged_at


@dataclasses.dataclass(frozen=True)
class NoteEntry:
    number: int
    title: str
    author: str
    merged_at: datetime.datetime

    @property
    def line(self) -> str:
        return f'   * {self.title} (#{self.number}, @{self.author})\n'

    @staticmethod
    def from_pull_request(pull_request: PullRequest) -> 'NoteEntry':
        return NoteEntry(
            number=pull_request.number,
            title=pull_request.title,
            author=pull_request.author,
            merged_at=pull_request.merged_at,
        )


@dataclasses.dataclass(frozen=True)
class ReleaseNotes:
    markers: BoundaryMarkers
    base: str
    entries: tuple[NoteEntry, ...] = ()

    @property
    def header(self) -> str:
        return (
            f'Release notes for PRs between #{self.markers.last} and #{self.markers.current} '
            f'against branch "{self.base}":\n'
        )

    @property
    def body(self) -> str:
        return ''.join(entry.line for entry in self.entries)


@dataclasses.dataclass(frozen=True)
class ReleaseDraft:
    owner: str
    repository: str
    tag_name: str
    name: str
    body: str
    prerelease: bool = False
    draft: bool = False
