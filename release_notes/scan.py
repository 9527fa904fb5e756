import collections.abc
import dataclasses
import enum
import logging

import release_notes.model as rnm

logger = logging.getLogger(__name__)


class ScanState(enum.Enum):
    SCANNING = 'scanning' # "last" pull request not yet seen
    BOUNDARY_FOUND = 'boundary_found' # "last" pull request seen, scan older pages until done
    DONE = 'done'


@dataclasses.dataclass
class PageStats:
    merged: int = 0
    unmerged: int = 0


class PullRequestScan:
    '''
    consumes pages of closed pull requests (most recently updated first) and collects merged
    pull requests, resolving boundary markers on the way.

    Once the "last" pull request was seen, the scan is done upon encountering the first merged
    pull request that was updated before the "last" pull request was merged (all remaining
    pull requests are older).
    '''
    def __init__(self, markers: rnm.BoundaryMarkers):
        self.markers = markers
        self.state = ScanState.SCANNING
        self.candidates: list[rnm.PullRequest] = []
        self.pages_seen = 0

    @property
    def done(self) -> bool:
        return self.state is ScanState.DONE

    def finish(self):
        self.state = ScanState.DONE

    def feed(self, page: collections.abc.Sequence[rnm.PullRequest]) -> PageStats:
        if self.done:
            raise RuntimeError('scan is already done')

        stats = PageStats()
        self.pages_seen += 1

        if not page:
            self.finish()
            return stats

        markers = self.markers
        if markers.current is None:
            markers.current = page[0].number
            logger.info(f'defaulting current PR to #{markers.current}')

        for pull_request in page:
            if not pull_request.merged:
                stats.unmerged += 1
                continue

            if pull_request.number == markers.last:
                markers.last_merged_at = pull_request.merged_at
                self.state = ScanState.BOUNDARY_FOUND
                logger.info(f' ... found last PR #{markers.last}')
                break

            if (
                self.state is ScanState.BOUNDARY_FOUND
                and pull_request.updated_at < markers.last_merged_at
            ):
                self.finish()
                break

            if pull_request.number == markers.current:
                markers.current_merged_at = pull_request.merged_at
                logger.info(f' ... found current PR #{markers.current}')
            else:
                self.candidates.append(pull_request)
            stats.merged += 1

        return stats
