import logging
import operator

import github.pulls
import release_notes.cfg as rnc
import release_notes.model as rnm
import release_notes.ratelimit
import release_notes.scan as rns
import release_notes.source as rnsrc

logger = logging.getLogger(__name__)


class ReleaseNoteBuilder:
    def __init__(
        self,
        cfg: rnc.ReleaseNotesCfg,
        source: rnsrc.PullRequestSource,
        rate_limiter: release_notes.ratelimit.TokenBucket=None,
        page_size: int=github.pulls.max_page_size,
    ):
        '''
        rate_limiter: paces label lookups (only issued if cfg.relnote_filter is set). If not
                      passed, one lookup per cfg.label_lookup_interval is admitted (no limit if
                      interval is zero).
        '''
        self.cfg = cfg
        self.source = source
        self.page_size = page_size

        if not rate_limiter and cfg.label_lookup_interval > 0:
            rate_limiter = release_notes.ratelimit.TokenBucket.from_interval(
                cfg.label_lookup_interval,
            )
        self.rate_limiter = rate_limiter

    def merged_pull_requests(self) -> tuple[rnm.BoundaryMarkers, list[rnm.PullRequest]]:
        '''
        scans closed pull requests until the "last" boundary is passed, and returns the resolved
        boundary markers and all other merged pull requests seen, sorted by merge time.

        raises `BoundaryNotFoundError` if either boundary could not be resolved
        '''
        markers = rnm.BoundaryMarkers(
            last=self.cfg.last,
            current=self.cfg.current,
        )
        scan = rns.PullRequestScan(markers=markers)

        for page in self.source.pull_request_pages(
            base=self.cfg.base,
            per_page=self.page_size,
        ):
            stats = scan.feed(page)
            logger.info(f' ... {stats.merged} merged PRs, {stats.unmerged} unmerged PRs.')
            if scan.done:
                break
        else:
            scan.finish()

        if markers.last_merged_at is None:
            raise rnm.BoundaryNotFoundError(
                f'did not find merged last PR #{markers.last} against {self.cfg.base}'
            )
        if markers.current_merged_at is None:
            raise rnm.BoundaryNotFoundError(
                f'did not find merged current PR #{markers.current} against {self.cfg.base}'
            )
        if markers.current_merged_at <= markers.last_merged_at:
            logger.warning(
                f'current PR #{markers.current} was merged before last PR #{markers.last} - '
                'release notes will be empty'
            )

        return markers, sorted(scan.candidates, key=operator.attrgetter('merged_at'))

    def has_release_note_label(self, pull_request: rnm.PullRequest) -> bool:
        if self.rate_limiter:
            self.rate_limiter.acquire()
        labels = self.source.labels(pull_request.number)
        logger.debug(f'#{pull_request.number} has {labels=}')
        return rnm.RELEASE_NOTE_LABEL in labels

    def build(self) -> rnm.ReleaseNotes:
        markers, pull_requests = self.merged_pull_requests()

        entries = []
        for pull_request in pull_requests:
            if not markers.contains(pull_request):
                continue
            if self.cfg.relnote_filter and not self.has_release_note_label(pull_request):
                continue
            entries.append(rnm.NoteEntry.from_pull_request(pull_request))

        logger.info(
            f'{len(entries)} of {len(pull_requests)} merged PRs between #{markers.last} and '
            f'#{markers.current} will be included'
        )

        return rnm.ReleaseNotes(
            markers=markers,
            base=self.cfg.base,
            entries=tuple(entries),
        )
