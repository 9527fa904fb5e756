import logging

import release_notes.cfg as rnc
import release_notes.model as rnm
import release_notes.source as rnsrc

logger = logging.getLogger(__name__)


def release_draft(
    cfg: rnc.ReleaseNotesCfg,
    release_notes: rnm.ReleaseNotes,
) -> rnm.ReleaseDraft:
    if not cfg.wants_release:
        raise rnm.UsageError('both tag name and release name are required for publishing')

    return rnm.ReleaseDraft(
        owner=cfg.publish_owner,
        repository=cfg.publish_repository,
        tag_name=cfg.tag_name,
        name=cfg.release_name,
        body=release_notes.body,
        prerelease=cfg.prerelease,
        draft=cfg.draft,
    )


def publish(
    draft: rnm.ReleaseDraft,
    source: rnsrc.PullRequestSource,
) -> str:
    '''
    creates a release from the given draft and returns its url. source must refer to the target
    repository (draft.owner / draft.repository).

    raises `ReleaseExistsError` if there is already a release for draft's tag
    '''
    if source.release_exists(draft.tag_name):
        raise rnm.ReleaseExistsError(
            f'release for tag {draft.tag_name} already exists in {draft.owner}/{draft.repository}'
        )

    url = source.create_release(draft)
    logger.info(f'created release {draft.name} in {draft.owner}/{draft.repository}: {url}')
    return url
