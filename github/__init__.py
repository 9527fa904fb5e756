# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


def owner_and_repo(
    github_repository: str,
) -> tuple[str, str]:
    '''
    returns a two-tuple of `owner`, `repo`. github_repository is expected in the format
    `<owner>/<repo>`, as set in GITHUB_REPOSITORY for GitHub-Actions-runs. A leading host
    (with or without schema) is tolerated.
    '''
    if '://' in github_repository:
        github_repository = github_repository.split('://')[-1]

    parts = github_repository.strip('/').split('/')
    if len(parts) == 3:
        _, owner, repo = parts
    elif len(parts) == 2:
        owner, repo = parts
    else:
        raise ValueError(f'expected <owner>/<repo>, got {github_repository=}')

    return owner, repo
