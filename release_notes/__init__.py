'''
Pull Request Release Notes

Collects release notes for all pull requests merged between two reference pull requests
("last" and "current") of a GitHub repository, and optionally publishes them as body of a
new GitHub release.

Pull requests are retrieved in pages of closed pull requests, most recently updated first.
Retrieval stops as soon as pull requests are older than the "last" reference pull request.
Optionally, only pull requests labelled `release-note` are included.
'''
