"""GitHub API wrapper for open pull request listings."""

from __future__ import annotations

import logging

from github import Auth, Github, GithubException

from template_status.models.template import PullRequest

logger = logging.getLogger(__name__)


class PullRequestLookupError(Exception):
    """Open pull requests of a repository could not be listed."""


class GitHubPullRequestLister:
    """Lists open PRs through PyGithub.

    The client is created lazily so commands that never touch the API do
    not need a token.
    """

    def __init__(self, token: str | None = None, per_page: int = 100):
        self.token = token
        self.per_page = per_page
        self._gh: Github | None = None

    @property
    def gh(self) -> Github:
        if self._gh is None:
            auth = Auth.Token(self.token) if self.token else None
            self._gh = Github(auth=auth, per_page=self.per_page)
        return self._gh

    def list_open(self, full_name: str) -> list[PullRequest]:
        """Return open PRs of ``org/repo`` in the order the API returns them."""
        try:
            repo = self.gh.get_repo(full_name)
            return [
                PullRequest(
                    number=pr.number,
                    title=pr.title or "",
                    author=pr.user.login if pr.user else "",
                    url=pr.html_url or "",
                )
                for pr in repo.get_pulls(state="open")
            ]
        # requests' network errors derive from OSError
        except (GithubException, OSError) as e:
            raise PullRequestLookupError(f"Cannot list open PRs of {full_name}: {e}") from e
