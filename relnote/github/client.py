"""GitHub REST API client built on requests."""

import logging
import threading
from typing import Any, Callable, Dict, Iterator, List, Optional

import requests

from ..config import Config
from ..errors import TransportError
from .models import Commit, Issue, IssueEvent, Milestone

PER_PAGE = 100


class GitHubClient:
    """Read-only wrapper for the GitHub issues, commits and orgs APIs."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None,
                 session_factory: Callable[[], requests.Session] = requests.Session):
        """Initialize GitHub client.

        Args:
            config: Configuration object containing GitHub settings
            logger: Logger instance
            session_factory: Builds the HTTP session, one per calling thread
        """
        if not config.owner or not config.repo:
            raise ValueError("owner and repo are required")

        self.config = config
        self.owner = config.owner
        self.repo = config.repo
        self.logger = logger or logging.getLogger(__name__)

        self._session_factory = session_factory
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The session of the calling thread, created on first use."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            session.headers.update({
                'Accept': 'application/vnd.github.v3+json',
                'User-Agent': 'relnote',
            })
            # Without a token requests are unauthenticated and heavily rate limited.
            if self.config.github_token:
                session.headers['Authorization'] = f"token {self.config.github_token}"
            self._local.session = session
        return session

    def _url(self, path: str) -> str:
        return f"{self.config.github_api_url}{path}"

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            resp = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        if not resp.ok:
            raise TransportError(
                f"GET {url} returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        return resp

    def _get_json(self, path: str) -> Any:
        resp = self._get(self._url(path))
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"invalid JSON from {path}: {e}") from e

    def _paginate(self, path: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        """Yield items from every page of a listing, following Link headers."""
        url = self._url(path)
        params = dict(params or {}, per_page=PER_PAGE)
        page = 0
        while url:
            resp = self._get(url, params=params)
            try:
                items = resp.json()
            except ValueError as e:
                raise TransportError(f"invalid JSON from {url}: {e}") from e
            page += 1
            self.logger.debug(f"{path}: page {page} returned {len(items)} items")
            yield from items
            # The next link already carries the query string.
            url = resp.links.get('next', {}).get('url')
            params = None

    def _repo_path(self, suffix: str) -> str:
        return f"/repos/{self.owner}/{self.repo}{suffix}"

    def list_milestones(self) -> List[Milestone]:
        """List milestones in any state."""
        milestones = [
            Milestone.from_api(m)
            for m in self._paginate(self._repo_path("/milestones"), {'state': 'all'})
        ]
        self.logger.info(f"Found {len(milestones)} milestones in {self.owner}/{self.repo}")
        return milestones

    def list_closed_issues(self, milestone: Optional[int] = None,
                           labels: Optional[str] = None) -> List[Issue]:
        """List closed issues and pull requests for a milestone number or label.

        Args:
            milestone: Milestone number to filter on
            labels: Comma separated label names to filter on

        Returns:
            Issues in API order
        """
        params: Dict[str, Any] = {'state': 'closed'}
        if milestone is not None:
            params['milestone'] = str(milestone)
        if labels:
            params['labels'] = labels

        issues = [Issue.from_api(i) for i in self._paginate(self._repo_path("/issues"), params)]
        self.logger.info(f"Found {len(issues)} closed issues")
        return issues

    def list_issue_events(self, number: int) -> List[IssueEvent]:
        """List the event history of an issue or pull request."""
        return [
            IssueEvent.from_api(e)
            for e in self._paginate(self._repo_path(f"/issues/{number}/events"))
        ]

    def get_commit(self, sha: str) -> Commit:
        """Get a commit by SHA."""
        return Commit.from_api(self._get_json(self._repo_path(f"/commits/{sha}")))

    def list_org_members(self, org: str) -> List[str]:
        """List the logins of every member of an organization."""
        logins = [m.get('login') or '' for m in self._paginate(f"/orgs/{org}/members")]
        self.logger.info(f"{len(logins)} members in org {org}")
        return logins
