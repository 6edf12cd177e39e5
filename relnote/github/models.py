"""Immutable views of the GitHub API records used by the note pipeline."""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the API, or None."""
    if not value:
        return None
    return date_parser.isoparse(value)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Label(_Record):
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Label":
        return cls(name=data.get('name') or '')


class User(_Record):
    """A GitHub user, used for display and contributor classification."""

    login: str
    html_url: str = ""
    avatar_url: str = ""

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "User":
        data = data or {}
        return cls(
            login=data.get('login') or '',
            html_url=data.get('html_url') or '',
            avatar_url=data.get('avatar_url') or '',
        )


class Milestone(_Record):
    number: int
    title: str
    state: str = "open"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Milestone":
        return cls(
            number=data['number'],
            title=data.get('title') or '',
            state=data.get('state') or 'open',
        )


class Issue(_Record):
    """A closed issue or pull request as returned by the issues API.

    ``pull_request`` holds the API's pull-request link block; it is None
    for plain issues.
    """

    number: int
    title: str
    state: str = "closed"
    html_url: str = ""
    body: Optional[str] = None
    user: User
    labels: Tuple[Label, ...] = ()
    pull_request: Optional[Dict[str, Any]] = None
    milestone: Optional[Milestone] = None
    closed_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Issue":
        milestone = data.get('milestone')
        return cls(
            number=data['number'],
            title=data.get('title') or '',
            state=data.get('state') or 'closed',
            html_url=data.get('html_url') or '',
            body=data.get('body'),
            user=User.from_api(data.get('user')),
            labels=tuple(Label.from_api(l) for l in data.get('labels') or []),
            pull_request=data.get('pull_request'),
            milestone=Milestone.from_api(milestone) if milestone else None,
            closed_at=parse_timestamp(data.get('closed_at')),
        )

    @property
    def label_names(self) -> Tuple[str, ...]:
        return tuple(label.name for label in self.labels)


class IssueEvent(_Record):
    event: str
    commit_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "IssueEvent":
        return cls(
            event=data.get('event') or '',
            commit_id=data.get('commit_id'),
            created_at=parse_timestamp(data.get('created_at')),
        )


class Commit(_Record):
    sha: str
    message: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Commit":
        return cls(
            sha=data.get('sha') or '',
            message=(data.get('commit') or {}).get('message') or '',
        )

    @property
    def first_line(self) -> str:
        return self.message.split('\n', 1)[0]
