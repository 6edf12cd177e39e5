"""GitHub API access."""

from .client import GitHubClient
from .models import Commit, Issue, IssueEvent, Label, Milestone, User

__all__ = [
    "GitHubClient",
    "Commit",
    "Issue",
    "IssueEvent",
    "Label",
    "Milestone",
    "User",
]
