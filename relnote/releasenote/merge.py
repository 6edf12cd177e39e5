"""Decide whether a closed issue is a merged pull request."""

from ..errors import InvalidStateError, NotFoundError
from ..github.models import Commit, Issue, IssueEvent

MERGED_EVENT = "merged"


def is_merge_candidate(issue: Issue) -> bool:
    """Only issues carrying a pull request link can have been merged."""
    return issue.pull_request is not None


def find_merge_event(source, issue: Issue) -> IssueEvent:
    """Return the first ``merged`` event of an issue.

    Raises:
        NotFoundError: the pull request was closed without merging
    """
    for event in source.list_issue_events(issue.number):
        if event.event == MERGED_EVENT:
            return event
    raise NotFoundError(f"merge event not found for #{issue.number}")


def commit_for_merge(source, event: IssueEvent) -> Commit:
    """Fetch the commit created by a merge event."""
    if event.event != MERGED_EVENT:
        raise InvalidStateError(f"not a merge event: {event.event!r}")
    if not event.commit_id:
        raise InvalidStateError("merge event has no commit id")
    return source.get_commit(event.commit_id)
