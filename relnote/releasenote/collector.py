"""Collect the merged pull requests of a release."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..errors import InvalidStateError, NotFoundError, TransportError
from ..github.models import Commit, Issue, IssueEvent
from .merge import commit_for_merge, find_merge_event, is_merge_candidate

NOT_A_PULL_REQUEST = "not a pull request"


class MergedPR(BaseModel):
    """A closed issue known to be a merged pull request, with its merge commit."""

    model_config = ConfigDict(frozen=True)

    issue: Issue
    event: IssueEvent
    commit: Commit


@dataclass(frozen=True)
class Skip:
    """A closed issue left out of the collection, and why."""

    number: int
    reason: str


@dataclass
class CollectResult:
    prs: List[MergedPR] = field(default_factory=list)
    skipped: List[Skip] = field(default_factory=list)


def milestone_title_for_release(release: str, suffix: str = " Release") -> str:
    """Milestones are named after releases, e.g. ``1.7`` -> ``1.7 Release``."""
    return f"{release}{suffix}"


def resolve_milestone_number(source, title: str) -> int:
    """Find the number of the milestone with exactly this title, in any state.

    Raises:
        NotFoundError: no milestone has this title
    """
    for milestone in source.list_milestones():
        if milestone.title == title:
            return milestone.number
    raise NotFoundError(f"no milestone with title {title!r} was found")


@dataclass(frozen=True)
class MilestoneSelector:
    """Select the closed issues of the milestone with this title."""

    title: str

    def list_issues(self, source, logger: logging.Logger) -> List[Issue]:
        number = resolve_milestone_number(source, self.title)
        logger.info(f"Milestone {self.title!r} is number {number}")
        return source.list_closed_issues(milestone=number)


@dataclass(frozen=True)
class LabelSelector:
    """Select the closed issues carrying this label."""

    name: str

    def list_issues(self, source, logger: logging.Logger) -> List[Issue]:
        logger.info(f"Listing closed issues labeled {self.name!r}")
        return source.list_closed_issues(labels=self.name)


ReleaseSelector = Union[MilestoneSelector, LabelSelector]


def _inspect(source, issue: Issue, logger: logging.Logger) -> Union[MergedPR, Skip]:
    labels = [label.name for label in issue.labels]
    logger.debug(f"#{issue.number} [{issue.state}] {issue.title} by {issue.user.login} {labels}")

    if not is_merge_candidate(issue):
        return Skip(issue.number, NOT_A_PULL_REQUEST)

    try:
        event = find_merge_event(source, issue)
        commit = commit_for_merge(source, event)
    except (NotFoundError, InvalidStateError, TransportError) as e:
        return Skip(issue.number, str(e))

    return MergedPR(issue=issue, event=event, commit=commit)


def collect(source, selector: ReleaseSelector, workers: int = 1,
            logger: Optional[logging.Logger] = None) -> CollectResult:
    """Collect merged pull requests for a release, in issue retrieval order.

    Failing to resolve the selector or to list issues raises. Problems with
    individual issues only skip that issue and are reported in the result.

    Args:
        source: Issue source such as ``GitHubClient``
        selector: Milestone or label identifying the release
        workers: Number of threads used for per-issue lookups
        logger: Logger instance

    Returns:
        Merged pull requests and the skipped issues
    """
    logger = logger or logging.getLogger(__name__)

    issues = selector.list_issues(source, logger)
    if not issues:
        return CollectResult()

    if workers > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(issues))) as executor:
            # map() yields in submission order.
            outcomes = list(executor.map(lambda i: _inspect(source, i, logger), issues))
    else:
        outcomes = [_inspect(source, issue, logger) for issue in issues]

    result = CollectResult()
    for outcome in outcomes:
        if isinstance(outcome, Skip):
            result.skipped.append(outcome)
            if outcome.reason == NOT_A_PULL_REQUEST:
                logger.debug(f"Skipping #{outcome.number}: {outcome.reason}")
            else:
                logger.warning(f"Skipping #{outcome.number}: {outcome.reason}")
        else:
            result.prs.append(outcome)

    logger.info(f"Collected {len(result.prs)} merged PRs, skipped {len(result.skipped)} issues")
    return result
