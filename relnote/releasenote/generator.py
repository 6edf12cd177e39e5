"""Release note generation logic."""

import re
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from ..github.models import Issue
from .collector import MergedPR, ReleaseSelector, collect
from .labels import DEFAULT_SCHEME, LabelScheme, canonical_category, section_order
from .notes import Entry, Report, Section


LABEL_RELEASE_NOTE_NONE = "release-note-none"

# Merge commits titled "description (#123)" are used as the note as-is.
NOTE_RE = re.compile(r'^.*\(#[0-9]+\)$')


@dataclass(frozen=True)
class Filters:
    """Per-PR hooks applied while assembling notes.

    ignore: if it returns True, the PR is left out of the notes.
    special_thanks: if it returns True, the entry credits its author.
    """

    ignore: Optional[Callable[[Issue], bool]] = None
    special_thanks: Optional[Callable[[Issue], bool]] = None


def ignore_labels_filter(labels: Iterable[str] = (LABEL_RELEASE_NOTE_NONE,)) -> Callable[[Issue], bool]:
    """Build an ignore predicate for PRs carrying any of these labels."""
    labels = frozenset(labels)

    def ignore(issue: Issue) -> bool:
        return bool(labels.intersection(issue.label_names))

    return ignore


def resolve_title(pr: MergedPR) -> str:
    """Prefer the merge commit title when it cites the PR number."""
    first_line = pr.commit.first_line
    if NOTE_RE.match(first_line):
        return first_line
    return f"{pr.issue.title} (#{pr.issue.number})"


def assemble(prs: Iterable[MergedPR],
             filters: Optional[Filters] = None,
             scheme: LabelScheme = DEFAULT_SCHEME,
             org: str = "",
             repo: str = "",
             version: str = "",
             logger: Optional[logging.Logger] = None) -> Report:
    """Group merged PRs into ordered report sections.

    PRs whose category has no section name are dropped. Entries keep the
    order of ``prs``; sections are ordered by category weight, and sections
    of equal weight by first appearance.
    """
    logger = logger or logging.getLogger(__name__)
    filters = filters or Filters()

    sections: Dict[str, Section] = {}
    for pr in prs:
        issue = pr.issue
        if filters.ignore is not None and filters.ignore(issue):
            logger.debug(f"Ignoring #{issue.number}")
            continue

        category = canonical_category(issue.labels, scheme)
        name = scheme.section_name(category)
        if name is None:
            logger.debug(f"Dropping #{issue.number}: category {category!r} has no section")
            continue

        title = resolve_title(pr)
        if title != pr.commit.first_line:
            logger.debug(f"#{issue.number}: commit title {pr.commit.first_line!r} does not cite the PR")

        thanks = filters.special_thanks is not None and filters.special_thanks(issue)
        logger.debug(f"#{issue.number} -> {category!r} from {list(issue.label_names)}")

        if category not in sections:
            sections[category] = Section(name=name, category=category)
        sections[category].entries.append(Entry(
            issue_number=issue.number,
            title=title,
            html_url=issue.html_url,
            user=issue.user,
            milestone=issue.milestone,
            special_thanks=bool(thanks),
        ))

    ordered: List[Section] = [sections[c] for c in section_order(sections, scheme)]
    return Report(org=org, repo=repo, version=version, sections=ordered)


def generate(source,
             selector: ReleaseSelector,
             filters: Optional[Filters] = None,
             scheme: LabelScheme = DEFAULT_SCHEME,
             version: str = "",
             workers: int = 1,
             logger: Optional[logging.Logger] = None) -> Report:
    """Collect the merged PRs of a release and assemble its notes.

    Args:
        source: Issue source such as ``GitHubClient``
        selector: Milestone or label identifying the release
        filters: Ignore and special thanks hooks
        scheme: Label weighting and section names
        version: Release identifier recorded on the report
        workers: Threads used for per-issue lookups
        logger: Logger instance

    Returns:
        The release notes report, possibly without sections
    """
    logger = logger or logging.getLogger(__name__)
    result = collect(source, selector, workers=workers, logger=logger)
    return assemble(
        result.prs,
        filters,
        scheme,
        org=getattr(source, 'owner', ''),
        repo=getattr(source, 'repo', ''),
        version=version,
        logger=logger,
    )


def render_markdown(report: Report) -> str:
    return report.to_markdown()
