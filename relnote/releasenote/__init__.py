"""Release note generation module."""

from .collector import (
    CollectResult,
    LabelSelector,
    MergedPR,
    MilestoneSelector,
    Skip,
    collect,
    milestone_title_for_release,
    resolve_milestone_number,
)
from .generator import (
    Filters,
    assemble,
    generate,
    ignore_labels_filter,
    render_markdown,
    resolve_title,
)
from .labels import DEFAULT_SCHEME, LabelScheme, canonical_category, section_order
from .merge import commit_for_merge, find_merge_event, is_merge_candidate
from .notes import Entry, Report, Section
from .thanks import fetch_org_members, is_special_thanks, parse_login_list, special_thanks_filter

__all__ = [
    "CollectResult",
    "LabelSelector",
    "MergedPR",
    "MilestoneSelector",
    "Skip",
    "collect",
    "milestone_title_for_release",
    "resolve_milestone_number",
    "Filters",
    "assemble",
    "generate",
    "ignore_labels_filter",
    "render_markdown",
    "resolve_title",
    "DEFAULT_SCHEME",
    "LabelScheme",
    "canonical_category",
    "section_order",
    "commit_for_merge",
    "find_merge_event",
    "is_merge_candidate",
    "Entry",
    "Report",
    "Section",
    "fetch_org_members",
    "is_special_thanks",
    "parse_login_list",
    "special_thanks_filter",
]
