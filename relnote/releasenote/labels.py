"""Pick one canonical category per pull request from its labels."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Union

from ..github.models import Label

LABEL_PREFIX = "Type: "
DEFAULT_CATEGORY = "Bug"

# Higher weight wins when a PR carries several type labels.
SORT_WEIGHT = {
    "Dependencies": 70,
    "API Change": 60,
    "Behavior Change": 50,
    "Feature": 40,
    "Performance": 30,
    "Bug": 20,
    "Documentation": 10,
    "Testing": 0,
    "Internal Cleanup": 0,
}

# Categories missing here are left out of the notes.
SECTION_NAMES = {
    "Dependencies": "Dependencies",
    "API Change": "API Changes",
    "Behavior Change": "Behavior Changes",
    "Feature": "New Features",
    "Performance": "Performance Improvements",
    "Bug": "Bug Fixes",
    "Documentation": "Documentation",
}


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class LabelScheme:
    """Weights, section names and defaults for one labeling convention."""

    prefix: str = LABEL_PREFIX
    weights: Mapping[str, int] = field(default_factory=lambda: SORT_WEIGHT)
    section_names: Mapping[str, str] = field(default_factory=lambda: SECTION_NAMES)
    default_category: str = DEFAULT_CATEGORY

    def __post_init__(self):
        object.__setattr__(self, 'weights', _frozen(self.weights))
        object.__setattr__(self, 'section_names', _frozen(self.section_names))

    def weight(self, category: str) -> int:
        return self.weights.get(category, 0)

    def section_name(self, category: str) -> Optional[str]:
        return self.section_names.get(category)


DEFAULT_SCHEME = LabelScheme()


def strip_prefix(name: str, prefix: str) -> str:
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def section_order(categories: Iterable[str], scheme: LabelScheme = DEFAULT_SCHEME) -> List[str]:
    """Order categories by descending weight.

    The sort is stable, so categories of equal weight keep their input order.
    """
    return sorted(categories, key=lambda c: -scheme.weight(c))


def canonical_category(labels: Iterable[Union[Label, str]],
                       scheme: LabelScheme = DEFAULT_SCHEME) -> str:
    """Return the most weighted category among the labels.

    Falls back to the scheme's default category when there are no labels or
    the winner is not a known category. Never raises.
    """
    names = [
        strip_prefix(l.name if isinstance(l, Label) else l, scheme.prefix)
        for l in labels
    ]
    if not names:
        return scheme.default_category

    # Known categories beat unrecognized labels of equal weight.
    top = sorted(names, key=lambda c: (-scheme.weight(c), c not in scheme.weights))[0]
    if top not in scheme.weights:
        return scheme.default_category
    return top
