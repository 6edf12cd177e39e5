"""Decide which contributors get a special thanks note."""

import logging
from typing import AbstractSet, Callable, FrozenSet, Optional

from ..github.models import Issue


def parse_login_list(value: Optional[str]) -> FrozenSet[str]:
    """Parse a ``user1,user2`` list into a set of logins."""
    if not value:
        return frozenset()
    return frozenset(login.strip() for login in value.split(',') if login.strip())


def is_special_thanks(login: str,
                      org_members: AbstractSet[str],
                      exclude: AbstractSet[str],
                      force_include: AbstractSet[str]) -> bool:
    """Credit non-members who are not excluded, and anyone force-included."""
    if login in force_include:
        return True
    return login not in org_members and login not in exclude


def special_thanks_filter(org_members: AbstractSet[str],
                          exclude: AbstractSet[str] = frozenset(),
                          force_include: AbstractSet[str] = frozenset()) -> Callable[[Issue], bool]:
    """Build a ``Filters.special_thanks`` predicate over issue authors."""
    org_members = frozenset(org_members)
    exclude = frozenset(exclude)
    force_include = frozenset(force_include)

    def predicate(issue: Issue) -> bool:
        return is_special_thanks(issue.user.login, org_members, exclude, force_include)

    return predicate


def fetch_org_members(source, org: str, logger: Optional[logging.Logger] = None) -> FrozenSet[str]:
    """Collect every member login of an organization."""
    logger = logger or logging.getLogger(__name__)
    members = frozenset(source.list_org_members(org))
    logger.debug(f"Loaded {len(members)} members of {org}")
    return members
