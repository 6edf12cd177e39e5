"""Release note report structures and their renderings."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..github.models import Milestone, User

SPECIAL_THANKS_PREFIX = "Special Thanks: "


class Entry(BaseModel):
    """One line of the release notes."""

    issue_number: int
    title: str
    html_url: str = ""
    user: User
    milestone: Optional[Milestone] = None
    special_thanks: bool = False

    def to_markdown(self) -> str:
        ret = " * " + self.title
        if self.special_thanks:
            ret += f"\n   - {SPECIAL_THANKS_PREFIX}@{self.user.login}"
        return ret


class Section(BaseModel):
    """Entries sharing one category, e.g. "New Features"."""

    name: str
    category: str
    entries: List[Entry] = Field(default_factory=list)

    def to_markdown(self) -> str:
        lines = [f"# {self.name}"]
        lines.extend(entry.to_markdown() for entry in self.entries)
        return '\n'.join(lines)


class Report(BaseModel):
    """All note sections for one release of a repository."""

    org: str = ""
    repo: str = ""
    version: str = ""
    sections: List[Section] = Field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return sum(len(s.entries) for s in self.sections)

    def section(self, name: str) -> Optional[Section]:
        for s in self.sections:
            if s.name == name:
                return s
        return None

    def to_markdown(self) -> str:
        """Render sections separated by blank lines; empty reports render as ''."""
        if not self.sections:
            return ""
        return '\n\n'.join(s.to_markdown() for s in self.sections) + '\n'

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')
