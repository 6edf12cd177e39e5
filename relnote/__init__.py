"""Release note generator for GitHub milestones."""

__version__ = "0.3.0"
