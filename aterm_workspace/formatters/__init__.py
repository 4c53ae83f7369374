"""Formatting utilities for aterm-workspace.

This package provides formatting functions for CLI output:
- date: Relative and absolute time formatting
- status: Working copy status formatting
"""

# Date formatters
from .date import format_relative_time, format_timestamp

# Status formatters
from .status import (
    format_change,
    format_tracking,
    format_branch_line,
    section_style,
)

__all__ = [
    # Date
    "format_relative_time",
    "format_timestamp",
    # Status
    "format_change",
    "format_tracking",
    "format_branch_line",
    "section_style",
]
