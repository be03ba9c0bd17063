"""Adapters - I/O implementations of ports."""

from .markdown_parser import MarkdownItParser
from .git_cli import GitRepository, RepositoryError

__all__ = [
    "MarkdownItParser",
    "GitRepository",
    "RepositoryError",
]
