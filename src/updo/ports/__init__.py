"""Ports - interfaces/protocols for external dependencies."""

from .document_parser import DocumentParser
from .repository import Repository

__all__ = [
    "DocumentParser",
    "Repository",
]
