"""
Utilities Module
================

Collaborator functions the descriptor core relies on:
- Directory enumeration (dist-info discovery)
- Local git identity (authors fallback)
"""

from .fs import find_folders
from .git import get_git_author

__all__ = [
    "find_folders",
    "get_git_author",
]
