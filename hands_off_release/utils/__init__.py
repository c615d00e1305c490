"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_TIMEOUT_SECONDS,
    NOT_FOUND_MESSAGE,
    TAG_REF_PREFIX,
)
from .github import full_tag_ref, strip_refs_prefix

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "NOT_FOUND_MESSAGE",
    "TAG_REF_PREFIX",
    "full_tag_ref",
    "strip_refs_prefix",
]
