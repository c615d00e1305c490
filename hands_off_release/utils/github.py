"""Contains utility functions for GitHub ref paths."""

from hands_off_release.utils.constants import TAG_REF_PREFIX


def full_tag_ref(environment: str) -> str:
    """Returns the fully qualified tag ref for an environment, e.g. refs/tags/deployment."""
    return f"{TAG_REF_PREFIX}{environment}"


def strip_refs_prefix(ref: str) -> str:
    """Strips the leading 'refs/' from a ref, as the git refs endpoints expect."""
    return ref.removeprefix("refs/")
