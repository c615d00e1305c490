"""Shared constants used across the application."""

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API URL. Override for GitHub Enterprise Server."""

DEFAULT_TIMEOUT_SECONDS = 30.0
"""Default upper bound, in seconds, for a single GitHub API call."""

NOT_FOUND_MESSAGE = "Not Found"
"""Message GitHub puts in the error payload when a ref does not exist."""

# Ref Constants
# -------------

TAG_REF_PREFIX = "refs/tags/"
"""Prefix of a fully qualified tag ref."""
