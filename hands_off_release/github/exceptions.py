"""Contains exceptions raised by remote repository clients."""


class GitHubClientError(Exception):
    """Raised when a GitHub API call fails for any reason."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with the HTTP status code, when one was received."""
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(GitHubClientError):
    """Raised when GitHub answers with a "Not Found" error payload."""

    pass
