"""Custom exceptions for mamma-me."""


class MammaMeError(Exception):
    """Base exception for mamma-me."""

    pass


class DatasetLoadError(MammaMeError):
    """Raised when the food or synonym dataset cannot be read or parsed."""

    pass


class DatasetNotReadyError(MammaMeError):
    """Raised when searching before the dataset has finished loading."""

    pass


class AuthenticationError(MammaMeError):
    """Raised when the advisory API key is invalid or missing."""

    pass


class RateLimitError(MammaMeError):
    """Raised when the advisory API rate limit is exceeded."""

    pass


class AdvisoryError(MammaMeError):
    """Raised when the advisory provider cannot produce a response."""

    pass
