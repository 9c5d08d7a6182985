"""Custom exceptions for the unified search service."""


class UnifiedSearchError(Exception):
    """Base exception for the unified search service."""

    pass


class ConfigurationError(UnifiedSearchError):
    """Exception raised for configuration errors."""

    pass


class SourceAPIError(UnifiedSearchError):
    """Exception raised when an upstream source returns a non-2xx reply."""

    def __init__(self, source: str, status_code: int, message: str, response_text: str = ""):
        self.source = source
        self.status_code = status_code
        self.message = message
        self.response_text = response_text
        super().__init__(f"{source} API error {status_code}: {message}")


class NetworkError(UnifiedSearchError):
    """Exception raised for network/connection errors and timeouts."""

    pass


class MalformedResponseError(UnifiedSearchError):
    """Exception raised when an upstream body is not in the expected shape."""

    pass


class QueryValidationError(UnifiedSearchError):
    """Exception raised when a search request fails input validation."""

    def __init__(self, message: str, query: str = ""):
        self.message = message
        self.query = query
        super().__init__(message)


class AuthenticationError(UnifiedSearchError):
    """Exception raised when the bearer API key is missing or wrong."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
