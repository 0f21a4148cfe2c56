"""Custom exception classes."""

from fastapi import HTTPException, status


class ConsultancyError(Exception):
    """Base exception for the consultancy backend."""

    pass


class ConfigurationError(ConsultancyError):
    """Raised when required configuration is missing or invalid.

    Fatal at startup; never mapped to a per-request response.
    """

    def __init__(self, detail: str = "Invalid configuration"):
        self.detail = detail
        super().__init__(detail)


class AuthenticationError(ConsultancyError):
    """Raised when authentication fails."""

    def __init__(self, detail: str = "Could not validate credentials"):
        self.detail = detail
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=self.detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(ConsultancyError):
    """Raised when a resource is not found."""

    def __init__(self, resource: str = "Resource", detail: str | None = None):
        self.detail = detail or f"{resource} not found"
        super().__init__(self.detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=self.detail,
        )


class ValidationError(ConsultancyError):
    """Raised when input is rejected before any work is done."""

    def __init__(self, detail: str = "Invalid input"):
        self.detail = detail
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=self.detail,
        )


class ProviderError(ConsultancyError):
    """Raised when the embedding provider call fails or times out."""

    public_detail = "Search temporarily unavailable"

    def __init__(self, detail: str = "Embedding provider error"):
        self.detail = detail
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException without leaking provider internals."""
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=self.public_detail,
        )
