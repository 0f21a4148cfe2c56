"""Utility modules."""

from app.utils.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConsultancyError,
    NotFoundError,
    ProviderError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ConsultancyError",
    "NotFoundError",
    "ProviderError",
    "ValidationError",
]
