"""Embedding client for the remote embedding provider."""

import logging

import httpx
import numpy as np

from app.config import settings
from app.utils.exceptions import ConfigurationError, ProviderError, ValidationError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Converts text to fixed-length vectors using an OpenAI-compatible API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        dimensions: int | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the embedding client.

        Args:
            api_key: Provider credential (falls back to OPENAI_API_KEY)
            model: Embedding model name
            dimensions: Expected vector length for the model
            base_url: Provider API base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests)

        Raises:
            ConfigurationError: If no credential is available
        """
        self.api_key = api_key or settings.openai_api_key
        if not self.api_key:
            raise ConfigurationError(
                "No embedding provider credential configured (set OPENAI_API_KEY)"
            )

        self.model = model or settings.embedding_model
        self.dimensions = dimensions or settings.embedding_dimensions
        self.base_url = (base_url or settings.embedding_base_url).rstrip("/")
        self.timeout = timeout or settings.embedding_timeout_seconds
        self._transport = transport

        logger.info(
            f"Embedding client ready: model={self.model} dimensions={self.dimensions}"
        )

    def _get_headers(self) -> dict[str, str]:
        """Get request headers including auth."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def embed(self, text: str) -> list[float]:
        """
        Generate an embedding for text.

        Args:
            text: Text to embed

        Returns:
            Vector of exactly `dimensions` floats

        Raises:
            ValidationError: If text is empty
            ProviderError: If the provider call fails, times out, or returns
                a malformed vector
        """
        if not text or not text.strip():
            raise ValidationError("Text to embed must not be empty")

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/embeddings",
                    headers=self._get_headers(),
                    json={"model": self.model, "input": text},
                )
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                logger.error(f"Embedding request timed out after {self.timeout}s")
                raise ProviderError(
                    f"Embedding request timed out after {self.timeout}s"
                ) from e
            except httpx.HTTPStatusError as e:
                # Provide a more descriptive error if possible
                try:
                    error_msg = e.response.json().get("error", {}).get("message")
                except (ValueError, AttributeError):
                    error_msg = None
                error_msg = error_msg or f"HTTP {e.response.status_code}"
                logger.error(f"Embedding provider returned an error: {error_msg}")
                raise ProviderError(f"Embedding provider error: {error_msg}") from e
            except httpx.HTTPError as e:
                logger.error(f"Embedding request failed: {e}")
                raise ProviderError(f"Embedding request failed: {e}") from e
            except ValueError as e:
                raise ProviderError("Embedding provider returned invalid JSON") from e

        return self._parse_embedding(data)

    def _parse_embedding(self, data: object) -> list[float]:
        """Extract and check the vector from a provider response body."""
        try:
            raw = data["data"][0]["embedding"]  # type: ignore[index]
            embedding = np.asarray(raw, dtype=np.float32)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError("Embedding provider returned a malformed payload") from e

        if embedding.ndim != 1 or embedding.shape[0] != self.dimensions:
            raise ProviderError(
                f"Expected embedding of length {self.dimensions}, "
                f"got shape {embedding.shape}"
            )
        if not np.all(np.isfinite(embedding)):
            raise ProviderError("Embedding contains non-finite values")
        if not np.any(embedding):
            raise ProviderError("Embedding provider returned a zero vector")

        return embedding.tolist()


_embedding_client: EmbeddingClient | None = None


def init_embedding_client(**kwargs) -> EmbeddingClient:
    """Build the process-wide embedding client. Call once at startup."""
    global _embedding_client
    _embedding_client = EmbeddingClient(**kwargs)
    return _embedding_client


def get_embedding_client() -> EmbeddingClient:
    if _embedding_client is None:
        raise ConfigurationError("Embedding client not initialized")
    return _embedding_client


def reset_embedding_client() -> None:
    global _embedding_client
    _embedding_client = None


def is_embedding_client_ready() -> bool:
    return _embedding_client is not None
