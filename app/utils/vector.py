"""Vector serialization utilities for sqlite-vec."""

import numpy as np

from app.utils.exceptions import ValidationError


def as_float32(vector: np.ndarray | list[float]) -> np.ndarray:
    """
    Coerce a vector to a one-dimensional float32 array.

    Raises:
        ValidationError: If the vector is empty, not 1-D, has non-finite values,
            or has zero norm (cosine distance is undefined for it)
    """
    array = np.asarray(vector, dtype=np.float32)
    if array.ndim != 1 or array.size == 0:
        raise ValidationError("Embedding must be a non-empty one-dimensional vector")
    if not np.all(np.isfinite(array)):
        raise ValidationError("Embedding contains non-finite values")
    if not np.any(array):
        raise ValidationError("Embedding must not be the zero vector")
    return array


def serialize_vector(vector: np.ndarray | list[float]) -> bytes:
    """
    Serialize a vector to bytes for storage in SQLite.

    Args:
        vector: Numpy array or list of floats

    Returns:
        Bytes representation of vector as float32
    """
    return as_float32(vector).tobytes()


def deserialize_vector(blob: bytes) -> list[float]:
    """Inverse of serialize_vector."""
    return np.frombuffer(blob, dtype=np.float32).tolist()
