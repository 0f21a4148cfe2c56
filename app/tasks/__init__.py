"""Background tasks module."""

from app.tasks.embedding_tasks import EmbeddingQueue, embed_note, process_note_embedding

__all__ = ["EmbeddingQueue", "embed_note", "process_note_embedding"]
