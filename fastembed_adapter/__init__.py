"""Local fastembed models behind a generic embedding-provider interface."""

from fastembed_adapter.embedding import (
    Client,
    Embedding,
    EmbeddingModel,
    EmbeddingsBuilder,
    FastembedModel,
    dimensions_of,
)

__all__ = ["Client", "Embedding", "EmbeddingModel", "EmbeddingsBuilder", "FastembedModel", "dimensions_of"]
__version__ = "0.1.0"
