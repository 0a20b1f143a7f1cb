"""Embedding abstraction; fastembed implementation, model registry, batch builder."""

from fastembed_adapter.embedding.base import (
    BaseEmbeddingModel,
    DocumentError,
    Embedding,
    EmbeddingError,
    ModelConstructionError,
    ProviderError,
    UnknownModelError,
)
from fastembed_adapter.embedding.builder import EmbeddingsBuilder
from fastembed_adapter.embedding.factory import get_embedding
from fastembed_adapter.embedding.fastembed_embedding import (
    Client,
    EmbeddingModel,
    InitOptions,
    InitOptionsUserDefined,
    ModelInfo,
)
from fastembed_adapter.embedding.models import (
    FastembedModel,
    UserDefinedEmbeddingModel,
    dimensions_of,
    parse_model,
    runtime_source,
)

__all__ = [
    "BaseEmbeddingModel",
    "Client",
    "DocumentError",
    "Embedding",
    "EmbeddingError",
    "EmbeddingModel",
    "EmbeddingsBuilder",
    "FastembedModel",
    "InitOptions",
    "InitOptionsUserDefined",
    "ModelConstructionError",
    "ModelInfo",
    "ProviderError",
    "UnknownModelError",
    "UserDefinedEmbeddingModel",
    "dimensions_of",
    "get_embedding",
    "parse_model",
    "runtime_source",
]
