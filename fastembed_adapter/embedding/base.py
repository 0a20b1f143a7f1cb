"""Embedding provider interface, result type and errors."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List

from exception.custom_exception import CustomException


class EmbeddingError(CustomException):
    """Base class for embedding failures."""


class ProviderError(EmbeddingError):
    """The embedding backend failed while embedding a batch."""


class DocumentError(EmbeddingError):
    """A document handed to the builder cannot be embedded."""


class ModelConstructionError(EmbeddingError):
    """The embedding backend could not be created (download, load, bad options)."""


class UnknownModelError(EmbeddingError):
    """Model identifier is not in the supported catalog."""


@dataclass
class Embedding:
    document: str
    vec: List[float] = field(default_factory=list)


class BaseEmbeddingModel(ABC):
    # Largest batch a single embed_texts call is expected to receive
    MAX_DOCUMENTS: int = 1024

    @abstractmethod
    def ndims(self) -> int:
        """Return vector dimension."""
        ...

    @abstractmethod
    async def embed_texts(self, documents: Iterable[str]) -> List[Embedding]:
        """Embed texts; one Embedding per input, same order."""
        ...

    async def embed_text(self, text: str) -> Embedding:
        out = await self.embed_texts([text])
        if not out:
            raise EmbeddingError("Embedding backend returned no result for a single text")
        return out[0]
