"""Collect documents and embed them in batches the model accepts."""

from typing import Any, Generic, Iterable, List, Sequence, Tuple, TypeVar, Union

from logger.custom_logger import CustomLogger
from fastembed_adapter.embedding.base import BaseEmbeddingModel, DocumentError, Embedding, ProviderError

logger = CustomLogger().get_logger(__file__)

M = TypeVar("M", bound=BaseEmbeddingModel)


class EmbeddingsBuilder(Generic[M]):
    """Accumulates ``(item, texts)`` pairs; ``build()`` embeds all texts.

    Texts of every document are flattened and sent to the model in chunks of
    at most ``model.MAX_DOCUMENTS``. Results are regrouped per document in the
    order documents were added. A failing chunk aborts the whole build.
    """

    def __init__(self, model: M):
        self.model = model
        self._documents: List[Tuple[Any, List[str]]] = []

    def document(self, item: Any, texts: Union[str, Sequence[str]]) -> "EmbeddingsBuilder[M]":
        texts = [texts] if isinstance(texts, str) else list(texts)
        if not texts:
            raise DocumentError(f"Document {item!r} has no text to embed")
        self._documents.append((item, texts))
        return self

    def documents(self, pairs: Iterable[Tuple[Any, Union[str, Sequence[str]]]]) -> "EmbeddingsBuilder[M]":
        for item, texts in pairs:
            self.document(item, texts)
        return self

    def simple_document(self, doc_id: str, text: str) -> "EmbeddingsBuilder[M]":
        return self.document(doc_id, text)

    async def build(self) -> List[Tuple[Any, List[Embedding]]]:
        owners: List[int] = []
        texts: List[str] = []
        for i, (_, doc_texts) in enumerate(self._documents):
            owners.extend([i] * len(doc_texts))
            texts.extend(doc_texts)

        size = max(1, self.model.MAX_DOCUMENTS)
        grouped: List[List[Embedding]] = [[] for _ in self._documents]
        for start in range(0, len(texts), size):
            batch = texts[start:start + size]
            embeddings = await self.model.embed_texts(batch)
            if len(embeddings) != len(batch):
                raise ProviderError(f"Model returned {len(embeddings)} embeddings for {len(batch)} texts")
            for owner, emb in zip(owners[start:start + size], embeddings):
                grouped[owner].append(emb)

        logger.info(
            "Embeddings built",
            n_documents=len(self._documents),
            n_texts=len(texts),
            n_batches=(len(texts) + size - 1) // size,
        )
        return [(item, grouped[i]) for i, (item, _) in enumerate(self._documents)]
