"""Local embeddings via fastembed (ONNX runtime), exposed as a BaseEmbeddingModel."""

import asyncio
import copy
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

import numpy as np
from fastembed import TextEmbedding
from fastembed.common.model_description import ModelSource, PoolingType
from huggingface_hub.utils import are_progress_bars_disabled, disable_progress_bars, enable_progress_bars

from logger.custom_logger import CustomLogger
from fastembed_adapter.embedding.base import (
    BaseEmbeddingModel,
    Embedding,
    ModelConstructionError,
    ProviderError,
)
from fastembed_adapter.embedding.builder import EmbeddingsBuilder
from fastembed_adapter.embedding.models import (
    FastembedModel,
    UserDefinedEmbeddingModel,
    dimensions_of,
    runtime_source,
)

logger = CustomLogger().get_logger(__file__)


@dataclass
class InitOptionsUserDefined:
    cache_dir: Optional[str] = None
    threads: Optional[int] = None
    batch_size: int = 256


@dataclass
class InitOptions(InitOptionsUserDefined):
    model: FastembedModel = FastembedModel.BGESmallENV15
    show_download_progress: bool = True


@dataclass
class ModelInfo:
    """Label for a user-defined model: the identifier it is reported as."""

    model: FastembedModel
    description: str = ""


def _runtime_kwargs(options: InitOptionsUserDefined) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    if options.cache_dir is not None:
        kwargs["cache_dir"] = str(options.cache_dir)
    if options.threads is not None:
        kwargs["threads"] = options.threads
    return kwargs


@contextmanager
def _download_progress(show: bool) -> Iterator[None]:
    """Set huggingface_hub progress bars for one load, then put the previous setting back."""
    was_disabled = are_progress_bars_disabled()
    if show == was_disabled:
        if show:
            enable_progress_bars()
        else:
            disable_progress_bars()
    try:
        yield
    finally:
        if show == was_disabled:
            if was_disabled:
                disable_progress_bars()
            else:
                enable_progress_bars()


def _is_registered(model_name: str) -> bool:
    name = model_name.lower()
    return any(str(m.get("model", "")).lower() == name for m in TextEmbedding.list_supported_models())


def _register_user_defined(user_defined_model: UserDefinedEmbeddingModel, ndims: int) -> None:
    if _is_registered(user_defined_model.model_name):
        return
    hf, url = user_defined_model.hf, user_defined_model.url
    if hf is None and url is None and user_defined_model.model_path is not None:
        # Loaded from model_path; the runtime still wants a source on record but never fetches it
        hf = user_defined_model.model_name
    TextEmbedding.add_custom_model(
        model=user_defined_model.model_name,
        pooling=PoolingType[user_defined_model.pooling.upper()],
        normalization=user_defined_model.normalization,
        sources=ModelSource(hf=hf, url=url),
        dim=ndims,
        model_file=user_defined_model.model_file,
        additional_files=list(user_defined_model.additional_files),
    )
    logger.info("Registered user-defined fastembed model", model=user_defined_model.model_name, ndims=ndims)


class EmbeddingModel(BaseEmbeddingModel):
    """One fastembed backend plus the identifier and width it was created for.

    The backend handle is shared by every clone of the model object; it is
    never mutated after construction, so concurrent ``embed_texts`` calls go
    straight to the runtime without locking.
    """

    def __init__(
        self,
        model: FastembedModel,
        ndims: int,
        options: Optional[InitOptions] = None,
        embedder: Optional[TextEmbedding] = None,
    ):
        options = options or InitOptions(model=model)
        if options.model is not model:
            raise ModelConstructionError(
                f"InitOptions are for {options.model.name}, but model {model.name} was requested"
            )
        self.model = options.model
        self._ndims = ndims
        self._batch_size = options.batch_size
        if embedder is None:
            try:
                source = runtime_source(options.model)
                if source is not None:
                    _register_user_defined(source, ndims)
                with _download_progress(options.show_download_progress):
                    embedder = TextEmbedding(model_name=options.model.value, **_runtime_kwargs(options))
            except Exception as e:
                logger.error("Fastembed model load failed", model=options.model.name, error=str(e))
                raise ModelConstructionError(f"Failed to load fastembed model {options.model.name}: {e}") from e
            logger.info("Fastembed model loaded", model=options.model.name, ndims=ndims)
        self._embedder = embedder

    @classmethod
    def from_user_defined(
        cls,
        user_defined_model: UserDefinedEmbeddingModel,
        ndims: int,
        model_info: ModelInfo,
        options: Optional[InitOptionsUserDefined] = None,
    ) -> "EmbeddingModel":
        """Load a custom model; ``ndims`` is trusted as given and never checked against the output."""
        options = options or InitOptionsUserDefined()
        kwargs = _runtime_kwargs(options)
        if user_defined_model.model_path is not None:
            kwargs["specific_model_path"] = user_defined_model.model_path
        try:
            _register_user_defined(user_defined_model, ndims)
            embedder = TextEmbedding(model_name=user_defined_model.model_name, **kwargs)
        except Exception as e:
            logger.error("User-defined fastembed model load failed", model=user_defined_model.model_name, error=str(e))
            raise ModelConstructionError(
                f"Failed to load user-defined fastembed model {user_defined_model.model_name}: {e}"
            ) from e
        logger.info(
            "User-defined fastembed model loaded",
            model=user_defined_model.model_name,
            label=model_info.model.name,
            description=model_info.description,
            ndims=ndims,
        )
        return cls(
            model_info.model,
            ndims,
            options=InitOptions(model=model_info.model, batch_size=options.batch_size),
            embedder=embedder,
        )

    def clone(self) -> "EmbeddingModel":
        return copy.copy(self)

    def __deepcopy__(self, memo: dict) -> "EmbeddingModel":
        # Copies never duplicate the loaded backend
        return copy.copy(self)

    def ndims(self) -> int:
        return self._ndims

    def _embed_sync(self, documents: List[str]) -> List[List[float]]:
        vectors = list(self._embedder.embed(documents, batch_size=self._batch_size))
        return [np.asarray(v, dtype=np.float64).tolist() for v in vectors]

    async def embed_texts(self, documents: Iterable[str]) -> List[Embedding]:
        docs = list(documents)
        if not docs:
            return []
        try:
            vectors = await asyncio.to_thread(self._embed_sync, docs)
        except Exception as e:
            logger.error("Fastembed embed failed", model=self.model.name, n_documents=len(docs), error=str(e))
            raise ProviderError(str(e) or type(e).__name__) from e
        if len(vectors) != len(docs):
            raise ProviderError(f"Fastembed returned {len(vectors)} vectors for {len(docs)} documents")
        logger.debug("Fastembed embed", model=self.model.name, n_documents=len(docs))
        return [Embedding(document=d, vec=v) for d, v in zip(docs, vectors)]


class Client:
    """Stateless factory for fastembed-backed embedding models."""

    def embedding_model(self, model: FastembedModel) -> EmbeddingModel:
        return EmbeddingModel(model, dimensions_of(model))

    def embeddings(self, model: FastembedModel) -> EmbeddingsBuilder[EmbeddingModel]:
        return EmbeddingsBuilder(self.embedding_model(model))
