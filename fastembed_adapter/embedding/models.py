"""Supported fastembed models and their embedding widths."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Type, Union

from exception.custom_exception import CustomException
from fastembed_adapter.embedding.base import UnknownModelError


class FastembedModel(Enum):
    """Text embedding models of the runtime catalog; values are the names they are loaded under."""

    AllMiniLML6V2 = "sentence-transformers/all-MiniLM-L6-v2"
    AllMiniLML6V2Q = "Xenova/all-MiniLM-L6-v2"
    AllMiniLML12V2 = "Xenova/all-MiniLM-L12-v2"
    AllMiniLML12V2Q = "Xenova/all-MiniLM-L12-v2-Q"
    BGEBaseENV15 = "BAAI/bge-base-en-v1.5"
    BGEBaseENV15Q = "Qdrant/bge-base-en-v1.5-onnx-Q"
    BGELargeENV15 = "BAAI/bge-large-en-v1.5"
    BGELargeENV15Q = "Qdrant/bge-large-en-v1.5-onnx-Q"
    BGESmallENV15 = "BAAI/bge-small-en-v1.5"
    BGESmallENV15Q = "Qdrant/bge-small-en-v1.5-onnx-Q"
    NomicEmbedTextV1 = "nomic-ai/nomic-embed-text-v1"
    NomicEmbedTextV15 = "nomic-ai/nomic-embed-text-v1.5"
    NomicEmbedTextV15Q = "nomic-ai/nomic-embed-text-v1.5-Q"
    ParaphraseMLMiniLML12V2Q = "Qdrant/paraphrase-multilingual-MiniLM-L12-v2-onnx-Q"
    ParaphraseMLMiniLML12V2 = "sentence-transformers/paraphrase-multilingual-MiniLM-L12-v2"
    ParaphraseMLMpnetBaseV2 = "sentence-transformers/paraphrase-multilingual-mpnet-base-v2"
    BGESmallZHV15 = "BAAI/bge-small-zh-v1.5"
    MultilingualE5Small = "intfloat/multilingual-e5-small"
    MultilingualE5Base = "intfloat/multilingual-e5-base"
    MultilingualE5Large = "intfloat/multilingual-e5-large"
    MxbaiEmbedLargeV1 = "mixedbread-ai/mxbai-embed-large-v1"
    MxbaiEmbedLargeV1Q = "mixedbread-ai/mxbai-embed-large-v1-Q"
    GTEBaseENV15 = "Alibaba-NLP/gte-base-en-v1.5"
    GTEBaseENV15Q = "Alibaba-NLP/gte-base-en-v1.5-Q"
    GTELargeENV15 = "Alibaba-NLP/gte-large-en-v1.5"
    GTELargeENV15Q = "Alibaba-NLP/gte-large-en-v1.5-Q"
    ClipVitB32 = "Qdrant/clip-ViT-B-32-text"
    JinaEmbeddingsV2BaseCode = "jinaai/jina-embeddings-v2-base-code"


@dataclass
class UserDefinedEmbeddingModel:
    """A model outside the runtime catalog: where to fetch it and how to pool it."""

    model_name: str
    hf: Optional[str] = None
    url: Optional[str] = None
    model_file: str = "onnx/model.onnx"
    pooling: str = "mean"
    normalization: bool = True
    model_path: Optional[str] = None
    additional_files: List[str] = field(default_factory=list)


# Widths as published on the runtime's text embedding model cards
_WIDTHS: Dict[int, Tuple[FastembedModel, ...]] = {
    384: (
        FastembedModel.AllMiniLML6V2,
        FastembedModel.AllMiniLML6V2Q,
        FastembedModel.AllMiniLML12V2,
        FastembedModel.AllMiniLML12V2Q,
        FastembedModel.BGESmallENV15,
        FastembedModel.BGESmallENV15Q,
        FastembedModel.ParaphraseMLMiniLML12V2Q,
        FastembedModel.ParaphraseMLMiniLML12V2,
        FastembedModel.MultilingualE5Small,
    ),
    512: (
        FastembedModel.BGESmallZHV15,
        FastembedModel.ClipVitB32,
    ),
    768: (
        FastembedModel.BGEBaseENV15,
        FastembedModel.BGEBaseENV15Q,
        FastembedModel.NomicEmbedTextV1,
        FastembedModel.NomicEmbedTextV15,
        FastembedModel.NomicEmbedTextV15Q,
        FastembedModel.ParaphraseMLMpnetBaseV2,
        FastembedModel.MultilingualE5Base,
        FastembedModel.GTEBaseENV15,
        FastembedModel.GTEBaseENV15Q,
        FastembedModel.JinaEmbeddingsV2BaseCode,
    ),
    1024: (
        FastembedModel.BGELargeENV15,
        FastembedModel.BGELargeENV15Q,
        FastembedModel.MultilingualE5Large,
        FastembedModel.MxbaiEmbedLargeV1,
        FastembedModel.MxbaiEmbedLargeV1Q,
        FastembedModel.GTELargeENV15,
        FastembedModel.GTELargeENV15Q,
    ),
}

_DIMENSIONS: Dict[FastembedModel, int] = {
    model: ndims for ndims, models in _WIDTHS.items() for model in models
}


def _source(model: FastembedModel, hf: str, model_file: str, pooling: str) -> UserDefinedEmbeddingModel:
    return UserDefinedEmbeddingModel(model_name=model.value, hf=hf, model_file=model_file, pooling=pooling)


# Models the runtime has no catalog entry for; registered under their enum value before loading.
# Repos and ONNX files follow the fastembed-rs model list.
_SOURCES: Dict[FastembedModel, UserDefinedEmbeddingModel] = {
    m: _source(m, hf, model_file, pooling)
    for m, hf, model_file, pooling in (
        (FastembedModel.AllMiniLML6V2Q, "Xenova/all-MiniLM-L6-v2", "onnx/model_quantized.onnx", "mean"),
        (FastembedModel.AllMiniLML12V2, "Xenova/all-MiniLM-L12-v2", "onnx/model.onnx", "mean"),
        (FastembedModel.AllMiniLML12V2Q, "Xenova/all-MiniLM-L12-v2", "onnx/model_quantized.onnx", "mean"),
        (FastembedModel.BGEBaseENV15Q, "Qdrant/bge-base-en-v1.5-onnx-Q", "model_optimized.onnx", "cls"),
        (FastembedModel.BGELargeENV15Q, "Qdrant/bge-large-en-v1.5-onnx-Q", "model_optimized.onnx", "cls"),
        (FastembedModel.BGESmallENV15Q, "Qdrant/bge-small-en-v1.5-onnx-Q", "model_optimized.onnx", "cls"),
        (
            FastembedModel.ParaphraseMLMiniLML12V2Q,
            "Qdrant/paraphrase-multilingual-MiniLM-L12-v2-onnx-Q",
            "model_optimized.onnx",
            "mean",
        ),
        (FastembedModel.MultilingualE5Small, "intfloat/multilingual-e5-small", "onnx/model.onnx", "mean"),
        (FastembedModel.MultilingualE5Base, "intfloat/multilingual-e5-base", "onnx/model.onnx", "mean"),
        (FastembedModel.MxbaiEmbedLargeV1Q, "mixedbread-ai/mxbai-embed-large-v1", "onnx/model_quantized.onnx", "cls"),
        (FastembedModel.GTEBaseENV15, "Alibaba-NLP/gte-base-en-v1.5", "onnx/model.onnx", "cls"),
        (FastembedModel.GTEBaseENV15Q, "Alibaba-NLP/gte-base-en-v1.5", "onnx/model_quantized.onnx", "cls"),
        (FastembedModel.GTELargeENV15, "Alibaba-NLP/gte-large-en-v1.5", "onnx/model.onnx", "cls"),
        (FastembedModel.GTELargeENV15Q, "Alibaba-NLP/gte-large-en-v1.5", "onnx/model_quantized.onnx", "cls"),
    )
}


def _check_complete(enum_cls: Type[Enum], table: Mapping[Enum, object]) -> None:
    missing = [m.name for m in enum_cls if m not in table]
    if missing:
        raise CustomException(f"No embedding width recorded for: {', '.join(missing)}")


# A model added to the enum without a width must break the import, not embed with 0 dims
_check_complete(FastembedModel, _DIMENSIONS)


def runtime_source(model: FastembedModel) -> Optional[UserDefinedEmbeddingModel]:
    """Source to register for a model missing from the runtime catalog; None for catalog models."""
    return _SOURCES.get(model)


def dimensions_of(model: FastembedModel) -> int:
    """Return the output vector width of a known model."""
    try:
        return _DIMENSIONS[model]
    except KeyError:
        raise UnknownModelError(f"Unknown fastembed model: {model!r}") from None


def parse_model(name: Union[FastembedModel, str]) -> FastembedModel:
    """Resolve a member name (``AllMiniLML6V2``) or model code (``BAAI/bge-small-en-v1.5``)."""
    if isinstance(name, FastembedModel):
        return name
    key = str(name).strip().lower()
    for model in FastembedModel:
        if key in (model.name.lower(), model.value.lower()):
            return model
    supported = ", ".join(m.name for m in FastembedModel)
    raise UnknownModelError(f"Unknown fastembed model: {name!r}. Supported: {supported}")
