"""Config-based embedding factory."""

from typing import Optional

from utils.config import Config, get_config

from fastembed_adapter.embedding.fastembed_embedding import EmbeddingModel, InitOptions
from fastembed_adapter.embedding.models import dimensions_of, parse_model


def get_embedding(config: Optional[Config] = None) -> EmbeddingModel:
    cfg = config or get_config()
    model = parse_model(cfg.embedding_model)
    cache_dir = cfg.cache_dir
    options = InitOptions(
        model=model,
        show_download_progress=cfg.show_download_progress,
        cache_dir=str(cache_dir) if cache_dir is not None else None,
        threads=cfg.threads,
        batch_size=cfg.batch_size,
    )
    return EmbeddingModel(model, dimensions_of(model), options=options)
