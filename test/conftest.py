"""Pytest fixtures for fastembed adapter tests."""

import os
from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional
from unittest.mock import patch

import numpy as np
import pytest

# Keep test runs from writing log files into the working directory
os.environ.setdefault("LOG_TO_FILE", "0")

_root = Path(__file__).resolve().parent.parent


class FakeTextEmbedding:
    """Stands in for fastembed.TextEmbedding: yields float32 vectors filled with the doc index."""

    def __init__(self, ndims: int = 384, error: Optional[Exception] = None, drop_last: bool = False):
        self.ndims = ndims
        self.error = error
        self.drop_last = drop_last
        self.calls: List[List[str]] = []

    def embed(self, documents, batch_size=256):
        self.calls.append(list(documents))
        if self.error is not None:
            raise self.error
        n = len(documents) - 1 if self.drop_last else len(documents)
        for i in range(n):
            yield np.full(self.ndims, i + 0.5, dtype=np.float32)


@pytest.fixture
def project_root() -> Path:
    return _root


@pytest.fixture
def fake_backend() -> FakeTextEmbedding:
    return FakeTextEmbedding(ndims=384)


@pytest.fixture
def runtime():
    """Patch the runtime so no model is downloaded; loaded backends are FakeTextEmbedding."""
    with patch("fastembed_adapter.embedding.fastembed_embedding.TextEmbedding") as cls, patch(
        "fastembed_adapter.embedding.fastembed_embedding.enable_progress_bars"
    ) as enable, patch("fastembed_adapter.embedding.fastembed_embedding.disable_progress_bars") as disable, patch(
        "fastembed_adapter.embedding.fastembed_embedding.are_progress_bars_disabled", return_value=False
    ) as is_disabled:
        cls.side_effect = lambda *args, **kwargs: FakeTextEmbedding(ndims=384)
        cls.list_supported_models.return_value = []
        yield SimpleNamespace(
            cls=cls,
            enable_progress_bars=enable,
            disable_progress_bars=disable,
            are_progress_bars_disabled=is_disabled,
        )


@pytest.fixture
def config_yaml(tmp_path: Path) -> Path:
    import yaml
    cfg = {
        "embedding": {
            "model": "AllMiniLML6V2",
            "show_download_progress": False,
            "cache_dir": str(tmp_path / "models"),
            "threads": 2,
            "batch_size": 32,
        },
    }
    p = tmp_path / "config.yaml"
    p.write_text(yaml.dump(cfg), encoding="utf-8")
    return p
