"""Quick sanity check: config, model registry, fastembed model, embed. Run from project root."""

import asyncio
from pathlib import Path


def main() -> None:
    root = Path(__file__).resolve().parent.parent
    import sys
    sys.path.insert(0, str(root))

    print("1. Config...")
    from utils.config import get_config
    cfg = get_config()
    assert cfg.embedding_model
    print(f"   OK ({cfg.path})")

    print("2. Model registry...")
    from fastembed_adapter.embedding.models import FastembedModel, dimensions_of, parse_model
    model = parse_model(cfg.embedding_model)
    assert all(dimensions_of(m) in (384, 512, 768, 1024) for m in FastembedModel)
    print(f"   OK ({model.name} -> {dimensions_of(model)} dims)")

    print("3. Fastembed model (may download weights)...")
    from fastembed_adapter.embedding.factory import get_embedding
    emb = get_embedding(cfg)
    print("   OK")

    print("4. Embed...")
    out = asyncio.run(emb.embed_texts(["Hello, world!", "Goodbye, world!"]))
    assert len(out) == 2
    assert all(len(e.vec) == emb.ndims() for e in out)
    assert out[0].document == "Hello, world!"
    print("   OK")

    print("All checks passed.")


if __name__ == "__main__":
    main()
