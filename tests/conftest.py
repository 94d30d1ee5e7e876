from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path so `import dynamo_codec` works in tests.
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    from dynamo_codec.settings import get_settings

    monkeypatch.delenv("DYNAMO_CODEC_NUMBER_MODE", raising=False)
    monkeypatch.delenv("DYNAMO_CODEC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DYNAMO_CODEC_ENV", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
