"""Shared fixtures for the prompt relay tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Any, Dict, List, Optional

# Settings are read when app.main is imported
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("OPENROUTER_BASE_URL", "https://openrouter.test/api/v1")

import pytest
from fastapi.testclient import TestClient

from app.adapters.base import BaseModelAdapter
from app.main import app, get_adapter


class StubAdapter(BaseModelAdapter):
    """Records calls and returns a canned result or raises a canned error."""

    def __init__(self, result: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.result = result or {}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, prompt: str, model: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        self.calls.append({"prompt": prompt, "model": model, **kwargs})
        if self.error is not None:
            raise self.error
        return {"provider": "stub", "model": "stub-model", "tokens_used": 0, **self.result}


@pytest.fixture
def stub_adapter() -> StubAdapter:
    return StubAdapter()


@pytest.fixture
def client(stub_adapter: StubAdapter) -> Iterator[TestClient]:
    """TestClient whose upstream adapter is replaced by the stub."""
    app.dependency_overrides[get_adapter] = lambda: stub_adapter
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
