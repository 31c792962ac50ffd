"""Tests for reply shaping in the generation service."""

from __future__ import annotations

import pytest

from app.adapters.base import ProviderError
from app.services.generation import EmptyCompletionError, GenerationService, format_completion


def test_format_content_only() -> None:
    assert format_completion(None, "Hello") == "Content:\n---\nHello"


def test_format_reasoning_and_content() -> None:
    assert format_completion("R", "C") == "Reasoning:\n---\nR\n\nContent:\n---\nC"


def test_format_reasoning_only_keeps_separator() -> None:
    assert format_completion("R", None) == "Reasoning:\n---\nR\n\n"


def test_format_nothing() -> None:
    assert format_completion("", None) == ""


@pytest.mark.asyncio
async def test_generate_requests_reasoning(stub_adapter) -> None:
    stub_adapter.result = {"content": "C", "reasoning": "R"}

    text = await GenerationService(stub_adapter).generate("prompt")

    assert text == "Reasoning:\n---\nR\n\nContent:\n---\nC"
    assert stub_adapter.calls == [{"prompt": "prompt", "model": None, "reasoning": {"include": True}}]


@pytest.mark.asyncio
async def test_generate_empty_result(stub_adapter) -> None:
    stub_adapter.result = {"content": None, "reasoning": None}

    with pytest.raises(EmptyCompletionError) as exc_info:
        await GenerationService(stub_adapter).generate("prompt")

    assert exc_info.value.result["content"] is None


@pytest.mark.asyncio
async def test_generate_propagates_provider_error(stub_adapter) -> None:
    stub_adapter.error = ProviderError("rate limited", status_code=429)

    with pytest.raises(ProviderError):
        await GenerationService(stub_adapter).generate("prompt")


def test_format_skips_non_string_fields() -> None:
    assert format_completion({"steps": 2}, [{"type": "text", "text": "Hi"}]) == ""
    assert format_completion(None, [{"type": "text", "text": "Hi"}]) == ""
