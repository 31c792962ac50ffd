"""
Prompt generation service.

Flow:
  1. Send the prompt to the upstream adapter with reasoning requested
  2. Shape the reply: "Reasoning" block first (if any), then "Content" block (if any)
  3. Treat a reply with neither as a failure

Adapter errors (ProviderError) are not caught here; the HTTP layer maps them
to a response status.
"""

import time
import logging
from typing import Any, Dict, Optional

from app.adapters.base import BaseModelAdapter

logger = logging.getLogger("generation_service")

REASONING_HEADER = "Reasoning:\n---\n"
CONTENT_HEADER = "Content:\n---\n"


class EmptyCompletionError(Exception):
    """Upstream call succeeded but returned neither content nor reasoning."""

    def __init__(self, result: Dict[str, Any]):
        super().__init__("OpenRouter returned an empty response.")
        self.result = result


def format_completion(reasoning: Optional[str], content: Optional[str]) -> str:
    """
    Concatenate the labeled blocks. Empty, missing or non-string fields are skipped,
    so the result is "" when the upstream gave nothing usable.
    """
    text = ""
    if isinstance(reasoning, str) and reasoning:
        text += REASONING_HEADER + reasoning + "\n\n"
    if isinstance(content, str) and content:
        text += CONTENT_HEADER + content
    return text


class GenerationService:
    def __init__(self, adapter: BaseModelAdapter):
        self.adapter = adapter

    async def generate(self, prompt: str, model: Optional[str] = None) -> str:
        start_time = time.time()

        result = await self.adapter.generate(
            prompt=prompt,
            model=model,
            reasoning={"include": True},
        )

        text = format_completion(result.get("reasoning"), result.get("content"))
        if not text:
            raise EmptyCompletionError(result)

        latency_ms = (time.time() - start_time) * 1000
        logger.info(
            f"[Generate] ✓ {result.get('provider')}:{result.get('model')} | "
            f"{latency_ms:.0f}ms | {result.get('tokens_used', 0)} tokens"
        )
        return text
