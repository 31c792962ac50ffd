import logging
import httpx
from typing import Optional, Dict, Any
from app.config import Settings, get_settings
from app.adapters.base import BaseModelAdapter, ProviderError

logger = logging.getLogger("adapters.openrouter")


def _error_message(resp: httpx.Response) -> Optional[str]:
    """Pull error.message out of an OpenRouter error body, if it has one."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def _text(value: Any) -> Optional[str]:
    """Only plain strings count as reply text; other shapes are treated as absent."""
    return value if isinstance(value, str) else None


class OpenRouterAdapter(BaseModelAdapter):
    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.api_key = settings.OPENROUTER_API_KEY
        self.base_url = settings.OPENROUTER_BASE_URL.rstrip("/")
        self.default_model = settings.DEFAULT_MODEL_OPENROUTER
        self.referer = settings.OPENROUTER_HTTP_REFERER
        self.title = settings.OPENROUTER_APP_TITLE
        self.timeout = settings.UPSTREAM_TIMEOUT_S

    async def generate(self, prompt: str, model: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        """
        Calls OpenRouter chat completions. Returns content + reasoning + token usage.
        """
        target_model = model or self.default_model

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

        payload = {
            "model": target_model,
            "messages": [{"role": "user", "content": prompt}],
            **kwargs
        }

        async with httpx.AsyncClient() as client:
            try:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                    timeout=self.timeout
                )
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                message = _error_message(e.response) or str(e)
                raise ProviderError(message, status_code=e.response.status_code) from e
            except httpx.HTTPError as e:
                raise ProviderError(str(e)) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError("OpenRouter returned a response that is not valid JSON.") from e

        if not isinstance(data, dict):
            raise ProviderError("OpenRouter returned an unexpected response body.")

        # OpenRouter can report provider failures inside a 200 body
        error = data.get("error")
        if isinstance(error, dict):
            code = error.get("code")
            status = code if isinstance(code, int) and 400 <= code <= 599 else None
            raise ProviderError(str(error.get("message") or "OpenRouter reported an error."), status_code=status)

        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("OpenRouter response did not contain any choices.") from e

        if not isinstance(message, dict):
            raise ProviderError("OpenRouter response did not contain any choices.")

        # Extract token usage from OpenRouter response
        tokens = 0
        usage = data.get("usage") or {}
        if usage:
            tokens = usage.get("total_tokens", 0) or 0

        logger.debug(f"OpenRouter call to {target_model} used {tokens} tokens")

        return {
            "content": _text(message.get("content")),
            "reasoning": _text(message.get("reasoning")),
            "model": data.get("model", target_model),
            "provider": "openrouter",
            "tokens_used": tokens,
        }
