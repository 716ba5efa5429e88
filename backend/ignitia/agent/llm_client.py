import json
import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from ignitia.core.config import settings
from ignitia.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin client for an OpenAI-compatible chat completions endpoint.

    Returns the provider's raw body so the normalizer can work on exactly what
    the model produced. Retries are disabled; a failed call surfaces as-is.
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        resolved_api_key = api_key or settings.LLM_API_KEY
        if not resolved_api_key:
            raise UpstreamError("AI provider API key is not configured (set LLM_API_KEY)")
        resolved_base_url = base_url or settings.LLM_BASE_URL

        self.client = AsyncOpenAI(
            base_url=resolved_base_url,
            api_key=resolved_api_key,
            max_retries=0,
        )

    def _chat_completion_kwargs(self) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        model_name = (self.model_name or "").lower()
        # GPT-5 family rejects non-default temperature values in some OpenAI endpoints.
        if model_name.startswith("gpt-5"):
            return {"max_completion_tokens": settings.LLM_MAX_TOKENS}
        return {
            "temperature": settings.LLM_TEMPERATURE,
            "max_tokens": settings.LLM_MAX_TOKENS,
        }

    async def _send(self, prompt: str) -> tuple[int, str]:
        logger.info("Issuing chat completion request to model %s...", self.model_name)
        try:
            raw = await self.client.chat.completions.with_raw_response.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                **self._chat_completion_kwargs(),
            )
        except APIStatusError as e:
            body = e.response.text
            logger.error(
                "Provider error from %s: %s - %s", self.model_name, e.status_code, body
            )
            raise UpstreamError(
                f"AI provider error: {e.status_code} - {body}",
                status_code=e.status_code,
                body=body,
            ) from e
        except APIConnectionError as e:
            logger.error("Could not reach provider for %s: %s", self.model_name, e)
            raise UpstreamError(f"AI provider unreachable: {e}") from e

        status_code = raw.http_response.status_code
        body = raw.http_response.text
        logger.info(
            "Received response from %s: status=%s length=%s",
            self.model_name,
            status_code,
            len(body or ""),
        )
        logger.debug("Raw response (first 500 chars): %s", (body or "")[:500])

        if not body or not body.strip():
            raise UpstreamError(
                "AI provider returned empty or whitespace-only response",
                status_code=status_code,
                body=body,
            )
        return status_code, body

    async def complete(self, prompt: str) -> str:
        """Send a single user message and return the raw response body."""
        _, body = await self._send(prompt)
        return body

    async def complete_envelope(self, prompt: str) -> dict[str, Any]:
        """Like ``complete`` but parses the body as the provider's envelope JSON."""
        status_code, body = await self._send(prompt)
        try:
            envelope = json.loads(body)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse provider envelope from %s: %s", self.model_name, e)
            raise UpstreamError(
                f"Invalid JSON response from AI provider: {e}",
                status_code=status_code,
                body=body,
            ) from e
        if not isinstance(envelope, dict):
            raise UpstreamError(
                "AI provider response is not a JSON object",
                status_code=status_code,
                body=body,
            )
        return envelope
