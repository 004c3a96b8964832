import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from contentgen.core.config import settings
from contentgen.errors import CompletionServiceError

logger = logging.getLogger(__name__)

NO_CONTENT_FALLBACK = "No content generated"


def extract_message_text(response: Any) -> str | None:
    """Return the first choice's message text, or None when it is missing or not a string."""
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


class LLMClient:
    """Provider-agnostic text completion client using the OpenAI API spec."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        self.client = AsyncOpenAI(
            base_url=base_url or settings.LLM_BASE_URL,
            # The SDK refuses to build without a key; requests then fail with 401 instead
            api_key=api_key or settings.LLM_API_KEY or "missing-api-key",
            timeout=timeout or settings.LLM_TIMEOUT_SECONDS,
        )

    async def invoke(self, messages: list[dict[str, str]]) -> Any:
        logger.info("Issuing completion request to model %s...", self.model_name)
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
            )
        except OpenAIError as e:
            logger.error("Error calling LLM provider %s: %s", self.model_name, e)
            raise CompletionServiceError(f"Completion request failed: {e}") from e
        logger.info("Received completion response from %s.", self.model_name)
        return response

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send the system instruction and the user prompt, in that order, and return the
        first choice's text. Falls back to a fixed placeholder when the provider
        returns no usable text.
        """
        response = await self.invoke(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ]
        )
        text = extract_message_text(response)
        if text is None:
            logger.warning("Model %s returned no text content; using fallback.", self.model_name)
            return NO_CONTENT_FALLBACK
        return text
