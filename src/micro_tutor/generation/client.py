"""Remote text generation over an OpenAI-compatible inference endpoint."""

import openai
import structlog
from openai import AsyncOpenAI

from micro_tutor.config import Settings
from micro_tutor.errors import MalformedResponse, RemoteUnavailable
from micro_tutor.generation.prompts import SYSTEM_PROMPT

logger = structlog.get_logger()


class RemoteGenerator:
    """Generates text with a hosted model.

    A single attempt is made per call; the caller is expected to fall back
    to canned content on any error.

    Args:
        api_key: Inference API token.
        base_url: OpenAI-compatible endpoint.
        model: Model to generate with.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 10.0,
    ):
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        self.model = model

    async def generate(self, prompt: str, max_length: int) -> str:
        """Generate text for a prompt.

        Args:
            prompt: User prompt.
            max_length: Upper bound on generated tokens.

        Returns:
            Generated text, stripped.

        Raises:
            RemoteUnavailable: Network error, timeout or non-success status.
            MalformedResponse: The response carried no text.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_length,
                temperature=0.7,
            )
        except openai.APIError as e:
            raise RemoteUnavailable(str(e)) from e

        if not response.choices:
            raise MalformedResponse("response has no choices")
        content = response.choices[0].message.content
        if not isinstance(content, str) or not content.strip():
            raise MalformedResponse("response has no text content")

        logger.debug("remote_generation_complete", model=self.model, chars=len(content))
        return content.strip()


def build_generator(settings: Settings) -> RemoteGenerator | None:
    """Create the generator, or None when no credential is configured."""
    if not settings.generation_enabled:
        return None
    return RemoteGenerator(
        api_key=settings.huggingface_api_key,
        base_url=settings.generation_base_url,
        model=settings.generation_model,
        timeout=settings.generation_timeout_seconds,
    )
