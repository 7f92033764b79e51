"""OpenAI API client wrapper."""

import logging

from openai import APIConnectionError, APIStatusError, OpenAI

from ..errors import ProviderError

logger = logging.getLogger(__name__)


class OpenAIClient:
    """Wrapper for OpenAI chat completions with the same contract as AnthropicClient."""

    def __init__(self, api_key: str, model: str = 'gpt-4o-mini-2024-07-18',
                 max_tokens: int = 4000, timeout: int = 120):
        if not api_key:
            raise ValueError("OpenAI API key required")
        # Retries are disabled: a provider failure is terminal for the request.
        self.client = OpenAI(api_key=api_key, max_retries=0)
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run a single completion at temperature 0 and return the reply text."""
        logger.info(f"Calling OpenAI model {self.model} (prompt: {len(user_prompt)} chars)")
        try:
            result = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                max_tokens=self.max_tokens,
                temperature=0,
                timeout=self.timeout
            )
        except APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            logger.error(f"OpenAI API error status: {e.status_code}")
            logger.error(f"OpenAI API error response: {body}")
            raise ProviderError(e.status_code, body, f"LLM provider error: {e.message}") from e
        except APIConnectionError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise ProviderError(0, str(e), f"LLM provider request failed: {e}") from e

        content = result.choices[0].message.content if result.choices else None
        if not isinstance(content, str):
            logger.error("OpenAI response has no message content.")
            logger.debug(f"Full OpenAI response object: {result}")
            raise ProviderError(200, str(result), "LLM provider reply has no text content")
        return content
