"""Anthropic Messages API client for credibility assessment."""

import logging

import requests

from ..errors import ProviderError

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Client for the Anthropic Messages API.

    Sends one system instruction and one user message per call and returns
    the text of the first content block.
    """

    API_VERSION = "2023-06-01"

    def __init__(self, api_key: str, model: str = 'claude-3-5-haiku-20241022',
                 max_tokens: int = 4000, timeout: int = 120):
        if not api_key:
            raise ValueError("Anthropic API key required")
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.base_url = "https://api.anthropic.com/v1/messages"

    def _headers(self):
        return {
            'x-api-key': self.api_key,
            'anthropic-version': self.API_VERSION,
            'Content-Type': 'application/json',
        }

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run a single completion at temperature 0 and return the reply text.

        Raises:
            ProviderError: on non-2xx responses (status and body kept verbatim),
                transport failures, or a reply without a text content block.
        """
        payload = {
            'model': self.model,
            'max_tokens': self.max_tokens,
            'temperature': 0,
            'system': system_prompt,
            'messages': [{'role': 'user', 'content': user_prompt}],
        }
        logger.info(f"Calling Anthropic model {self.model} (prompt: {len(user_prompt)} chars)")

        try:
            response = requests.post(self.base_url, headers=self._headers(),
                                     json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"Anthropic API request timed out after {self.timeout}s")
            raise ProviderError(0, str(e), "LLM provider request timed out") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Anthropic API request failed: {e}")
            raise ProviderError(0, str(e), f"LLM provider request failed: {e}") from e

        if not response.ok:
            logger.error(f"Anthropic API error status: {response.status_code}")
            logger.error(f"Anthropic API error response: {response.text}")
            raise ProviderError(response.status_code, response.text,
                                f"LLM provider error: {response.reason}")

        try:
            data = response.json()
            return data['content'][0]['text']
        except ValueError as e:
            logger.error(f"Failed to decode JSON response from Anthropic: {response.text[:500]}")
            raise ProviderError(response.status_code, response.text,
                                "LLM provider returned a non-JSON body") from e
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected Anthropic response format: {response.text[:500]}")
            raise ProviderError(response.status_code, response.text,
                                "LLM provider reply has no text content") from e
