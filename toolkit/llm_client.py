"""Blocking text-completion client for the local LLM endpoint (Ollama or vLLM)."""

import logging
from typing import Any, Dict, Optional

import requests

from .config import LLMSettings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when a completion call cannot produce text."""


class LLMClient:
    """Single request/response completion client. No streaming, no retry."""

    def __init__(
        self,
        settings: Optional[LLMSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or LLMSettings()
        self.session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        """Build request headers."""
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def complete(self, prompt: str, temperature: float = 0.7) -> str:
        """
        Send one prompt and return the model's text reply.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature

        Returns:
            Reply text ("" when the endpoint returned no text field)

        Raises:
            LLMError: On unsupported provider, connection failure, non-2xx
                status or an unparseable body
        """
        provider = self.settings.provider
        if provider == "ollama":
            endpoint = f"{self.settings.base_url}/api/generate"
            payload: Dict[str, Any] = {
                "model": self.settings.model,
                "prompt": prompt,
                "stream": False,
                "options": {"temperature": temperature},
            }
        elif provider == "openai":
            endpoint = f"{self.settings.base_url}/v1/chat/completions"
            payload = {
                "model": self.settings.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": temperature,
                "stream": False,
            }
        else:
            raise LLMError(f"Unsupported LLM provider: {provider}")

        data = self._post(endpoint, payload)

        if provider == "ollama":
            return str(data.get("response") or "")
        try:
            return str(data["choices"][0]["message"]["content"] or "")
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError(f"Malformed LLM response: {e}")

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"POST {endpoint} (model={self.settings.model})")
        try:
            response = self.session.post(
                endpoint,
                json=payload,
                headers=self.headers,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.ConnectionError:
            raise LLMError(
                f"Cannot connect to LLM at {self.settings.base_url}. "
                "Is the inference server running?"
            )
        except requests.exceptions.RequestException as e:
            raise LLMError(f"LLM call failed: {e}")

        if not response.ok:
            logger.error(f"LLM API error: {response.status_code} - {response.text[:200]}")
            raise LLMError(f"LLM API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise LLMError(f"Malformed LLM response: {e}")
        if not isinstance(data, dict):
            raise LLMError("Malformed LLM response: expected a JSON object")
        return data
