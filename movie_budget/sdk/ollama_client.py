"""
Client for a local Ollama-style text-generation endpoint.

Makes a single attempt per call and reports failures as values rather
than exceptions, so callers can always fall back to an offline reply.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.fallback import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama2"
DEFAULT_TIMEOUT = 60.0

GENERATE_PATH = "/api/generate"
TAGS_PATH = "/api/tags"


class OllamaClient:
    """Thin httpx wrapper for the generate and tags endpoints.

    No retries are made. Any transport error, non-success status or
    malformed body is returned as a failed GenerationResult.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Endpoint root, e.g. "http://localhost:11434"
            model: Default model name for generate calls
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used by tests

        Raises:
            ValueError: If model is missing/empty
        """
        if not model or not model.strip():
            raise ValueError("model is required and cannot be empty")

        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def set_model(self, model: str) -> None:
        if not model or not model.strip():
            raise ValueError("model is required and cannot be empty")
        self.model = model

    def generate(self, prompt: str, model: Optional[str] = None) -> GenerationResult:
        """Request a completion for an already-framed prompt.

        Args:
            prompt: Full prompt text to send
            model: Override for the default model (optional)

        Returns:
            GenerationResult carrying the "response" field, or a failure
        """
        payload = {
            "model": model or self.model,
            "prompt": prompt,
            "stream": False,
        }
        url = f"{self.base_url}{GENERATE_PATH}"
        logger.debug("POST %s model=%s", url, payload["model"])

        try:
            with self._client() as client:
                response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Text generation request failed: %s", exc)
            return GenerationResult.failure(str(exc))
        except ValueError as exc:
            logger.warning("Text generation returned invalid JSON: %s", exc)
            return GenerationResult.failure(f"invalid JSON: {exc}")

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            logger.warning("Text generation response missing 'response' field")
            return GenerationResult.failure("response field missing")
        return GenerationResult.success(text)

    def is_available(self) -> bool:
        """Return True when the tags endpoint answers with a success status."""
        try:
            with self._client() as client:
                response = client.get(f"{self.base_url}{TAGS_PATH}")
        except httpx.HTTPError as exc:
            logger.warning("Text generation endpoint not available: %s", exc)
            return False
        return response.is_success

    def list_models(self) -> List[str]:
        """Return model names reported by the endpoint, or [] on any failure."""
        try:
            with self._client() as client:
                response = client.get(f"{self.base_url}{TAGS_PATH}")
            response.raise_for_status()
            data: Dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Error fetching models: %s", exc)
            return []

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return []
        return [model["name"] for model in models if isinstance(model, dict) and "name" in model]

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport)
