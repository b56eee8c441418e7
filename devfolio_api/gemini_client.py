"""Google Gemini client for text generation."""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from devfolio_api.config import get_settings

logger = structlog.get_logger()


class GeminiError(Exception):
    """Base exception for Gemini client errors."""

    pass


class GeminiAuthError(GeminiError):
    """Raised when authentication fails or no key is configured."""

    pass


class GeminiRateLimitError(GeminiError):
    """Raised when rate limit is exceeded."""

    pass


class GeminiEmptyResponseError(GeminiError):
    """Raised when the response carries no usable text."""

    pass


@dataclass
class LLMResponse:
    """Response from the generative-text service."""

    content: str
    tokens_used: int
    finish_reason: str | None = None


MOCK_ROADMAP_TEXT = """This roadmap takes the project from an empty repository to a tested release, \
building the core first and layering features on top.

Planning & Setup Phase
- Gather requirements: Interview stakeholders and write user stories
- Choose the stack: Compare frameworks and record the decision
- Set up the repository: Create the repo, branching rules and CI pipeline
- Design the data model: Draft entities, relations and indexes

Core Development Phase
- Build the API skeleton: Scaffold routing, configuration and error handling
- Implement persistence: Add models, migrations and repositories
- Add authentication: Sign-up, login and token refresh flows
- Write the core workflows: Implement the main user journeys end to end

Feature Implementation Phase
- Build the dashboard: Summary views and filters for the main entities
- Add notifications: Email and in-app notifications for key events
- Integrate external APIs: Connect the third-party services the project needs
- Add search: Full-text search across user content

Testing & Refinement Phase
- Write unit tests: Cover services and utilities
- Run integration tests: Exercise the API against a real database
- Fix reported bugs: Triage and resolve issues found during testing
- Prepare the release: Write deployment docs and tag the first version
"""


class GeminiClient:
    """Async client for the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ):
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key. Defaults to config value.
            base_url: API base URL. Defaults to config value.
            model: Model ID to use. Defaults to config value.
            max_tokens: Maximum output tokens. Defaults to config value.
            temperature: Sampling temperature. Defaults to config value.
            timeout: Request timeout in seconds. Defaults to config value.
        """
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._base_url = base_url or settings.gemini_base_url
        self._model = model or settings.gemini_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature
        self._timeout = timeout or settings.gemini_timeout_seconds
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GeminiClient":
        """Enter async context."""
        await self.connect()
        return self

    async def __aexit__(self, _exc_type: Any, _exc_val: Any, _exc_tb: Any) -> None:
        """Exit async context."""
        await self.close()

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_configured(self) -> bool:
        """Check if the client has an API key."""
        return bool(self._api_key)

    async def connect(self) -> None:
        """Create the HTTP client.

        In mock mode without a key, skips creating a real HTTP client since all
        requests will be served by the mock handler.
        """
        settings = get_settings()
        if settings.mock_gemini and not self.is_configured:
            logger.info("Gemini client in mock mode, skipping HTTP client creation", model=self._model)
            return

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(self._timeout, connect=10.0),
        )
        logger.info("Gemini client connected", model=self._model)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Gemini client closed")

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": self._max_tokens,
                "temperature": self._temperature,
            },
        }

    async def generate(self, prompt: str) -> LLMResponse:
        """Send a single prompt and return the generated text.

        Args:
            prompt: The full prompt text.

        Returns:
            LLM response with content and token usage.

        Raises:
            GeminiAuthError: If no key is configured outside mock mode, or the key is rejected.
            GeminiRateLimitError: If the service answers 429.
            GeminiEmptyResponseError: If the answer has no text.
            GeminiError: For any other HTTP or network failure.
        """
        settings = get_settings()

        if not self.is_configured:
            if settings.mock_gemini:
                logger.info("MOCK_GEMINI=true: Using mock LLM response")
                return self._mock_generate(prompt)
            error_msg = (
                "Gemini API key not configured with MOCK_GEMINI=false. "
                "Either set GEMINI_API_KEY or set MOCK_GEMINI=true for testing."
            )
            logger.error(error_msg)
            raise GeminiAuthError(error_msg)

        if not self._client:
            await self.connect()

        try:
            response = await self._client.post(
                f"/models/{self._model}:generateContent",
                params={"key": self._api_key},
                json=self._build_payload(prompt),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            self._handle_http_error(e)
            raise
        except httpx.HTTPError as e:
            logger.error("Gemini request failed", error=str(e))
            raise GeminiError(f"Request failed: {e}") from e
        except ValueError as e:
            raise GeminiError("Invalid JSON in Gemini response") from e

        return self._parse_response(data)

    def _parse_response(self, data: Any) -> LLMResponse:
        """Pull the first candidate's text out of a ``generateContent`` body."""
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise GeminiEmptyResponseError("Invalid response structure from Gemini API")

        candidate = candidates[0]
        content_block = candidate.get("content")
        parts = content_block.get("parts") if isinstance(content_block, dict) else None
        if (
            not isinstance(parts, list)
            or not parts
            or not isinstance(parts[0], dict)
            or not isinstance(parts[0].get("text"), str)
        ):
            raise GeminiEmptyResponseError("No content parts found in Gemini API response")

        content = parts[0]["text"]
        if not content.strip():
            raise GeminiEmptyResponseError("Empty response received from Gemini API")

        usage = data.get("usageMetadata")
        tokens_used = usage.get("totalTokenCount", 0) if isinstance(usage, dict) else 0
        finish_reason = candidate.get("finishReason")

        logger.info("LLM response received", tokens=tokens_used, finish_reason=finish_reason)
        return LLMResponse(content=content, tokens_used=tokens_used, finish_reason=finish_reason)

    def _handle_http_error(self, error: httpx.HTTPStatusError) -> None:
        """Handle HTTP errors from the Gemini API."""
        status = error.response.status_code
        try:
            detail = error.response.json().get("error", {}).get("message", str(error))
        except Exception:
            detail = str(error)

        logger.error("Gemini API error", status=status, detail=detail)

        if status in (401, 403):
            raise GeminiAuthError(f"Authentication failed: {detail}")
        elif status == 429:
            raise GeminiRateLimitError(f"Rate limit exceeded: {detail}")
        else:
            raise GeminiError(f"API error ({status}): {detail}")

    def _mock_generate(self, prompt: str) -> LLMResponse:
        """Return a canned answer for testing.

        Roadmap prompts get a well-formed phased roadmap; anything else gets a
        plain sentence, which JSON-answer callers will fall back on.
        """
        if "Planning & Setup Phase" in prompt:
            content = MOCK_ROADMAP_TEXT
        else:
            content = (
                "This is a mock Gemini response (MOCK_GEMINI=true). "
                f"In production, this would be a real answer to: '{prompt[:50]}...'. "
                "Set GEMINI_API_KEY to enable real responses."
            )
        return LLMResponse(content=content, tokens_used=len(content.split()), finish_reason="STOP")


# Global client instance
_gemini_client: GeminiClient | None = None


async def get_gemini_client() -> GeminiClient:
    """Get or create the global Gemini client instance."""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
        await _gemini_client.connect()
    return _gemini_client


async def close_gemini_client() -> None:
    """Close the global Gemini client."""
    global _gemini_client
    if _gemini_client:
        await _gemini_client.close()
        _gemini_client = None


def reset_gemini_client() -> None:
    """Reset the global Gemini client (for testing)."""
    global _gemini_client
    _gemini_client = None
