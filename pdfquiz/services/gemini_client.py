"""
Gemini generateContent client used for quiz generation.

The API key is passed in at construction so the client can be built with a
fake key (and an `httpx.MockTransport`) in tests. Failures are raised as
distinct pipeline errors:

- ServiceUnauthenticated: no usable key, detected before any request is made
- ServiceCallFailed: transport error, timeout or non-2xx status
- UnexpectedServiceShape: 2xx body without candidates[0].content.parts[0].text
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from pdfquiz import config
from pdfquiz.config import is_api_key_configured
from pdfquiz.errors import ServiceCallFailed, ServiceUnauthenticated, UnexpectedServiceShape

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 2048
RETRY_BACKOFF_SECONDS = 0.5
LOGGED_BODY_CHARS = 500

# Statuses worth a second attempt
TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}


def extract_completion_text(data: Any) -> str:
    """Walk candidates[0].content.parts[0].text, checking each level before indexing."""
    if not isinstance(data, dict):
        raise UnexpectedServiceShape()
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise UnexpectedServiceShape()
    first = candidates[0]
    if not isinstance(first, dict):
        raise UnexpectedServiceShape()
    content = first.get("content")
    if not isinstance(content, dict):
        raise UnexpectedServiceShape()
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        raise UnexpectedServiceShape()
    part = parts[0]
    if not isinstance(part, dict) or not isinstance(part.get("text"), str):
        raise UnexpectedServiceShape()
    return part["text"]


class GeminiQuizClient:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = config.GEMINI_MODEL,
        base_url: str = config.GEMINI_API_BASE_URL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        timeout: float = config.GEMINI_TIMEOUT_SECONDS,
        max_retries: int = config.GEMINI_MAX_RETRIES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))
        self.max_retries = max(0, max_retries)
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return is_api_key_configured(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }

    async def generate(self, prompt: str) -> str:
        """Send `prompt` to Gemini and return the completion text."""
        if not self.is_configured:
            logger.error("❌ Gemini API key not properly configured")
            raise ServiceUnauthenticated()

        payload = self.build_payload(prompt)
        attempts = self.max_retries + 1

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for attempt in range(1, attempts + 1):
                logger.info(f"Making request to Gemini API (attempt {attempt}/{attempts})...")
                try:
                    response = await client.post(self.endpoint, params={"key": self.api_key}, json=payload)
                    response.raise_for_status()
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    logger.error(
                        f"❌ Gemini API returned {status_code}: {e.response.text[:LOGGED_BODY_CHARS]}"
                    )
                    if status_code in TRANSIENT_STATUS_CODES and attempt < attempts:
                        await asyncio.sleep(RETRY_BACKOFF_SECONDS * attempt)
                        continue
                    raise ServiceCallFailed() from e
                except httpx.RequestError as e:
                    # The exception text may carry the request URL, which includes the key
                    logger.error(f"❌ Error calling Gemini API: {type(e).__name__}")
                    if attempt < attempts:
                        await asyncio.sleep(RETRY_BACKOFF_SECONDS * attempt)
                        continue
                    raise ServiceCallFailed() from e
                break

        logger.info("Received response from Gemini API")
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"❌ Gemini API returned a non-JSON body: {response.text[:LOGGED_BODY_CHARS]}")
            raise UnexpectedServiceShape() from e

        try:
            return extract_completion_text(data)
        except UnexpectedServiceShape:
            logger.error(f"❌ Unexpected API response structure: {response.text[:LOGGED_BODY_CHARS]}")
            raise
