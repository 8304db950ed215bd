"""AI service for generating illustrative download-link text using Google GenAI."""

import json
import logging
from typing import Tuple

from google.genai import Client
from google.genai import errors as genai_errors

from tubescout.models.video import VideoRecord
from tubescout.utils.errors import SummaryGenerationError
from tubescout.utils.retry import APIRateLimitError, retry_rate_limited

logger = logging.getLogger(__name__)

BEST_AVAILABLE = "Best Available"
QUALITY_OPTIONS = [BEST_AVAILABLE, "8K", "4K", "1440p", "1080p", "720p"]
FICTIONAL_LINK_PREFIX = "https://fictional-stream-link.com/"
GENERIC_ERROR_MESSAGE = "Could not generate download options."
RATE_LIMIT_CODE = 429


def parse_generation_error(error: Exception) -> Tuple[bool, str]:
    """Classify a generation failure.

    Returns:
        ``(is_rate_limit, message)``. The SDK error may carry the code
        directly, or the message may be a JSON document of the form
        ``{"error": {"code": 429, "message": "..."}}``.
    """
    is_rate_limit = False
    message = GENERIC_ERROR_MESSAGE

    if isinstance(error, genai_errors.APIError):
        if error.code == RATE_LIMIT_CODE:
            is_rate_limit = True
        if error.message:
            message = error.message
        return is_rate_limit, message

    raw = str(error)
    try:
        payload = json.loads(raw)
    except ValueError:
        # Not JSON; use the raw message when there is one
        if raw.strip():
            message = raw
        return is_rate_limit, message

    details = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(details, dict):
        if details.get("message"):
            message = details["message"]
        if details.get("code") == RATE_LIMIT_CODE:
            is_rate_limit = True

    return is_rate_limit, message


def build_prompt(video: VideoRecord, preferred_quality: str = BEST_AVAILABLE) -> str:
    if preferred_quality != BEST_AVAILABLE:
        quality_instruction = (
            f"Prioritize generating a fictional download link for {preferred_quality} resolution. "
            "Also include a few other high-resolution options like 8K, 4K, 1440p, and 1080p."
        )
    else:
        quality_instruction = (
            "Provide 5-6 options with different high resolutions (e.g., 8K, 4K, 1440p, 1080p, 720p) "
            "and formats (e.g., MP4, WebM)."
        )

    return f"""Generate a list of fictional download stream links for the following YouTube video.
{quality_instruction}
The links should be illustrative and not real. Start each link with "{FICTIONAL_LINK_PREFIX}".

Video Title: {video.title}
Video ID: {video.video_id}"""


class AIService:
    """Service for generating fictional stream-link text with Gemini."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        max_attempts: int = 3,
        base_delay: float = 2.0,
        client=None,
    ):
        """Initialize Google GenAI client.

        Args:
            api_key: Google GenAI API key
            model_name: Gemini model to use
            max_attempts: Total tries, including the first, on rate limiting
            base_delay: First backoff in seconds; doubles on each retry
            client: Prebuilt client, mainly for tests
        """
        if not api_key or not api_key.strip():
            raise ValueError("Gemini API key is required")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self.api_key = api_key.strip()
        self.model_name = model_name
        self.client = client or Client(api_key=self.api_key)
        self.max_attempts = max_attempts

        self._generate_with_retry = retry_rate_limited(max_attempts, base_delay)(self._generate_once)

        logger.info(f"Initialized AI service with model: {model_name}")

    def _generate_once(self, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
            )
        except Exception as e:
            is_rate_limit, message = parse_generation_error(e)
            logger.error(f"Gemini API error: {message}")
            if is_rate_limit:
                raise APIRateLimitError(message) from e
            raise SummaryGenerationError(message) from e

        if not response.text:
            logger.error("AI response is empty")
            raise SummaryGenerationError(GENERIC_ERROR_MESSAGE)
        return response.text.strip()

    def generate_summary(self, video: VideoRecord, preferred_quality: str = BEST_AVAILABLE) -> str:
        """Generate fictional download links for a video.

        Args:
            video: The video to describe
            preferred_quality: One of QUALITY_OPTIONS

        Returns:
            The generated text, stripped

        Raises:
            SummaryGenerationError: on any non-rate-limit error, or once
                rate-limit retries are exhausted
        """
        prompt = build_prompt(video, preferred_quality)
        logger.info(f"Generating links for '{video.title}' ({preferred_quality})")

        try:
            return self._generate_with_retry(prompt)
        except APIRateLimitError as e:
            raise SummaryGenerationError(str(e)) from e
