"""Client for the third-party media-resolution (cobalt) API."""

import logging
from typing import List

import requests

from tubescout.models.video import DirectLink
from tubescout.utils.errors import InvalidInputError, MediaServiceError, UnexpectedResponseError

logger = logging.getLogger(__name__)

SUGGESTIONS = (
    "\n\nSuggestions:\n"
    "- Use the yt-dlp command generator instead\n"
    "- Install yt-dlp locally for direct downloads\n"
    "- Check if your network blocks external download services"
)


def describe_http_failure(status: int, reason: str = "") -> str:
    """User-facing text for an HTTP failure from the download service."""
    if status == 403:
        message = "Access forbidden: The download service is blocking requests from this application."
    elif status == 429:
        message = "Too many requests: The download service is rate-limiting requests. Please try again later."
    elif status in (500, 502, 503, 504):
        message = (
            "Service unavailable: The download service is currently experiencing issues. "
            "Please try again later."
        )
    else:
        label = f"{status} {reason}".strip()
        message = f"Download service error ({label}): The third-party download service encountered an issue."
    return message + SUGGESTIONS


class MediaService:
    """Resolves a video URL to direct stream links."""

    def __init__(self, api_url: str, timeout: float = 30.0, session=None):
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_direct_links(self, url: str, quality: str = "max", audio_only: bool = False) -> List[DirectLink]:
        """Ask the service for stream links.

        Raises:
            InvalidInputError: blank URL
            MediaServiceError: HTTP/network failure or a service-side error
            UnexpectedResponseError: unknown response status
        """
        url = (url or "").strip()
        if not url:
            raise InvalidInputError("Please enter a YouTube URL first.")

        body = {"url": url, "vQuality": quality, "isAudioOnly": audio_only}
        logger.info(f"Requesting direct links for {url}")

        try:
            response = self.session.post(
                self.api_url,
                json=body,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else 0
            reason = e.response.reason if e.response is not None else ""
            logger.error(f"Download service returned HTTP {status}: {e}")
            raise MediaServiceError(describe_http_failure(status, reason or "")) from e
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Could not reach download service: {e}")
            raise MediaServiceError(
                "Network error: Unable to connect to the download service. This might be due to "
                "network blocking or the service being unavailable." + SUGGESTIONS
            ) from e
        except ValueError as e:
            raise UnexpectedResponseError(
                "Received an unexpected response from the download service."
            ) from e

        return self._parse_result(result)

    def _parse_result(self, result) -> List[DirectLink]:
        status = result.get("status") if isinstance(result, dict) else None

        if status == "stream" and result.get("url"):
            return [DirectLink(url=result["url"], quality="Best", type="Video")]

        if status == "picker" and result.get("picker"):
            picker = result["picker"]
            if not isinstance(picker, list) or not all(isinstance(item, dict) for item in picker):
                raise UnexpectedResponseError("Received a malformed picker list from the download service.")
            return [
                DirectLink(
                    url=item["url"],
                    quality=item.get("quality") or "N/A",
                    type=item.get("type", ""),
                )
                for item in picker
                if item.get("url")
            ]

        if status == "error":
            detail = result.get("text") or "The download service could not process the URL."
            if isinstance(detail, str):
                raise MediaServiceError(f"Download service error: {detail}")
            logger.error(f"Detailed error from download service: {detail}")
            raise MediaServiceError(
                "The download service returned a complex error. Check the logs for details."
            )

        raise UnexpectedResponseError("Received an unexpected response from the download service.")
