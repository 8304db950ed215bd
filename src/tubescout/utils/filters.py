"""Duration and aspect-ratio checks for long-form landscape videos."""

import re
from typing import Optional

from tubescout.utils.errors import TooShortError, WrongAspectRatioError

MIN_DURATION_SECONDS = 60
TARGET_ASPECT_RATIO = 16 / 9
ASPECT_TOLERANCE = 0.02

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def duration_seconds(iso_duration: Optional[str]) -> int:
    """Convert the ``PT#H#M#S`` subset of ISO-8601 to seconds."""
    if not iso_duration:
        return 0
    match = _DURATION_RE.search(iso_duration)
    if not match:
        return 0
    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def is_long_form(video) -> bool:
    return video.duration_seconds > MIN_DURATION_SECONDS


def is_16x9(video) -> bool:
    """Check the medium thumbnail is 16:9. Missing dimensions pass."""
    width, height = video.thumbnail_width, video.thumbnail_height
    if not width or not height or width <= 0 or height <= 0:
        return True
    return abs(width / height - TARGET_ASPECT_RATIO) < ASPECT_TOLERANCE


def video_filter(video) -> Optional[str]:
    """Filter videos based on duration and aspect ratio.

    Args:
        video: VideoRecord to check

    Returns:
        String describing why video was filtered, or None if it passes
    """
    if not is_long_form(video):
        return f"Duration {video.duration_seconds}s is not over {MIN_DURATION_SECONDS}s"
    if not is_16x9(video):
        return f"Thumbnail {video.thumbnail_width}x{video.thumbnail_height} is not 16:9"
    return None


def ensure_acceptable(video, found_by_search: bool = False) -> None:
    """Raise if a single looked-up video isn't long-form and landscape."""
    if not is_long_form(video):
        if found_by_search:
            raise TooShortError(
                "Found a short video. This tool is for long-form videos only (over 60 seconds)."
            )
        raise TooShortError("This tool is for long-form videos only (over 60 seconds).")

    if not is_16x9(video):
        if found_by_search:
            raise WrongAspectRatioError(
                "Found a non-landscape video. This tool is for 16:9 videos only."
            )
        raise WrongAspectRatioError("This tool is for landscape (16:9) videos only.")
