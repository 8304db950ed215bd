"""Build yt-dlp and ffmpeg command strings for local use."""

from typing import List, Optional

from yt_dlp.utils import sanitize_filename

YTDLP_QUALITY_OPTIONS = {
    "best": "Best",
    "2160": "4K (2160p)",
    "1440": "1440p",
    "1080": "1080p",
    "720": "720p",
}
YTDLP_FORMAT_OPTIONS = ["mp4", "mkv", "webm", "avi"]

DEFAULT_OUTPUT_TEMPLATE = "%(title)s.%(ext)s"


def safe_title(title: str) -> str:
    """Make a video title usable as a file name."""
    return sanitize_filename(title or "video") or "video"


def build_ytdlp_command(
    url: str,
    quality: str = "1080",
    fmt: str = "mp4",
    audio_only: bool = False,
    filename: str = "",
) -> Optional[str]:
    """Build a yt-dlp command line. Returns None for a blank URL."""
    url = (url or "").strip()
    if not url:
        return None

    parts = ["yt-dlp"]

    if audio_only:
        parts.append("-f bestaudio -x --audio-format mp3")
    else:
        if quality == "best":
            selector = "bv*+ba/b"
        else:
            selector = f"bv*[height<={quality}]+ba/b[height<={quality}]"
        parts.append(f'-f "{selector}" --merge-output-format {fmt}')

    filename = (filename or "").strip()
    if filename:
        if "." not in filename:
            filename = f"{filename}.{'mp3' if audio_only else fmt}"
        parts.append(f'-o "{filename}"')
    else:
        parts.append(f'-o "{DEFAULT_OUTPUT_TEMPLATE}"')

    parts.append(f'"{url}"')
    return " ".join(parts)


def build_ffmpeg_command(link: str, title: str, index: Optional[int] = None) -> str:
    """Stream-copy a link into ``<title>.mp4`` (``<title>_<index>.mp4`` if indexed)."""
    name = safe_title(title)
    if index is not None:
        name = f"{name}_{index}"
    return f'ffmpeg -i "{link}" -c copy "{name}.mp4"'


def build_ffmpeg_commands(links: List[str], title: str) -> str:
    """One command per link, numbered from 1 so output names don't collide."""
    return "\n".join(
        build_ffmpeg_command(link.strip(), title, index)
        for index, link in enumerate(links, start=1)
    )
