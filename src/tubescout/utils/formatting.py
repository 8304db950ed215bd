"""Display helpers for video metadata."""

from typing import Dict, Optional, Union
from urllib.parse import quote

from tubescout.utils.filters import duration_seconds

YOUTUBE_CATEGORIES = {
    '1': 'Film & Animation', '2': 'Autos & Vehicles', '10': 'Music', '15': 'Pets & Animals',
    '17': 'Sports', '18': 'Short Movies', '19': 'Travel & Events', '20': 'Gaming',
    '21': 'Videoblogging', '22': 'People & Blogs', '23': 'Comedy', '24': 'Entertainment',
    '25': 'News & Politics', '26': 'Howto & Style', '27': 'Education', '28': 'Science & Technology',
    '29': 'Nonprofits & Activism', '30': 'Movies', '31': 'Anime/Animation', '32': 'Action/Adventure',
    '33': 'Classics', '34': 'Comedy', '35': 'Documentary', '36': 'Drama', '37': 'Family',
    '38': 'Foreign', '39': 'Horror', '40': 'Sci-Fi/Fantasy', '41': 'Thriller', '42': 'Shorts',
    '43': 'Shows', '44': 'Trailers',
}

_COMPACT_UNITS = [(1_000_000_000_000, 'T'), (1_000_000_000, 'B'), (1_000_000, 'M'), (1_000, 'K')]


def category_name(category_id: str) -> str:
    return YOUTUBE_CATEGORIES.get(category_id, 'Unknown')


def format_duration(iso_duration: str) -> str:
    """``PT1H2M3S`` -> ``1:02:03``; ``PT4M5S`` -> ``04:05``."""
    seconds = duration_seconds(iso_duration)
    if seconds == 0:
        return 'N/A'
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    prefix = f"{hours}:" if hours > 0 else ""
    return f"{prefix}{minutes:02d}:{secs:02d}"


def format_number(value: Optional[Union[str, int]]) -> str:
    """Compact count formatting: 1234 -> 1.2K, 45678 -> 46K, 5600000 -> 5.6M."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return '0'

    for threshold, suffix in _COMPACT_UNITS:
        if abs(number) >= threshold:
            scaled = number / threshold
            if abs(scaled) >= 10:
                text = f"{scaled:.0f}"
            else:
                text = f"{scaled:.1f}".rstrip('0').rstrip('.')
            return f"{text}{suffix}"
    return str(number)


def video_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def embed_url(video_id: str, origin: Optional[str] = None) -> str:
    url = f"https://www.youtube.com/embed/{video_id}"
    return f"{url}?origin={origin}" if origin else url


def share_links(video_id: str, title: str) -> Dict[str, str]:
    """Email, Twitter and Facebook share links for a video."""
    url = quote(video_url(video_id), safe='')
    encoded_title = quote(title, safe='')
    return {
        'email': f"mailto:?subject={encoded_title}&body=Check out this video:%0A{url}",
        'twitter': f"https://twitter.com/intent/tweet?url={url}&text={encoded_title}",
        'facebook': f"https://www.facebook.com/sharer/sharer.php?u={url}",
    }
