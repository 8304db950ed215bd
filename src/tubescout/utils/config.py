"""Configuration loading and validation for TubeScout."""

import os
import logging
from typing import Dict, List, Optional
from pathlib import Path
from dotenv import load_dotenv
from rich.logging import RichHandler

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / '.env')

DEFAULT_GEMINI_MODEL = 'gemini-2.5-flash'
DEFAULT_MEDIA_API_URL = 'https://co.wuk.sh/api/json'

# YouTube browser keys are 39 characters and start with this prefix
YOUTUBE_KEY_PREFIX = 'AIza'
YOUTUBE_KEY_LENGTH = 39


def load_config() -> Dict:
    """Load configuration from environment variables."""
    def resolve_path(path: Optional[str], default: Path) -> str:
        if not path:
            return str(default)
        return str(Path(path).expanduser())

    config = {
        # API keys (may also come from the key store)
        'youtube_api_key': os.getenv('YOUTUBE_API_KEY', ''),
        'gemini_api_key': os.getenv('GEMINI_API_KEY', ''),

        # Model configuration
        'gemini_model': os.getenv('GEMINI_MODEL', DEFAULT_GEMINI_MODEL),

        # Summary generation pacing
        'summary_max_attempts': int(os.getenv('SUMMARY_MAX_ATTEMPTS', '3')),
        'summary_base_delay_seconds': float(os.getenv('SUMMARY_BASE_DELAY_SECONDS', '2.0')),
        # ~3 requests per minute
        'batch_delay_seconds': float(os.getenv('BATCH_DELAY_SECONDS', '20.1')),

        # Third-party media resolution
        'media_api_url': os.getenv('MEDIA_API_URL', DEFAULT_MEDIA_API_URL),
        'media_api_timeout': float(os.getenv('MEDIA_API_TIMEOUT', '30')),

        # Local key persistence
        'key_store_path': resolve_path(
            os.getenv('KEY_STORE_PATH'), Path.home() / '.tubescout' / 'keys.json'
        ),

        'log_level': os.getenv('LOG_LEVEL', 'INFO'),
        'log_file': os.getenv('LOG_FILE'),
    }

    return config


def youtube_key_error(api_key: Optional[str]) -> Optional[str]:
    """Return a description of what's wrong with a YouTube key, or None."""
    key = (api_key or '').strip()
    if not key:
        return "YouTube API key is required to fetch data."
    if not key.startswith(YOUTUBE_KEY_PREFIX) or len(key) != YOUTUBE_KEY_LENGTH:
        return "Invalid YouTube API key format."
    return None


def validate_config(config: Dict, require_keys: bool = True) -> List[str]:
    """Validate configuration and return list of errors.

    With ``require_keys`` off the YouTube key is not checked, since it can
    still be set from inside the app.
    """
    errors = []

    if require_keys:
        key_error = youtube_key_error(config.get('youtube_api_key'))
        if key_error:
            errors.append(key_error)

    if config.get('summary_max_attempts', 3) < 1:
        errors.append("SUMMARY_MAX_ATTEMPTS must be at least 1")

    if config.get('batch_delay_seconds', 0) < 0:
        errors.append("BATCH_DELAY_SECONDS cannot be negative")

    # Gemini key is optional: summaries are simply unavailable without it

    return errors


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Set up logging configuration with Rich for terminal output."""
    # Clear any existing handlers
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False  # Disable markup to avoid conflicts
    )
    handlers: List[logging.Handler] = [rich_handler]

    # Optional plain text log file
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        handlers=handlers,
        format="%(message)s"
    )

    # Suppress noisy third-party loggers
    noisy_loggers = [
        'httpx',
        'google_genai',
        'google_genai.models',
        'googleapiclient.discovery_cache',
        'googleapiclient.discovery',
        'urllib3.connectionpool',
        'requests.packages.urllib3.connectionpool'
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
