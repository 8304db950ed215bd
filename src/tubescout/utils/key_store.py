"""Local persistence for the YouTube and Gemini API keys."""

import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

YOUTUBE_KEY_NAME = "youtubeApiKey"
GEMINI_KEY_NAME = "geminiApiKey"


class KeyStore:
    """Two string values kept in a small JSON file.

    Keys are read once at startup and written back on every change.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._values: Dict[str, str] = {YOUTUBE_KEY_NAME: "", GEMINI_KEY_NAME: ""}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable key store {self.path}: {e}")
            return

        for name in self._values:
            value = data.get(name) if isinstance(data, dict) else None
            if isinstance(value, str):
                self._values[name] = value

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._values, f, indent=2)
        logger.debug(f"Saved API keys to {self.path}")

    @property
    def youtube_api_key(self) -> str:
        return self._values[YOUTUBE_KEY_NAME]

    @youtube_api_key.setter
    def youtube_api_key(self, value: str) -> None:
        self._values[YOUTUBE_KEY_NAME] = (value or "").strip()
        self._save()

    @property
    def gemini_api_key(self) -> str:
        return self._values[GEMINI_KEY_NAME]

    @gemini_api_key.setter
    def gemini_api_key(self, value: str) -> None:
        self._values[GEMINI_KEY_NAME] = (value or "").strip()
        self._save()
