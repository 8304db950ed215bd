"""Main TubeScout class for orchestrating lookups and link generation."""

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from tubescout.models.batch import BatchItem, LookupResult, SummaryResult
from tubescout.models.reference import (
    ChannelReference,
    PlaylistReference,
    SearchReference,
    VideoReference,
)
from tubescout.models.video import ChannelRecord, DirectLink
from tubescout.services.ai_service import AIService, BEST_AVAILABLE
from tubescout.services.media_service import MediaService
from tubescout.services.youtube_service import YouTubeService
from tubescout.utils.config import load_config, youtube_key_error
from tubescout.utils.errors import InvalidInputError
from tubescout.utils.filters import ensure_acceptable
from tubescout.utils.identifiers import classify

logger = logging.getLogger(__name__)


class LookupProcessor:
    """Central orchestrator for TubeScout.

    Services are built from the keys in ``config`` at call time, so updating
    a key takes effect on the next lookup. Factories can be swapped out for
    tests.
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        youtube_factory: Callable[[str], YouTubeService] = YouTubeService,
        ai_factory: Optional[Callable[[str], AIService]] = None,
        media_service: Optional[MediaService] = None,
    ):
        """Initialize the processor with configuration."""
        self.config = config or load_config()
        self.youtube_factory = youtube_factory
        self.ai_factory = ai_factory or self._default_ai_service
        self.media_service = media_service or MediaService(
            self.config.get("media_api_url", "https://co.wuk.sh/api/json"),
            self.config.get("media_api_timeout", 30.0),
        )
        self.result = LookupResult()
        self.running_batch = False
        self._cancel_requested = False

    def _default_ai_service(self, api_key: str) -> AIService:
        return AIService(
            api_key,
            self.config.get("gemini_model", "gemini-2.5-flash"),
            max_attempts=self.config.get("summary_max_attempts", 3),
            base_delay=self.config.get("summary_base_delay_seconds", 2.0),
        )

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    def _youtube_service(self) -> YouTubeService:
        return self.youtube_factory((self.config.get("youtube_api_key") or "").strip())

    def _ai_service(self) -> AIService:
        api_key = (self.config.get("gemini_api_key") or "").strip()
        if not api_key:
            raise InvalidInputError("Gemini API key is required to generate download options.")
        return self.ai_factory(api_key)

    async def fetch_details(self, query: str) -> LookupResult:
        """Look up whatever the query points at and replace the current result."""
        key_error = youtube_key_error(self.config.get("youtube_api_key"))
        if key_error:
            raise InvalidInputError(key_error)
        if not query or not query.strip():
            raise InvalidInputError("Please enter a YouTube URL or search query.")

        youtube = self._youtube_service()

        self.result = LookupResult()
        reference = classify(query)
        logger.info(f"Query classified as {reference}")

        result = LookupResult()
        if isinstance(reference, VideoReference):
            video = await self._run_blocking(youtube.get_video, reference.video_id)
            ensure_acceptable(video)
            result.video = video

        elif isinstance(reference, PlaylistReference):
            result.playlist = await self._run_blocking(youtube.get_playlist, reference.playlist_id)
            videos = await self._run_blocking(youtube.get_playlist_videos, reference.playlist_id)
            result.items = self._wrap(videos)

        elif isinstance(reference, ChannelReference):
            if reference.kind == "handle":
                channel = await self._run_blocking(youtube.get_channel_by_handle, reference.value)
            else:
                channel = await self._run_blocking(youtube.get_channel, reference.value)
            await self._load_channel(youtube, channel, result)

        elif isinstance(reference, SearchReference):
            hit = await self._run_blocking(youtube.search_first, reference.text)
            if hit.kind == "video":
                ensure_acceptable(hit.record, found_by_search=True)
                result.video = hit.record
            else:
                await self._load_channel(youtube, hit.record, result)

        else:
            raise TypeError(f"Unhandled reference type: {reference!r}")

        self.result = result
        logger.info(
            f"Lookup finished: video={bool(result.video)} channel={bool(result.channel)} "
            f"playlist={bool(result.playlist)} items={len(result.items)}"
        )
        return result

    async def _load_channel(self, youtube: YouTubeService, channel: ChannelRecord, result: LookupResult) -> None:
        result.channel = channel
        videos = await self._run_blocking(youtube.get_channel_videos, channel)
        result.items = self._wrap(videos)

    @staticmethod
    def _wrap(videos) -> List[BatchItem]:
        return [BatchItem(video=video) for video in videos]

    async def generate_single_summary(self, preferred_quality: str = BEST_AVAILABLE) -> SummaryResult:
        """Generate links for the currently loaded single video."""
        video = self.result.video
        if video is None:
            raise InvalidInputError("Look up a single video first.")

        ai_service = self._ai_service()
        self.result.summary = None
        text = await self._run_blocking(ai_service.generate_summary, video, preferred_quality)
        self.result.summary = SummaryResult(text)
        return self.result.summary

    async def generate_all_summaries(self, preferred_quality: str = BEST_AVAILABLE) -> List[BatchItem]:
        """Generate links for every video in the current listing."""
        await self.run_all(self.result.items, preferred_quality)
        return self.result.items

    async def run_all(self, items: List[BatchItem], preferred_quality: str = BEST_AVAILABLE) -> None:
        """Process items strictly one after another.

        A failure is recorded on its item and the run moves on. Every item is
        processed again on each call, summarised or not. Starting a second
        run while one is in progress raises InvalidInputError.
        """
        if not items:
            return

        if self.running_batch:
            raise InvalidInputError("A batch is already running.")

        ai_service = self._ai_service()
        delay = self.config.get("batch_delay_seconds", 20.1)
        self.running_batch = True
        self._cancel_requested = False

        try:
            for index, item in enumerate(items):
                if self._cancel_requested:
                    logger.info(f"Batch cancelled before item {index + 1} of {len(items)}")
                    break

                item.start()
                try:
                    text = await self._run_blocking(
                        ai_service.generate_summary, item.video, preferred_quality
                    )
                    item.finish(summary=SummaryResult(text))
                    logger.info(f"Generated {len(item.links)} links for '{item.video.title}'")
                except Exception as e:
                    logger.error(f"Failed to generate summary for \"{item.video.title}\": {e}")
                    item.finish(error=f"Failed: {str(e) or 'Could not generate summary.'}")
                finally:
                    item.loading = False

                if index < len(items) - 1 and not self._cancel_requested:
                    await asyncio.sleep(delay)
        finally:
            self.running_batch = False

    def cancel(self) -> None:
        """Stop a running batch before its next item. In-flight calls finish."""
        self._cancel_requested = True

    async def get_direct_links(self, url: str, audio_only: bool = False) -> List[DirectLink]:
        return await self._run_blocking(self.media_service.get_direct_links, url, "max", audio_only)
