"""Interactive terminal entry point for TubeScout."""

import asyncio
import logging
import signal
import sys
from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

from tubescout.lookup_processor import LookupProcessor
from tubescout.models.batch import LookupResult
from tubescout.models.video import VideoRecord
from tubescout.services.ai_service import BEST_AVAILABLE, QUALITY_OPTIONS
from tubescout.utils.commands import (
    YTDLP_FORMAT_OPTIONS,
    YTDLP_QUALITY_OPTIONS,
    build_ffmpeg_commands,
    build_ytdlp_command,
)
from tubescout.utils.config import load_config, setup_logging, validate_config, youtube_key_error
from tubescout.utils.errors import TubeScoutError
from tubescout.utils.formatting import category_name, format_duration, format_number, share_links
from tubescout.utils.key_store import KeyStore

logger = logging.getLogger(__name__)

MENU = {
    "1": "Look up a URL or search",
    "2": "Generate fictional download links",
    "3": "Show ffmpeg commands for generated links",
    "4": "Build a yt-dlp command",
    "5": "Fetch direct download links",
    "6": "Set API keys",
    "q": "Quit",
}


class TubeScoutApp:
    """Main application class for TubeScout."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.config = load_config()
        self.key_store = KeyStore(self.config["key_store_path"])
        # Stored keys win over the environment once the user has set them
        self.config["youtube_api_key"] = self.key_store.youtube_api_key or self.config["youtube_api_key"]
        self.config["gemini_api_key"] = self.key_store.gemini_api_key or self.config["gemini_api_key"]
        self.processor = LookupProcessor(self.config)
        self.preferred_quality = BEST_AVAILABLE
        self.running = False

    async def start(self) -> None:
        """Run the interactive loop until the user quits."""
        setup_logging(self.config.get("log_level", "INFO"), self.config.get("log_file"))
        config_errors = validate_config(self.config, require_keys=False)
        if config_errors:
            error_msg = "Configuration errors: " + "; ".join(config_errors)
            logger.error(error_msg)
            raise ValueError(error_msg)

        key_error = youtube_key_error(self.config.get("youtube_api_key"))
        if key_error:
            logger.warning(f"{key_error} Set it from the keys menu before looking anything up.")

        logger.info("Starting TubeScout...")
        self.running = True

        while self.running:
            choice = Prompt.ask(
                "\n" + "\n".join(f"[{key}] {label}" for key, label in MENU.items()),
                choices=list(MENU),
                default="1",
                console=self.console,
            )
            try:
                await self._dispatch(choice)
            except TubeScoutError as e:
                self.console.print(f"[red]{e}[/red]")

    async def _dispatch(self, choice: str) -> None:
        if choice == "1":
            query = Prompt.ask("YouTube URL or search query", console=self.console)
            with self.console.status("Fetching..."):
                result = await self.processor.fetch_details(query)
            self._show_result(result)
        elif choice == "2":
            await self._generate_links()
        elif choice == "3":
            self._show_ffmpeg_commands()
        elif choice == "4":
            self._build_ytdlp_command()
        elif choice == "5":
            await self._show_direct_links()
        elif choice == "6":
            self._set_keys()
        else:
            self.running = False

    def _show_video(self, video: VideoRecord) -> None:
        table = Table(title=video.title, show_header=False)
        table.add_row("URL", video.url)
        table.add_row("Channel", video.channel_title)
        table.add_row("Published", video.published_at)
        table.add_row("Duration", format_duration(video.duration))
        table.add_row("Category", category_name(video.category_id))
        table.add_row("Views", format_number(video.view_count))
        table.add_row("Likes", format_number(video.like_count))
        table.add_row("Comments", format_number(video.comment_count))
        if video.tags:
            table.add_row("Tags", ", ".join(video.tags))
        table.add_row("Share", share_links(video.video_id, video.title)["twitter"])
        self.console.print(table)
        if video.description:
            self.console.print(video.description, markup=False)

    def _show_result(self, result: LookupResult) -> None:
        if result.video:
            self._show_video(result.video)
            return

        if result.channel:
            channel = result.channel
            self.console.print(
                f"[bold]{channel.title}[/bold] {channel.custom_url} - "
                f"{format_number(channel.subscriber_count)} subscribers, "
                f"{format_number(channel.video_count)} videos"
            )
        elif result.playlist:
            self.console.print(f"[bold]{result.playlist.title}[/bold] by {result.playlist.channel_title}")

        table = Table("#", "Title", "Duration", "Views")
        for index, video in enumerate(result.videos, start=1):
            table.add_row(str(index), video.title, format_duration(video.duration), format_number(video.view_count))
        self.console.print(table)
        self.console.print(f"{len(result.items)} long-form 16:9 videos")

    async def _generate_links(self) -> None:
        self.preferred_quality = Prompt.ask(
            "Preferred quality", choices=QUALITY_OPTIONS, default=self.preferred_quality, console=self.console
        )
        result = self.processor.result

        if result.video:
            with self.console.status("Generating..."):
                summary = await self.processor.generate_single_summary(self.preferred_quality)
            self.console.print(summary.text, markup=False)
            return

        if not result.items:
            self.console.print("Nothing loaded yet. Look something up first.")
            return

        delay = self.config.get("batch_delay_seconds", 20.1)
        if not Confirm.ask(
            f"Generate links for {len(result.items)} videos? This takes about "
            f"{delay * (len(result.items) - 1):.0f}s (Ctrl-C stops after the current video)",
            console=self.console,
        ):
            return

        previous = signal.signal(signal.SIGINT, self._signal_handler)
        try:
            await self.processor.generate_all_summaries(self.preferred_quality)
        finally:
            signal.signal(signal.SIGINT, previous)

        for item in result.items:
            if item.error:
                self.console.print(f"[red]{item.video.title}: {item.error}[/red]")
            elif item.summary:
                self.console.print(f"[green]{item.video.title}[/green]: {len(item.links)} links")

    def _show_ffmpeg_commands(self) -> None:
        result = self.processor.result
        if result.video and result.summary and result.summary.links:
            self.console.print(build_ffmpeg_commands(result.summary.links, result.video.title), markup=False)
            return

        shown = False
        for item in result.items:
            if item.links:
                self.console.print(build_ffmpeg_commands(item.links, item.video.title), markup=False)
                shown = True
        if not shown:
            self.console.print("No generated links yet.")

    def _build_ytdlp_command(self) -> None:
        url = Prompt.ask("Video URL", console=self.console)
        audio_only = Confirm.ask("Audio only?", default=False, console=self.console)
        quality, fmt = "1080", "mp4"
        if not audio_only:
            quality = Prompt.ask("Quality", choices=list(YTDLP_QUALITY_OPTIONS), default="1080", console=self.console)
            fmt = Prompt.ask("Format", choices=YTDLP_FORMAT_OPTIONS, default="mp4", console=self.console)
        filename = Prompt.ask("Output filename (blank for title)", default="", console=self.console)

        command = build_ytdlp_command(url, quality, fmt, audio_only, filename)
        if command:
            self.console.print(command, markup=False)
        else:
            self.console.print("Please enter a YouTube URL first.")

    async def _show_direct_links(self) -> None:
        url = Prompt.ask("Video URL", console=self.console)
        with self.console.status("Contacting download service..."):
            links = await self.processor.get_direct_links(url)

        table = Table("Type", "Quality", "URL")
        for link in links:
            table.add_row(link.type, link.quality, link.url)
        self.console.print(table)

    def _set_keys(self) -> None:
        youtube_key = Prompt.ask(
            "YouTube API key", default=self.key_store.youtube_api_key, password=True, console=self.console
        )
        gemini_key = Prompt.ask(
            "Gemini API key", default=self.key_store.gemini_api_key, password=True, console=self.console
        )
        self.key_store.youtube_api_key = youtube_key
        self.key_store.gemini_api_key = gemini_key
        self.config["youtube_api_key"] = self.key_store.youtube_api_key
        self.config["gemini_api_key"] = self.key_store.gemini_api_key
        logger.info("API keys updated")

    def _signal_handler(self, signum, _):
        """Stop the batch after the video currently being processed."""
        logger.info(f"Received signal {signum}, stopping after the current video...")
        self.processor.cancel()


def main():
    """Main entry point."""
    app = TubeScoutApp()

    try:
        asyncio.run(app.start())
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
