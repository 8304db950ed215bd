"""YouTube Data API service for looking up videos, channels and playlists."""

import json
import logging
from typing import Dict, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tubescout.models.video import ChannelRecord, PlaylistRecord, SearchHit, VideoRecord
from tubescout.utils.errors import NotFoundError, UnexpectedResponseError, UpstreamHttpError
from tubescout.utils.filters import video_filter

logger = logging.getLogger(__name__)

# The API caps both page size and ids-per-call at 50
PAGE_SIZE = 50
VIDEO_BATCH_SIZE = 50

VIDEO_PARTS = "snippet,statistics,contentDetails"
CHANNEL_PARTS = "snippet,statistics,contentDetails,brandingSettings"


def _api_error_message(error: HttpError) -> str:
    """Pull ``error.message`` out of an API error body, if there is one."""
    try:
        content = error.content.decode("utf-8") if isinstance(error.content, bytes) else error.content
        return json.loads(content)["error"]["message"]
    except (ValueError, KeyError, TypeError, AttributeError):
        return ""


def classify_http_error(error: HttpError) -> UpstreamHttpError:
    """Turn an HttpError into a user-facing UpstreamHttpError."""
    status = error.resp.status
    api_message = _api_error_message(error)

    if status == 400:
        message = f"Bad Request: {api_message or 'Please check your inputs and API Key.'}"
        category = UpstreamHttpError.BAD_REQUEST
    elif status == 403:
        message = (
            "Forbidden: Your API key might be invalid, restricted, or have exceeded "
            f"its quota. ({api_message})"
        )
        category = UpstreamHttpError.FORBIDDEN
    elif status == 404:
        message = f"Not Found: The requested item could not be found. ({api_message})"
        category = UpstreamHttpError.NOT_FOUND
    elif status in (500, 503):
        message = "YouTube service is temporarily unavailable. Please try again later."
        category = UpstreamHttpError.UNAVAILABLE
    else:
        message = f"An unexpected API error occurred (Status: {status}). {api_message}".strip()
        category = UpstreamHttpError.UNKNOWN

    return UpstreamHttpError(message, status=status, category=category)


class YouTubeService:
    """Service for fetching YouTube metadata via the Data API v3."""

    def __init__(self, api_key: str, client=None):
        """Initialize the API client.

        Args:
            api_key: YouTube Data API key
            client: Prebuilt discovery client, mainly for tests
        """
        self.api_key = api_key
        self.client = client or build(
            "youtube", "v3", developerKey=api_key, cache_discovery=False
        )

    def _execute(self, request, what: str) -> Dict:
        try:
            return request.execute() or {}
        except HttpError as e:
            logger.error(f"YouTube API error while fetching {what}: {e}")
            raise classify_http_error(e) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"Network error while fetching {what}: {e}")
            raise UpstreamHttpError(
                f"Could not reach the YouTube API: {e}", category=UpstreamHttpError.UNKNOWN
            ) from e

    def get_video(self, video_id: str) -> VideoRecord:
        """Fetch full details for a single video."""
        logger.info(f"Fetching video {video_id}")
        result = self._execute(
            self.client.videos().list(part=VIDEO_PARTS, id=video_id), f"video {video_id}"
        )
        items = result.get("items") or []
        if not items:
            raise NotFoundError("Video not found or invalid ID.")
        return VideoRecord.from_api(items[0])

    def get_channel(self, channel_id: str) -> ChannelRecord:
        logger.info(f"Fetching channel {channel_id}")
        result = self._execute(
            self.client.channels().list(part=CHANNEL_PARTS, id=channel_id),
            f"channel {channel_id}",
        )
        items = result.get("items") or []
        if not items:
            raise NotFoundError("Channel not found or invalid ID.")
        return ChannelRecord.from_api(items[0])

    def get_channel_by_handle(self, handle: str) -> ChannelRecord:
        """Resolve an ``@handle`` to its channel id, then load full details."""
        logger.info(f"Resolving channel handle @{handle}")
        result = self._execute(
            self.client.channels().list(part="id", forHandle=handle),
            f"channel handle @{handle}",
        )
        items = result.get("items") or []
        if not items:
            raise NotFoundError(f"Channel with handle @{handle} not found.")
        return self.get_channel(items[0]["id"])

    def get_playlist(self, playlist_id: str) -> PlaylistRecord:
        logger.info(f"Fetching playlist {playlist_id}")
        result = self._execute(
            self.client.playlists().list(part="snippet", id=playlist_id),
            f"playlist {playlist_id}",
        )
        items = result.get("items") or []
        if not items:
            raise NotFoundError("Playlist not found or invalid ID.")
        return PlaylistRecord.from_api(items[0])

    def get_channel_videos(self, channel: ChannelRecord) -> List[VideoRecord]:
        """List a channel's qualifying uploads, newest first."""
        return self.get_playlist_videos(channel.uploads_playlist_id)

    def get_playlist_video_ids(self, playlist_id: str) -> List[str]:
        """Page through a playlist and collect its video ids in order."""
        video_ids: List[str] = []
        page_token: Optional[str] = None

        while True:
            params = {"part": "snippet", "playlistId": playlist_id, "maxResults": PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token

            result = self._execute(
                self.client.playlistItems().list(**params), f"items of playlist {playlist_id}"
            )
            for item in result.get("items") or []:
                video_id = (item.get("snippet") or {}).get("resourceId", {}).get("videoId")
                if video_id:
                    video_ids.append(video_id)

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Playlist {playlist_id} has {len(video_ids)} items")
        return video_ids

    def get_videos(self, video_ids: List[str]) -> List[VideoRecord]:
        """Fetch details for many videos, in batches the API accepts.

        Results come back in whatever order the API returns them.
        """
        videos: List[VideoRecord] = []
        for start in range(0, len(video_ids), VIDEO_BATCH_SIZE):
            batch = video_ids[start:start + VIDEO_BATCH_SIZE]
            result = self._execute(
                self.client.videos().list(part=VIDEO_PARTS, id=",".join(batch)),
                f"{len(batch)} videos",
            )
            videos.extend(VideoRecord.from_api(item) for item in result.get("items") or [])
        return videos

    def get_playlist_videos(self, playlist_id: str) -> List[VideoRecord]:
        """Return the playlist's long-form 16:9 videos in playlist order."""
        video_ids = self.get_playlist_video_ids(playlist_id)
        if not video_ids:
            return []

        videos = self.get_videos(video_ids)

        kept: Dict[str, VideoRecord] = {}
        filtered_count = 0
        for video in videos:
            filter_result = video_filter(video)
            if filter_result:
                filtered_count += 1
                logger.debug(f"Video {video.video_id} filtered: {filter_result}")
                continue
            kept[video.video_id] = video

        if filtered_count > 0:
            logger.info(f"Filtered out {filtered_count} videos that didn't meet criteria")

        return [kept[video_id] for video_id in video_ids if video_id in kept]

    def search_first(self, query: str) -> SearchHit:
        """Search and resolve the single top result to full details."""
        logger.info(f"Searching YouTube for: '{query}'")
        result = self._execute(
            self.client.search().list(part="snippet", q=query, maxResults=1),
            f"search '{query}'",
        )
        items = result.get("items") or []
        if items:
            first = items[0] if isinstance(items[0], dict) else {}
            hit = first.get("id") or {}
            if not isinstance(hit, dict):
                raise UnexpectedResponseError("Search result has no usable id")
            kind = hit.get("kind")
            if kind == "youtube#video":
                if not hit.get("videoId"):
                    raise UnexpectedResponseError("Video search result is missing 'videoId'")
                return SearchHit("video", self.get_video(hit["videoId"]))
            if kind == "youtube#channel":
                if not hit.get("channelId"):
                    raise UnexpectedResponseError("Channel search result is missing 'channelId'")
                return SearchHit("channel", self.get_channel(hit["channelId"]))

        raise NotFoundError("No results found for your search query.")
