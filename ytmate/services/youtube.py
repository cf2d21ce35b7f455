"""
YouTube service for fetching video metadata and transcripts.
"""
import asyncio
from typing import List, Optional, Tuple

from yt_dlp import YoutubeDL
from youtube_transcript_api import YouTubeTranscriptApi, TranscriptsDisabled, NoTranscriptFound
from youtube_transcript_api.proxies import GenericProxyConfig
from loguru import logger
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ytmate.core.cache import get_cached_video, set_cached_video
from ytmate.core.constants import YouTubeConfig
from ytmate.models import TranscriptSegment, Video, VideoReference, YtDlpVideoInfo
from ytmate.services import url_parser


class YouTubeService:
    """
    Service for gathering the context a summary is generated from.

    This service handles:
    1. Extracting the video title and description with yt-dlp.
    2. Fetching the transcript with youtube-transcript-api.
    3. Caching both per video ID to minimize external calls.

    Every failure is soft: the returned Video simply lacks the missing parts
    and the model works from the URL alone.
    """

    def __init__(self, proxy_url: Optional[str] = None, fetch_transcripts: bool = True):
        """
        Initialize the YouTubeService.

        Args:
            proxy_url: Optional HTTP(S) proxy for yt-dlp and transcript requests.
            fetch_transcripts: Disable to skip transcript requests entirely.
        """
        self.proxy_url = proxy_url
        self.fetch_transcripts = fetch_transcripts

    def _extract_video_info_sync(self, video_url: str) -> Optional[dict]:
        """
        Synchronous helper to extract video info using yt-dlp.

        Args:
            video_url: The normalized watch URL.

        Returns:
            The raw info dict from yt-dlp, or None.
        """
        ydl_opts = {
            "skip_download": True,
            "quiet": True,
            "no_warnings": True,
            "ignoreerrors": True,
            "noplaylist": True,
        }
        if self.proxy_url:
            ydl_opts["proxy"] = self.proxy_url

        with YoutubeDL(ydl_opts) as ydl:
            return ydl.extract_info(video_url, download=False)

    async def fetch_metadata(self, video: Video) -> Video:
        """
        Populate title and description using yt-dlp.

        This method runs the blocking yt-dlp call in a thread pool to avoid
        blocking the async event loop.
        """
        try:
            info_dict = await asyncio.to_thread(self._extract_video_info_sync, video.url)
        except Exception as e:
            logger.warning(f"Could not extract metadata for {video.id}: {e}")
            return video

        if not info_dict:
            logger.warning(f"No info returned from yt-dlp for video {video.id}")
            return video

        info = YtDlpVideoInfo(**info_dict)
        video.title = info.title
        video.description = info.description
        return video

    def _fetch_transcript_sync(self, video_id: str) -> Tuple[Optional[List[TranscriptSegment]], Optional[str]]:
        proxy_conf = None
        if self.proxy_url:
            proxy_conf = GenericProxyConfig(http_url=self.proxy_url, https_url=self.proxy_url)

        transcript_list = YouTubeTranscriptApi(proxy_config=proxy_conf).list(video_id)

        # Manual subtitles (any language) before automatic captions
        for generated in (False, True):
            for t in transcript_list:
                if t.is_generated == generated:
                    kind = "Automatic" if generated else "Manual"
                    logger.info(f"Video {video_id}: Using {kind} transcript in '{t.language}'")
                    segments = [
                        TranscriptSegment(text=item.text, start=item.start, duration=item.duration)
                        for item in t.fetch()
                    ]
                    return segments, t.language

        return None, None

    @retry(
        stop=stop_after_attempt(YouTubeConfig.TRANSCRIPT_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(Exception),
        reraise=True,
    )
    async def fetch_transcript(self, video: Video) -> Video:
        """
        Fetch the transcript with retries.

        Prioritizes Manual subtitles (any lang) > Automatic captions (any lang).

        Returns:
            Video: The same video with ``transcript`` and ``language`` populated
                   when a transcript exists.

        Raises:
            Exception: Transient failures are retried, then re-raised.
        """
        try:
            segments, lang = await asyncio.to_thread(self._fetch_transcript_sync, video.id)
        except (TranscriptsDisabled, NoTranscriptFound):
            logger.warning(f"No transcript found/disabled for video {video.id}")
            return video
        except Exception as e:
            logger.warning(f"Error fetching transcript for {video.id} (retrying): {e}")
            raise

        if segments:
            video.transcript = segments
            video.language = lang
            logger.info(f"Successfully fetched transcript for {video.id}")
        return video

    async def fetch_video(self, reference: VideoReference, video_url: Optional[str] = None) -> Video:
        """
        Gather title and transcript for a recognized video.

        Args:
            reference: The recognized video.
            video_url: Canonical watch URL, normalized from the raw input
                       when not given.

        Returns:
            Video: Cached or freshly fetched details. Never raises for
                   network or extraction failures.
        """
        cached = get_cached_video(reference.video_id)
        if cached:
            logger.debug(f"Video {reference.video_id} served from cache")
            return cached

        video = Video(
            id=reference.video_id,
            url=video_url or url_parser.normalize_url(reference.raw_input),
        )

        video = await self.fetch_metadata(video)

        if self.fetch_transcripts:
            try:
                video = await self.fetch_transcript(video)
            except Exception as e:
                logger.error(f"Failed to fetch transcript for {video.id} after retries: {e}")

        if video.title or video.transcript:
            set_cached_video(video)

        return video
