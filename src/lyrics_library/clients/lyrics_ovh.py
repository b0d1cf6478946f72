"""
lyrics.ovh Client

Fetches raw lyrics for an artist/title pair from the public lyrics.ovh API and
normalizes them into lines.

API contract:
    GET {base_url}/{artist}/{title}
    200 {"lyrics": "..."}            -> lyrics found (may still be empty)
    404 {"error": "No lyrics found"} -> no lyrics for that track
"""

from urllib.parse import quote

import aiohttp
from yarl import URL

from lyrics_library.clients.errors import LyricsNotFoundError, LyricsProviderError
from lyrics_library.clients.formatting import format_lyrics
from lyrics_library.logging import get_logger, log_performance

logger = get_logger(__name__)


class LyricsOvhClient:
    """
    Client for the lyrics.ovh API.

    Usage:
        client = LyricsOvhClient("https://api.lyrics.ovh/v1")
        await client.connect()

        lines = await client.lyrics("Juice WRLD", "Lucid Dreams")

        await client.close()
    """

    def __init__(self, base_url: str = "https://api.lyrics.ovh/v1", timeout: float = 10.0):
        """
        Initialize the lyrics client.

        Args:
            base_url: API root, without a trailing slash
            timeout: Total per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def connect(self) -> bool:
        """Initialize the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            logger.info("lyrics_client_connected", base_url=self.base_url)
        return True

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("lyrics_client_closed")

    def _track_url(self, artist: str, title: str) -> URL:
        # Titles routinely contain "/" and "?", which must not split the path.
        path = f"{quote(artist, safe='')}/{quote(title, safe='')}"
        return URL(f"{self.base_url}/{path}", encoded=True)

    async def lyrics(self, artist: str, title: str) -> list[str]:
        """
        Fetch the lyrics of a track.

        Args:
            artist: Artist name
            title: Song title

        Returns:
            Normalized, non-empty lyric lines

        Raises:
            LyricsNotFoundError: The provider has no lyrics for this track
            LyricsProviderError: The request failed or the reply was unusable
        """
        log = logger.bind(op="client.lyrics_ovh.lyrics", artist=artist, title=title)
        await self.connect()
        assert self._session is not None

        url = self._track_url(artist, title)
        log.debug("fetching_lyrics", url=str(url))

        try:
            async with log_performance(log, "lyrics_ovh.get"), self._session.get(url) as response:
                if response.status == 404:
                    raise LyricsNotFoundError(f"no lyrics for {artist} - {title}")
                if response.status != 200:
                    raise LyricsProviderError(f"lyrics.ovh returned HTTP {response.status}")
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as exc:
            log.warning("lyrics_request_failed", error=str(exc))
            raise LyricsProviderError(f"lyrics.ovh request failed: {exc}") from exc
        except ValueError as exc:
            raise LyricsProviderError("lyrics.ovh returned malformed JSON") from exc

        if not isinstance(payload, dict):
            raise LyricsProviderError("lyrics.ovh returned an unexpected payload")

        raw = payload.get("lyrics") or ""
        if not raw:
            if payload.get("error"):
                log.debug("lyrics_provider_error", error=payload["error"])
            raise LyricsNotFoundError(f"no lyrics for {artist} - {title}")

        lines = format_lyrics(raw)
        if not lines:
            raise LyricsNotFoundError(f"blank lyrics for {artist} - {title}")

        log.info("lyrics_fetched", line_count=len(lines))
        return lines
