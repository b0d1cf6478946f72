"""
Yandex Cloud Translate Client

Translates lyric lines with the Yandex Cloud Translate v2 REST API.

API contract:
    POST {url}
    Authorization: Api-Key <key>
    {"targetLanguageCode": "ru", "texts": ["line one", ...], "folderId": "..."}

    200 {"translations": [{"text": "...", "detectedLanguageCode": "en"}, ...]}
    4xx {"code": 3, "message": "..."}
"""

import json
from typing import Any

import aiohttp

from lyrics_library.clients.errors import TranslationFailedError, TranslatorError
from lyrics_library.clients.formatting import format_lyrics
from lyrics_library.logging import get_logger, log_performance

logger = get_logger(__name__)

DEFAULT_TRANSLATE_URL = "https://translate.api.cloud.yandex.net/translate/v2/translate"


class YandexTranslator:
    """
    Client for the Yandex Cloud Translate API.

    Lines are sent as a batch and every translated text is normalized the
    same way fetched lyrics are, so a translator that reflows a line into
    several (or merges several into one) still yields clean lines.
    """

    def __init__(
        self,
        api_key: str,
        *,
        url: str = DEFAULT_TRANSLATE_URL,
        target_language: str = "ru",
        folder_id: str | None = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.url = url
        self.target_language = target_language
        self.folder_id = folder_id
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def connect(self) -> bool:
        """Initialize the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"Authorization": f"Api-Key {self.api_key}"},
            )
            logger.info("translator_connected", url=self.url, target=self.target_language)
        return True

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("translator_closed")

    def _request_body(self, lyrics: list[str]) -> dict[str, Any]:
        body: dict[str, Any] = {"targetLanguageCode": self.target_language, "texts": lyrics}
        if self.folder_id:
            body["folderId"] = self.folder_id
        return body

    async def translate_lyrics(self, lyrics: list[str]) -> list[str]:
        """
        Translate lyric lines into the configured target language.

        Args:
            lyrics: Normalized lyric lines

        Returns:
            Translated lines; the count may differ from the input

        Raises:
            TranslationFailedError: The API rejected the request or returned nothing usable
            TranslatorError: The API was unreachable or failed on its side
        """
        if not lyrics:
            return []

        log = logger.bind(op="client.yandex.translate_lyrics", line_count=len(lyrics))
        await self.connect()
        assert self._session is not None

        try:
            async with (
                log_performance(log, "yandex.translate"),
                self._session.post(self.url, json=self._request_body(lyrics)) as response,
            ):
                status = response.status
                body = await response.read()
        except (aiohttp.ClientError, TimeoutError) as exc:
            log.warning("translate_request_failed", error=str(exc))
            raise TranslatorError(f"translator request failed: {exc}") from exc

        try:
            payload = json.loads(body)
        except ValueError:
            payload = None

        if 400 <= status < 500:
            message = payload.get("message") if isinstance(payload, dict) else None
            log.warning("translation_rejected", status=status, message=message)
            raise TranslationFailedError(f"translator rejected request: {message or status}")
        if status != 200:
            raise TranslatorError(f"translator returned HTTP {status}")
        if payload is None:
            raise TranslatorError("translator returned malformed JSON")

        translations = payload.get("translations") if isinstance(payload, dict) else None
        if not translations:
            raise TranslationFailedError("translator returned no translations")

        lines: list[str] = []
        for item in translations:
            if not isinstance(item, dict):
                raise TranslatorError(f"translator returned a malformed translation: {item!r}")
            lines.extend(format_lyrics(item.get("text") or ""))
        if not lines:
            raise TranslationFailedError("translator returned empty translations")

        log.info("lyrics_translated", translated_line_count=len(lines))
        return lines
