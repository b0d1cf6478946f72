"""Tests for the lyrics.ovh client against a local HTTP server."""

import pytest
from aiohttp import web

from lyrics_library.clients import LyricsNotFoundError, LyricsOvhClient, LyricsProviderError


@pytest.fixture
async def make_client(http_server):
    clients = []

    async def _make(handler):
        server = await http_server(handler)
        client = LyricsOvhClient(base_url=str(server.make_url("/v1")), timeout=2.0)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.close()


class TestLyricsOvhClient:
    async def test_returns_normalized_lines(self, make_client):
        seen = []

        async def handler(request):
            seen.append(request.raw_path)
            return web.json_response({"lyrics": "I still see your shadows\r\n\r\n in my room "})

        client = await make_client(handler)
        lines = await client.lyrics("Juice WRLD", "Lucid Dreams")

        assert lines == ["I still see your shadows", "in my room"]
        assert seen == ["/v1/Juice%20WRLD/Lucid%20Dreams"]

    async def test_path_segments_are_quoted(self, make_client):
        seen = []

        async def handler(request):
            seen.append(request.raw_path)
            return web.json_response({"lyrics": "thunder"})

        client = await make_client(handler)
        await client.lyrics("AC/DC", "Who Made Who?")

        assert seen == ["/v1/AC%2FDC/Who%20Made%20Who%3F"]

    async def test_404_is_not_found(self, make_client):
        async def handler(request):
            return web.json_response({"error": "No lyrics found"}, status=404)

        client = await make_client(handler)
        with pytest.raises(LyricsNotFoundError):
            await client.lyrics("Nobody", "Nothing")

    async def test_empty_lyrics_is_not_found(self, make_client):
        async def handler(request):
            return web.json_response({"lyrics": "\r\n  \n"})

        client = await make_client(handler)
        with pytest.raises(LyricsNotFoundError):
            await client.lyrics("Juice WRLD", "Instrumental")

    async def test_server_error_is_provider_error(self, make_client):
        async def handler(request):
            return web.json_response({"error": "boom"}, status=500)

        client = await make_client(handler)
        with pytest.raises(LyricsProviderError) as exc_info:
            await client.lyrics("Juice WRLD", "Lucid Dreams")

        assert not isinstance(exc_info.value, LyricsNotFoundError)

    async def test_malformed_json_is_provider_error(self, make_client):
        async def handler(request):
            return web.Response(text="<html>maintenance</html>")

        client = await make_client(handler)
        with pytest.raises(LyricsProviderError):
            await client.lyrics("Juice WRLD", "Lucid Dreams")

    async def test_unreachable_host_is_provider_error(self, http_server):
        async def handler(request):
            return web.json_response({"lyrics": "never"})

        server = await http_server(handler)
        base_url = str(server.make_url("/v1"))
        await server.close()

        client = LyricsOvhClient(base_url=base_url, timeout=1.0)
        try:
            with pytest.raises(LyricsProviderError) as exc_info:
                await client.lyrics("Juice WRLD", "Lucid Dreams")
        finally:
            await client.close()

        assert not isinstance(exc_info.value, LyricsNotFoundError)
