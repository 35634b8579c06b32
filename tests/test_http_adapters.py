"""Tests for the outbound HTTP clients against a local aiohttp server."""

import asyncio
from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp import test_utils

from core.exceptions import LLMServiceError, SynthesisStreamError, UpstreamTimeoutError
from core.llm_client_base import BaseLLMClient, LLMConfig
from speech import SpeechClient, SpeechRequest, SpeechSynthesizer


@asynccontextmanager
async def serve(*routes):
    """Run an aiohttp app with the given routes on a free local port."""
    app = web.Application()
    app.router.add_routes(routes)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


def gemini_reply(*texts: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]}


class TestGeminiClient:
    """BaseLLMClient talking to a stand-in generateContent endpoint."""

    @pytest.mark.asyncio
    async def test_posts_prompt_and_joins_candidate_text(self) -> None:
        received = []

        async def generate(request: web.Request) -> web.Response:
            received.append({
                "path": request.path,
                "api_key": request.headers.get("x-goog-api-key"),
                "body": await request.json(),
            })
            return web.json_response(gemini_reply("<h1>Main", " Points</h1>"))

        async with serve(web.post("/v1beta/models/{model}", generate)) as server:
            client = BaseLLMClient(LLMConfig(
                api_url=str(server.make_url("/")),
                api_key="test-key",
                temperature=0.2,
                max_tokens=512,
                task_name="summarize",
            ))
            try:
                text = await client.generate_text_with_logging("Summarize this")
            finally:
                await client.close()

        assert text == "<h1>Main Points</h1>"
        assert received[0]["path"] == "/v1beta/models/gemini-2.0-flash:generateContent"
        assert received[0]["api_key"] == "test-key"
        body = received[0]["body"]
        assert body["contents"][0]["parts"][0]["text"] == "Summarize this"
        assert body["generationConfig"] == {"temperature": 0.2, "maxOutputTokens": 512}

    @pytest.mark.asyncio
    async def test_reply_without_candidates_is_empty(self) -> None:
        async def generate(request: web.Request) -> web.Response:
            return web.json_response({"promptFeedback": {"blockReason": "SAFETY"}})

        async with serve(web.post("/v1beta/models/{model}", generate)) as server:
            client = BaseLLMClient(LLMConfig(api_url=str(server.make_url("/")), api_key="k"))
            try:
                assert await client.generate_text_with_logging("prompt") == ""
            finally:
                await client.close()

    @pytest.mark.asyncio
    async def test_error_status_carries_api_message(self) -> None:
        async def generate(request: web.Request) -> web.Response:
            return web.json_response(
                {"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}},
                status=400,
            )

        async with serve(web.post("/v1beta/models/{model}", generate)) as server:
            client = BaseLLMClient(LLMConfig(api_url=str(server.make_url("/")), api_key="bad"))
            try:
                with pytest.raises(LLMServiceError, match="HTTP 400: API key not valid"):
                    await client.generate_text_with_logging("prompt")
            finally:
                await client.close()

    @pytest.mark.asyncio
    async def test_error_status_without_json_uses_reason(self) -> None:
        async def generate(request: web.Request) -> web.Response:
            return web.Response(text="upstream down", status=503)

        async with serve(web.post("/v1beta/models/{model}", generate)) as server:
            client = BaseLLMClient(LLMConfig(api_url=str(server.make_url("/")), api_key="k"))
            try:
                with pytest.raises(LLMServiceError, match="HTTP 503: Service Unavailable") as exc_info:
                    await client.generate_text_with_logging("prompt")
            finally:
                await client.close()

        assert not isinstance(exc_info.value, UpstreamTimeoutError)

    @pytest.mark.asyncio
    async def test_client_timeout_raises_upstream_timeout(self) -> None:
        async def generate(request: web.Request) -> web.Response:
            await asyncio.sleep(1)
            return web.json_response(gemini_reply("late"))

        async with serve(web.post("/v1beta/models/{model}", generate)) as server:
            client = BaseLLMClient(LLMConfig(api_url=str(server.make_url("/")), api_key="k", timeout=0.1))
            try:
                with pytest.raises(UpstreamTimeoutError):
                    await client.generate_text_with_logging("prompt")
            finally:
                await client.close()


class TestSpeechClient:
    """SpeechClient streaming from a stand-in TTS endpoint."""

    @pytest.mark.asyncio
    async def test_segments_are_requested_and_streamed_in_order(self) -> None:
        queries = []

        async def tts(request: web.Request) -> web.Response:
            queries.append(dict(request.query))
            return web.Response(body=f"audio-{request.query['idx']};".encode(), content_type="audio/mpeg")

        async with serve(web.get("/translate_tts", tts)) as server:
            client = SpeechClient(url=str(server.make_url("/translate_tts")), max_chars=10)
            try:
                chunks = [chunk async for chunk in client.stream("hello world again", "fr")]
            finally:
                await client.close()

        assert b"".join(chunks) == b"audio-0;audio-1;audio-2;"
        assert [q["q"] for q in queries] == ["hello", "world", "again"]
        assert [q["idx"] for q in queries] == ["0", "1", "2"]
        assert all(q["total"] == "3" for q in queries)
        assert all(q["tl"] == "fr" for q in queries)
        assert all(q["client"] == "tw-ob" for q in queries)
        assert queries[0]["textlen"] == "5"

    @pytest.mark.asyncio
    async def test_error_status_raises_stream_error(self) -> None:
        async def tts(request: web.Request) -> web.Response:
            if request.query["idx"] == "1":
                return web.Response(status=503)
            return web.Response(body=b"partial", content_type="audio/mpeg")

        async with serve(web.get("/translate_tts", tts)) as server:
            client = SpeechClient(url=str(server.make_url("/translate_tts")), max_chars=10)
            try:
                with pytest.raises(SynthesisStreamError, match="HTTP 503 for segment 2/3"):
                    async for _ in client.stream("hello world again", "en"):
                        pass
            finally:
                await client.close()

    @pytest.mark.asyncio
    async def test_synthesizer_discards_audio_when_a_segment_fails(self) -> None:
        async def tts(request: web.Request) -> web.Response:
            if request.query["idx"] == "1":
                return web.Response(status=429)
            return web.Response(body=b"partial", content_type="audio/mpeg")

        async with serve(web.get("/translate_tts", tts)) as server:
            client = SpeechClient(url=str(server.make_url("/translate_tts")), max_chars=10)
            synthesizer = SpeechSynthesizer(client)
            try:
                with pytest.raises(SynthesisStreamError, match="HTTP 429"):
                    await synthesizer.synthesize(SpeechRequest(text="hello world"))
            finally:
                await client.close()
