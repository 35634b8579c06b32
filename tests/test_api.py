"""End-to-end tests for the HTTP surface."""

import re

import pytest
from fastapi.testclient import TestClient

from core.exceptions import LLMServiceError
from core.formatter import TIMEOUT_FRAGMENT
from helpers import FakeLLMClient, FakeSpeechClient
from speech import SpeechSynthesizer, get_synthesizer
from summarization import Summarizer, get_summarizer


def upload(pdf_bytes: bytes, field: str = "pdf") -> dict:
    return {field: ("report.pdf", pdf_bytes, "application/pdf")}


@pytest.fixture
def use_llm(app):
    """Swap the summarizer for one backed by a FakeLLMClient."""
    def _use(deadline_seconds: float = 1.0, **kwargs) -> FakeLLMClient:
        client = FakeLLMClient(**kwargs)
        summarizer = Summarizer(client=client, deadline_seconds=deadline_seconds)
        app.dependency_overrides[get_summarizer] = lambda: summarizer
        return client
    return _use


@pytest.fixture
def use_speech(app):
    """Swap the synthesizer for one backed by a FakeSpeechClient."""
    def _use(chunks, error=None) -> FakeSpeechClient:
        client = FakeSpeechClient(chunks, error=error)
        synthesizer = SpeechSynthesizer(client, default_language="en")
        app.dependency_overrides[get_synthesizer] = lambda: synthesizer
        return client
    return _use


class TestProcessPdf:
    """POST /api/process-pdf"""

    def test_summary_has_three_sections(self, test_client: TestClient, use_llm, sample_pdf_bytes, fenced_template_reply) -> None:
        client = use_llm(response=fenced_template_reply)

        response = test_client.post("/api/process-pdf", files=upload(sample_pdf_bytes))

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        for title in ("Main Points", "Author", "Date"):
            assert len(re.findall(rf"<h1[^>]*>{title}</h1>\s*<ul", response.text)) == 1
        assert "<li" in response.text
        assert "```" not in response.text
        assert "Jane Doe" in client.prompts[0]

    def test_missing_file_field(self, test_client: TestClient, use_llm) -> None:
        client = use_llm(response="<h1>unused</h1>")

        response = test_client.post("/api/process-pdf", data={"other": "value"})

        assert response.status_code == 400
        assert response.text == "No PDF file uploaded"
        assert client.prompts == []

    def test_wrong_field_name(self, test_client: TestClient, sample_pdf_bytes) -> None:
        response = test_client.post("/api/process-pdf", files=upload(sample_pdf_bytes, field="file"))

        assert response.status_code == 400
        assert response.text == "No PDF file uploaded"

    def test_unreadable_pdf(self, test_client: TestClient, use_llm) -> None:
        client = use_llm(response="<h1>unused</h1>")

        response = test_client.post("/api/process-pdf", files=upload(b"not a pdf"))

        assert response.status_code == 500
        assert response.text.startswith("Error processing PDF: ")
        assert client.prompts == []

    def test_timeout_fragment_keeps_status_200(self, test_client: TestClient, use_llm, sample_pdf_bytes) -> None:
        client = use_llm(deadline_seconds=0.05, response="<h1>late</h1>", delay=5)

        response = test_client.post("/api/process-pdf", files=upload(sample_pdf_bytes))

        assert response.status_code == 200
        assert response.text == TIMEOUT_FRAGMENT
        assert client.finished is False

    def test_upstream_error_fragment(self, test_client: TestClient, use_llm, sample_pdf_bytes) -> None:
        use_llm(error=LLMServiceError("Gemini returned HTTP 400: API key not valid"))

        response = test_client.post("/api/process-pdf", files=upload(sample_pdf_bytes))

        assert response.status_code == 200
        assert response.text == (
            '<p style="color: red;">Error generating summary: '
            'Gemini returned HTTP 400: API key not valid</p>'
        )

    def test_empty_reply_fallback(self, test_client: TestClient, use_llm, sample_pdf_bytes) -> None:
        use_llm(response="")

        response = test_client.post("/api/process-pdf", files=upload(sample_pdf_bytes))

        assert response.status_code == 200
        assert response.text == "No summary generated"


class TestTextToSpeech:
    """POST /api/tts"""

    def test_empty_text(self, test_client: TestClient, use_speech) -> None:
        client = use_speech([b"abc"])

        response = test_client.post("/api/tts", json={"text": ""})

        assert response.status_code == 400
        assert response.text == "No text provided"
        assert client.calls == []

    def test_missing_body(self, test_client: TestClient, use_speech) -> None:
        use_speech([b"abc"])

        response = test_client.post("/api/tts")

        assert response.status_code == 400
        assert response.text == "No text provided"

    def test_audio_download(self, test_client: TestClient, use_speech) -> None:
        client = use_speech([b"abc", b"defg"])

        response = test_client.post("/api/tts", json={"text": "hello", "language": "en"})

        assert response.status_code == 200
        assert response.content == b"abcdefg"
        assert len(response.content) == 7
        assert response.headers["content-type"] == "audio/mpeg"
        assert "attachment" in response.headers["content-disposition"]
        assert client.calls == [("hello", "en")]

    def test_language_defaults(self, test_client: TestClient, use_speech) -> None:
        client = use_speech([b"abc"])

        test_client.post("/api/tts", json={"text": "bonjour"})

        assert client.calls == [("bonjour", "en")]

    def test_stream_error_after_partial_data(self, test_client: TestClient, use_speech) -> None:
        use_speech([b"abc"], error=ConnectionResetError("connection reset"))

        response = test_client.post("/api/tts", json={"text": "hello"})

        assert response.status_code == 500
        assert response.text == "Error generating speech: connection reset"
        assert b"abc" not in response.content

    def test_non_string_text_is_rejected_as_plain_text(self, test_client: TestClient, use_speech) -> None:
        client = use_speech([b"abc"])

        response = test_client.post("/api/tts", json={"text": 123})

        assert response.status_code == 400
        assert response.text == "No text provided"
        assert response.headers["content-type"].startswith("text/plain")
        assert client.calls == []

    def test_malformed_json_is_rejected_as_plain_text(self, test_client: TestClient, use_speech) -> None:
        use_speech([b"abc"])

        response = test_client.post(
            "/api/tts",
            content=b'{"text": "hello"',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.text == "No text provided"
        assert response.headers["access-control-allow-origin"] == "*"


class TestHttpSurface:
    """CORS, preflight and unknown routes."""

    @pytest.mark.parametrize("path", ["/api/tts", "/api/process-pdf", "/anything"])
    def test_preflight(self, test_client: TestClient, path: str) -> None:
        response = test_client.options(path)

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"
        assert response.headers["access-control-max-age"] == "86400"

    def test_unknown_path(self, test_client: TestClient) -> None:
        response = test_client.get("/nope")

        assert response.status_code == 404
        assert response.text == "Not Found"
        assert response.headers["access-control-allow-origin"] == "*"

    def test_wrong_method_is_not_found(self, test_client: TestClient) -> None:
        response = test_client.get("/api/tts")

        assert response.status_code == 404
        assert response.text == "Not Found"

    def test_cors_on_error_responses(self, test_client: TestClient, use_speech) -> None:
        use_speech([])

        response = test_client.post("/api/tts", json={"text": " "})

        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "*"

    def test_lifespan_closes_outbound_sessions(self, app) -> None:
        with TestClient(app) as client:
            llm_session = client.portal.call(app.state.llm_client.get_session)
            speech_session = client.portal.call(app.state.speech_client.get_session)
            assert not llm_session.closed

        assert llm_session.closed
        assert speech_session.closed
        assert app.state.llm_client._session is None
        assert app.state.speech_client._session is None
