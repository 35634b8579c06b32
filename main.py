"""
PDF Summarizer API

FastAPI application:
- POST /api/process-pdf  PDF upload → extracted text → HTML summary
- POST /api/tts          text → MP3 download
- Wildcard CORS on every response, 204 for any preflight
- Plain-text 404 for anything else

Run:
    python main.py
    uvicorn main:app --host 0.0.0.0 --port 3000
"""
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import AppSettings, HOST, PORT, load_settings
from logs.logging_config import RequestContext, get_logger, setup_logging
from speech import SpeechClient, SpeechSynthesizer, router as speech_router
from speech.synthesizer import NO_TEXT_MESSAGE
from summarization import Summarizer, create_llm_client, router as summarization_router
from text_extractor import TextExtractor

logger = get_logger("app")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

SPEECH_PATH = "/api/tts"

PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Max-Age": "86400",  # 24 hours
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the summarization backend on startup, close outbound connection pools on shutdown."""
    logger.info(f"Server running at http://{HOST}:{PORT}")
    backend = app.state.llm_client.get_backend_info()
    logger.info(
        f"Summarization backend | model={backend['model']} | url={backend['generate_url']} | "
        f"has_api_key={backend['has_api_key']}"
    )
    yield
    await app.state.llm_client.close()
    await app.state.speech_client.close()
    logger.info("Application shutdown complete")


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Explicit settings (tests); read from the environment otherwise
    """
    setup_logging()
    settings = settings or load_settings()

    app = FastAPI(
        title="PDF Summarizer API",
        description="Summarizes uploaded PDFs into HTML and converts text to speech.",
        version="1.0.0",
        lifespan=lifespan
    )

    # Components are built once and shared read-only across requests
    app.state.settings = settings
    app.state.llm_client = create_llm_client(settings)
    app.state.extractor = TextExtractor(
        max_file_size_mb=settings.extractor_max_file_size_mb,
        max_pages=settings.extractor_max_pages
    )
    app.state.summarizer = Summarizer.from_settings(settings, app.state.llm_client)
    app.state.speech_client = SpeechClient.from_settings(settings)
    app.state.synthesizer = SpeechSynthesizer(
        app.state.speech_client,
        default_language=settings.default_language
    )

    @app.middleware("http")
    async def cors_and_context(request: Request, call_next):
        client = request.headers.get("x-forwarded-for", "unknown")

        with RequestContext():
            logger.info(f"[HTTP] {request.method} {request.url.path} - Client: {client}")

            if request.method == "OPTIONS":
                logger.info("[HTTP] Handling OPTIONS preflight request")
                return Response(status_code=204, headers=PREFLIGHT_HEADERS)

            response = await call_next(request)
            response.headers.update(CORS_HEADERS)
            return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Wrong method on a known path is reported the same as an unknown path
        if exc.status_code in (404, 405):
            logger.info(f"[HTTP] Not Found: {request.method} {request.url.path}")
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies get the same plain-text 400 as missing input
        logger.warning(f"[HTTP] Invalid request body: {request.method} {request.url.path} | errors={exc.errors()}")
        message = NO_TEXT_MESSAGE if request.url.path == SPEECH_PATH else "Bad Request"
        return PlainTextResponse(message, status_code=400)

    app.include_router(summarization_router)
    app.include_router(speech_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT)
