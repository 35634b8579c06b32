"""Pytest configuration and shared fixtures."""

import os

os.environ.setdefault("LOG_TO_FILE", "false")

from dataclasses import replace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import config
from config import AppSettings, load_settings
from main import create_app
from summarization.prompts import EXAMPLE_OUTPUT
from helpers import make_pdf


@pytest.fixture(autouse=True)
def offline_token_estimates(monkeypatch):
    """Keep token estimation from downloading tiktoken encodings."""
    monkeypatch.setattr(config, "_get_encoder", lambda: None)


@pytest.fixture
def settings() -> AppSettings:
    """Settings with a dummy credential and the production deadline.

    Returns:
        AppSettings: Frozen settings instance
    """
    return replace(load_settings(), gemini_api_key="test-key", default_language="en")


@pytest.fixture
def app(settings: AppSettings) -> FastAPI:
    application = create_app(settings)
    yield application
    application.dependency_overrides = {}


@pytest.fixture
def test_client(app: FastAPI) -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """One-page PDF with a title, author and date.

    Returns:
        bytes: PDF file content
    """
    return make_pdf(
        "Quarterly Infrastructure Report\n"
        "Written by Jane Doe\n"
        "Published on March 1, 2024\n"
        "Server capacity grew by 40 percent over the quarter."
    )


@pytest.fixture
def template_html() -> str:
    """A reply that follows the summary template exactly."""
    return EXAMPLE_OUTPUT


@pytest.fixture
def fenced_template_reply(template_html: str) -> str:
    """Template reply wrapped in a markdown code fence."""
    return f"```html\n{template_html}\n```"
