"""
Global test configuration with support for different test types.
"""

from contextlib import suppress
import logging
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from gemini_interview.config import FrozenConfig


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv
    to permit .env loading for that specific test.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean GEMINI_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral guarantees of the public API",
        "allow_dotenv: Permit .env loading for this test",
        "allow_env_pollution: Keep GEMINI_* variables from the outer environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def mock_api_key():
    """Provide a consistent, fake API key for tests."""
    return "test_api_key_12345_67890_abcdef_ghijkl"


@pytest.fixture
def api_config(mock_api_key):
    """Configuration that routes calls to the (fake) API client."""
    return FrozenConfig(api_key=mock_api_key, request_timeout=5.0)


def make_response(text, finish_reason="STOP"):
    """Build an object shaped like a google-genai GenerateContentResponse."""
    candidate = SimpleNamespace(finish_reason=SimpleNamespace(name=finish_reason))
    return SimpleNamespace(text=text, candidates=[candidate])


@pytest.fixture
def fake_client():
    """A client double exposing `client.aio.models.generate_content`.

    Tests set `fake_client.respond_with(text)` or assign a side effect to
    `fake_client.aio.models.generate_content`.
    """
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=make_response("[]")
    )

    def respond_with(text, finish_reason="STOP"):
        client.aio.models.generate_content.return_value = make_response(
            text, finish_reason
        )

    client.respond_with = respond_with
    return client
