"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from steelseries_screen.api import GameSenseClient
from steelseries_screen.models import SessionIdentity


@pytest.fixture
def ok_response() -> MagicMock:
    """Create a successful requests.Response stand-in."""
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.text = "{}"
    return response


@pytest.fixture
def http_session(ok_response: MagicMock) -> MagicMock:
    """Create a mock requests.Session whose POSTs succeed."""
    session = MagicMock()
    session.post = MagicMock(return_value=ok_response)
    return session


@pytest.fixture
def client(http_session: MagicMock) -> GameSenseClient:
    """Create a client pointed at a fixed address with a mock session."""
    return GameSenseClient(
        SessionIdentity("TEST_GAME"), "127.0.0.1:51234", session=http_session
    )


@pytest.fixture
def core_props(tmp_path: Path) -> Path:
    """Write a valid coreProps.json and return its path."""
    path = tmp_path / "coreProps.json"
    path.write_text(
        json.dumps(
            {
                "address": "127.0.0.1:51234",
                "encryptedAddress": "127.0.0.1:51235",
            }
        )
    )
    return path
