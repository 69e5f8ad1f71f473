"""Pytest fixtures for all tests."""

import pytest
from fastapi import FastAPI, HTTPException
from httpx import AsyncClient, ASGITransport
from pydantic import BaseModel

from ksuid import config as ksuid_config
from ksuid.core.errors import KsuidError
from ksuid.core.identifier import Ksuid, KsuidMs
from ksuid.internal import logging as ksuid_logging

# Reference pair shared with segmentio/ksuid
REFERENCE_BYTES = bytes([13, 53, 196, 51, 225, 147, 62, 55, 242, 117,
                         112, 135, 99, 173, 199, 116, 90, 245, 231, 242])
REFERENCE_STRING = "1srOrx2ZWZBpBUvZwXKQmoEYga2"


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Each test starts with default config and a fresh logger."""
    monkeypatch.setattr(ksuid_config, "_config", None)
    monkeypatch.setattr(ksuid_logging, "_logger", None)
    monkeypatch.delenv(ksuid_config.CONFIG_ENV, raising=False)


@pytest.fixture
def reference_bytes():
    return REFERENCE_BYTES


@pytest.fixture
def reference_string():
    return REFERENCE_STRING


@pytest.fixture
def zero_payload():
    """16 zero bytes, a standard KSUID payload."""
    return bytes(Ksuid.PAYLOAD_BYTES)


class Event(BaseModel):
    id: Ksuid
    name: str


class TimedEvent(BaseModel):
    id: KsuidMs
    name: str


@pytest.fixture
async def app():
    """Create a FastAPI app that accepts and returns KSUIDs."""
    app = FastAPI()

    @app.post("/events")
    async def create_event(event: Event) -> Event:
        return event

    @app.post("/timed-events")
    async def create_timed_event(event: TimedEvent) -> TimedEvent:
        return event

    @app.get("/events/{event_id}")
    async def get_event(event_id: str):
        try:
            ksuid = Ksuid.from_base62(event_id)
        except KsuidError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return {"id": str(ksuid), "created": ksuid.timestamp().isoformat()}

    return app


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
