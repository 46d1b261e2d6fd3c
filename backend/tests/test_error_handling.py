# ruff: noqa: INP001
"""Error envelopes and request-id propagation on the task and audit routes."""

from __future__ import annotations

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import error_handling
from app.core.config import settings
from app.core.error_handling import REQUEST_ID_HEADER
from app.db.session import get_session
from app.main import app
from app.services import tasks as task_service

TASK = {"title": "Buy milk", "due_date": "2025-02-01T00:00:00"}


async def _make_engine() -> AsyncEngine:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all)
    return engine


@pytest_asyncio.fixture
async def client():
    engine = await _make_engine()
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_session() -> AsyncSession:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _override_get_session
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://testserver",
            headers={"Authorization": f"Bearer {settings.local_auth_token}"},
        ) as http:
            yield http
    finally:
        app.dependency_overrides.pop(get_session, None)
        await engine.dispose()


def _assert_envelope(resp, status_code: int) -> dict:
    assert resp.status_code == status_code
    body = resp.json()
    assert isinstance(body.get("request_id"), str) and body["request_id"]
    assert resp.headers.get(REQUEST_ID_HEADER) == body["request_id"]
    return body


@pytest.mark.asyncio
async def test_missing_task_returns_404_envelope(client: AsyncClient) -> None:
    missing = uuid4()
    resp = await client.get(f"/api/v1/tasks/{missing}")

    body = _assert_envelope(resp, 404)
    assert body["detail"] == f"Task not found with ID: {missing}"


@pytest.mark.asyncio
async def test_invalid_task_payload_returns_422_envelope(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/tasks", json={**TASK, "title": "  "})

    body = _assert_envelope(resp, 422)
    assert isinstance(body["detail"], list)
    assert any("title is required" in str(err.get("msg")) for err in body["detail"])


@pytest.mark.asyncio
async def test_non_json_task_body_returns_422_without_500(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/v1/tasks",
        content=b"\xffplain-text-body",
        headers={"content-type": "text/plain"},
    )

    body = _assert_envelope(resp, 422)
    assert isinstance(body["detail"], list)


@pytest.mark.asyncio
async def test_bad_audit_range_returns_422_envelope(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/audit/date-range", params={"start": "2025-01-01T00:00:00"})

    body = _assert_envelope(resp, 422)
    assert any(err.get("loc") == ["query", "end"] for err in body["detail"])


@pytest.mark.asyncio
async def test_missing_token_returns_401_envelope(client: AsyncClient) -> None:
    resp = await client.get(
        "/api/v1/audit",
        headers={"Authorization": "", REQUEST_ID_HEADER: "req-401"},
    )

    assert _assert_envelope(resp, 401) == {"detail": "Unauthorized", "request_id": "req-401"}


@pytest.mark.asyncio
async def test_unexpected_service_failure_returns_500_envelope(
    client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def _explode(*args: object, **kwargs: object) -> None:
        raise RuntimeError("database on fire")

    monkeypatch.setattr(task_service, "list_tasks", _explode)

    resp = await client.get("/api/v1/tasks")

    body = _assert_envelope(resp, 500)
    assert body["detail"] == "Internal Server Error"


@pytest.mark.asyncio
async def test_client_request_id_is_echoed_and_oversized_one_replaced(
    client: AsyncClient,
) -> None:
    echoed = await client.post(
        "/api/v1/tasks",
        json=TASK,
        headers={REQUEST_ID_HEADER: "  req-123  "},
    )
    assert echoed.status_code == 201
    assert echoed.headers.get(REQUEST_ID_HEADER) == "req-123"

    oversized = await client.get("/api/v1/tasks", headers={REQUEST_ID_HEADER: "x" * 500})
    replaced = oversized.headers.get(REQUEST_ID_HEADER)
    assert isinstance(replaced, str) and replaced
    assert replaced != "x" * 500


@pytest.mark.asyncio
async def test_slow_task_request_logs_warning(
    client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    warnings: list[tuple[str, dict[str, object]]] = []

    def _fake_warning(message: str, *args: object, **kwargs: object) -> None:
        extra = kwargs.get("extra")
        warnings.append((message, extra if isinstance(extra, dict) else {}))

    ticks = iter((10.0, 12.5))
    monkeypatch.setattr(error_handling.settings, "request_log_slow_ms", 2000)
    monkeypatch.setattr(error_handling, "perf_counter", lambda: next(ticks))
    monkeypatch.setattr(error_handling.logger, "warning", _fake_warning)

    resp = await client.get("/api/v1/tasks")

    assert resp.status_code == 200
    assert [
        (message, extra.get("path"), extra.get("slow_threshold_ms"))
        for message, extra in warnings
    ] == [("http.request.slow", "/api/v1/tasks", 2000)]


@pytest.mark.asyncio
async def test_health_probes_skip_request_logs_unless_enabled(
    client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logged_paths: list[object] = []

    def _fake_info(message: str, *args: object, **kwargs: object) -> None:
        extra = kwargs.get("extra")
        if message == "http.request.completed" and isinstance(extra, dict):
            logged_paths.append(extra.get("path"))

    monkeypatch.setattr(error_handling.logger, "info", _fake_info)
    monkeypatch.setattr(error_handling.settings, "request_log_include_health", False)

    await client.get("/healthz")
    await client.get("/api/v1/tasks")
    assert logged_paths == ["/api/v1/tasks"]

    monkeypatch.setattr(error_handling.settings, "request_log_include_health", True)
    await client.get("/readyz")
    assert logged_paths == ["/api/v1/tasks", "/readyz"]


def test_json_safe_decodes_binary_and_stringifies_unknown_values() -> None:
    class Opaque:
        def __str__(self) -> str:
            return "opaque"

    assert error_handling._json_safe(
        {"input": b"\xff", "ctx": {"error": Opaque()}, "loc": ("body", 0)},
    ) == {"input": "\ufffd", "ctx": {"error": "opaque"}, "loc": ["body", 0]}
    assert error_handling._json_safe(bytearray(b"ok")) == "ok"
