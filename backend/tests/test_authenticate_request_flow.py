# ruff: noqa: INP001

from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from app.core import auth
from app.core.auth_mode import AuthMode

TOKEN = "flow-token-" + "t" * 45


def _request(authorization: str | None = None) -> SimpleNamespace:
    headers = {} if authorization is None else {"Authorization": authorization}
    return SimpleNamespace(headers=headers, url=SimpleNamespace(path="/api/v1/tasks"))


@pytest.fixture
def local_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth.settings, "auth_mode", AuthMode.LOCAL)
    monkeypatch.setattr(auth.settings, "local_auth_token", TOKEN)
    monkeypatch.setattr(auth.settings, "local_auth_username", "alice")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "authorization",
    [None, "", "Bearer ", f"Basic {TOKEN}", "Bearer not-the-token"],
)
async def test_get_auth_context_raises_401_without_valid_bearer(
    local_mode: None,
    authorization: str | None,
) -> None:
    with pytest.raises(HTTPException) as excinfo:
        await auth.get_auth_context(  # type: ignore[arg-type]
            request=_request(authorization),
            credentials=None,
        )

    assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_get_auth_context_accepts_token_case_insensitive_scheme(local_mode: None) -> None:
    ctx = await auth.get_auth_context(  # type: ignore[arg-type]
        request=_request(f"bearer   {TOKEN}  "),
        credentials=None,
    )

    assert ctx.actor_type == "user"
    assert ctx.username == "alice"


@pytest.mark.asyncio
async def test_blank_local_username_resolves_to_system(
    local_mode: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(auth.settings, "local_auth_username", "  ")

    ctx = await auth.get_auth_context(  # type: ignore[arg-type]
        request=_request(f"Bearer {TOKEN}"),
        credentials=None,
    )

    assert ctx.username is None
    assert auth.resolve_actor_identity(ctx) == "system"


@pytest.mark.asyncio
async def test_disabled_mode_ignores_headers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth.settings, "auth_mode", AuthMode.DISABLED)

    ctx = await auth.get_auth_context(  # type: ignore[arg-type]
        request=_request("Bearer whatever"),
        credentials=None,
    )

    assert ctx.actor_type == "anonymous"
    assert ctx.username is None
