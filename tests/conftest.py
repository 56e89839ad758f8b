"""Shared fixtures: page payload builders, scripted fetchers and config."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable

import pytest

from quote_fetcher.config import ClientConfig, ConfigLocator, ConfigRepository
from quote_fetcher.engine import TransportError


def quote_post(raw: Any, page_no: Any = None) -> dict[str, Any]:
    """Build one upstream post wrapping a quote payload."""

    alinti: dict[str, Any] = {"parse": {"raw": raw}}
    if page_no is not None:
        alinti["sayfa_no"] = page_no
    return {"alt": {"alinti": alinti}}


def page_body(
    posts: Iterable[Any] = (),
    total_pages: int = 1,
    cluster: int = 0,
    z: int = 0,
) -> bytes:
    payload = {"posts": list(posts), "total_pages": total_pages, "cluster": cluster, "z": z}
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


class ScriptedFetch:
    """Fetch capability returning pre-built responses in order.

    Each scripted item is either ``bytes`` or an exception instance to raise.
    """

    def __init__(self, responses: Iterable[bytes | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, int, int, int]] = []
        self.closed = False

    def __call__(self, user_id: str, page: int, cluster: int, z: int) -> bytes:
        self.calls.append((user_id, page, cluster, z))
        if len(self.calls) > len(self.responses):
            raise AssertionError(f"Unexpected fetch for page {page}")
        item = self.responses[len(self.calls) - 1]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def pages(self) -> list[int]:
        return [call[1] for call in self.calls]

    def __enter__(self) -> "ScriptedFetch":
        return self

    def __exit__(self, *_exc) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("QUOTE_FETCHER_HOME", str(home))
    return home


@pytest.fixture
def make_post() -> Callable[..., dict[str, Any]]:
    return quote_post


@pytest.fixture
def make_page() -> Callable[..., bytes]:
    return page_body


@pytest.fixture
def scripted_fetch() -> Callable[..., ScriptedFetch]:
    def _builder(*responses: bytes | Exception) -> ScriptedFetch:
        return ScriptedFetch(responses)

    return _builder


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("connection reset", status_code=None)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(base_url="https://api.example.test", timeout=5)


@pytest.fixture
def temp_config_repository(isolated_home: Path) -> ConfigRepository:
    return ConfigRepository(ConfigLocator())
