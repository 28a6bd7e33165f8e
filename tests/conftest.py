from __future__ import annotations

import json
import re
from typing import Any, Callable

import httpx
import pytest

from orea.config import OreaConfig
from orea.services.session_store import SessionStore


def make_user_payload(user_id: int | None = 1, name: str = "Leanne Graham") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": name,
        "email": f"{name.split()[0].lower()}@april.biz",
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "company": {
            "name": "Romaguera-Crona",
            "catchPhrase": "Multi-layered client-server neural-net",
            "bs": "harness real-time e-markets",
        },
        "address": {
            "street": "Kulas Light",
            "suite": "Apt. 556",
            "city": "Gwenborough",
            "zipcode": "92998-3874",
            "geo": {"lat": "-37.3159", "lng": "81.1496"},
        },
    }
    if user_id is not None:
        payload["id"] = user_id
    return payload


class FakeUsersApi:
    """Backend ``/users`` en mémoire, stable entre deux appels."""

    def __init__(self, users: list[dict[str, Any]] | None = None) -> None:
        self.users: dict[int, dict[str, Any]] = {u["id"]: u for u in users or []}
        self.next_id = max(self.users, default=0) + 1
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        match = re.fullmatch(r"/users(?:/(\d+))?", request.url.path)
        if match is None:
            return httpx.Response(404, json={})
        user_id = int(match.group(1)) if match.group(1) else None

        if request.method == "GET" and user_id is None:
            return httpx.Response(200, json=list(self.users.values()))
        if request.method == "POST" and user_id is None:
            body = json.loads(request.content)
            body["id"] = self.next_id
            self.next_id += 1
            self.users[body["id"]] = body
            return httpx.Response(201, json=body)
        if user_id not in self.users:
            return httpx.Response(404, json={})
        if request.method == "GET":
            return httpx.Response(200, json=self.users[user_id])
        if request.method == "PUT":
            body = json.loads(request.content)
            body["id"] = user_id
            self.users[user_id] = body
            return httpx.Response(200, json=body)
        if request.method == "DELETE":
            del self.users[user_id]
            return httpx.Response(200, json={})
        return httpx.Response(405, json={})


@pytest.fixture
def config(tmp_path) -> OreaConfig:
    return OreaConfig(
        base_url="https://api.test",
        session_path=str(tmp_path / "session.json"),
    )


@pytest.fixture
def store(config: OreaConfig) -> SessionStore:
    return SessionStore.from_config(config)


@pytest.fixture
def fake_api() -> FakeUsersApi:
    return FakeUsersApi([make_user_payload(1), make_user_payload(2, "Ervin Howell")])


@pytest.fixture
def user_payload() -> Callable[..., dict[str, Any]]:
    return make_user_payload
