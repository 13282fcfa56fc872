"""テスト共通フィクスチャ。respx 上で動くインメモリ CSP を提供する。"""

from __future__ import annotations

import copy
import itertools
import json
import secrets
import uuid
from collections.abc import Iterator
from typing import Any

import httpx
import pytest
import respx

BASE_URL = "http://csp-server:5000/v1/auth/elections/admin"

ELECTION_ID_PREFIX = "c5d2460186f7bb73137b620cffde1b3971a0c9023b480c851b700304000000"

_suffixes = itertools.count(1)


def election_id(suffix: str = "") -> str:
    """64 文字の 16 進選挙 ID を返す。"""
    return ELECTION_ID_PREFIX + (suffix or f"{next(_suffixes) % 256:02x}")


class FakeSigner:
    """アドレスとメッセージから決定的な署名を返すテスト用署名者。"""

    def __init__(self, address: str = "0x" + "ab" * 20) -> None:
        self.address = address
        self.calls: list[str] = []

    async def sign_message(self, message: str) -> str:
        self.calls.append(message)
        return expected_signature(self.address, message)


def expected_signature(address: str, message: str) -> str:
    return f"sig:{address.lower()}:{message}"


class FakeCsp:
    """CSP 管理 API のインメモリ実装。"""

    def __init__(self) -> None:
        self._elections: dict[str, dict[str, Any]] = {}
        self._requests: list[httpx.Request] = []

    @property
    def request_count(self) -> int:
        return len(self._requests)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self._requests.append(request)
        path = request.url.path.removeprefix(httpx.URL(BASE_URL).path)
        parts = [p for p in path.split("/") if p]
        body = json.loads(request.content) if request.content else None
        method = request.method

        if parts == ["elections"]:
            if method == "POST":
                return self._create_election(body)
            return httpx.Response(200, json={"data": list(self._elections)})

        if len(parts) < 2 or parts[0] != "elections":
            return httpx.Response(404, json={"error": "route not found"})

        entry = self._elections.get(parts[1])
        if entry is None:
            return httpx.Response(404, json={"code": "404", "error": "election not found"})

        if len(parts) == 2:
            if method == "GET":
                return httpx.Response(200, json={"data": copy.deepcopy(entry["election"])})
            if method == "DELETE":
                if not self._authorized(request, entry):
                    return self._unauthorized()
                del self._elections[parts[1]]
                return httpx.Response(200, json={"ok": True})

        if parts[2:] == ["auth"] and method == "POST":
            return self._auth(parts[1], entry, body)

        if len(parts) > 2 and parts[2] == "users":
            if not self._authorized(request, entry):
                return self._unauthorized()
            return self._users(parts[1], entry, parts[3:], method, body)

        return httpx.Response(405, text="Method Not Allowed")

    def _create_election(self, body: dict[str, Any]) -> httpx.Response:
        eid = body["electionId"]
        if eid in self._elections:
            return httpx.Response(409, json={"code": "409", "error": "election already exists"})
        token = secrets.token_hex(16)
        self._elections[eid] = {"election": copy.deepcopy(body), "token": token, "users": {}}
        return httpx.Response(
            200, json={"data": {"adminToken": token, "election": copy.deepcopy(body)}}
        )

    def _auth(self, eid: str, entry: dict[str, Any], body: dict[str, Any]) -> httpx.Response:
        address = "0x" + eid[12:52]
        if body.get("signature") != expected_signature(address, body.get("data", "")):
            return self._unauthorized("invalid signature")
        return httpx.Response(
            200,
            json={
                "data": {
                    "adminToken": entry["token"],
                    "election": copy.deepcopy(entry["election"]),
                }
            },
        )

    def _users(
        self,
        eid: str,
        entry: dict[str, Any],
        rest: list[str],
        method: str,
        body: Any,
    ) -> httpx.Response:
        users: dict[str, dict[str, Any]] = entry["users"]
        if not rest:
            if method == "POST":
                uid = uuid.uuid4().hex
                users[uid] = {
                    "userId": uid,
                    "electionId": eid,
                    "consumed": bool(body.get("consumed", False)),
                    "user": {
                        "userId": uid,
                        "handler": body["handler"],
                        "service": body["service"],
                        "mode": body["mode"],
                        "data": body["data"],
                    },
                }
                return httpx.Response(200, json={"data": copy.deepcopy(users[uid])})
            return httpx.Response(200, json={"data": copy.deepcopy(list(users.values()))})

        if rest == ["search"] and method == "POST":
            matches = [u for u in users.values() if _matches(u, body or {})]
            return httpx.Response(200, json={"data": copy.deepcopy(matches)})

        user = users.get(rest[0])
        if user is None:
            return httpx.Response(404, json={"code": "404", "error": "user not found"})
        if method == "GET":
            return httpx.Response(200, json={"data": copy.deepcopy(user)})
        if method == "PUT":
            user["consumed"] = bool(body["consumed"])
            return httpx.Response(200, json={"data": copy.deepcopy(user)})
        if method == "DELETE":
            del users[rest[0]]
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(405, text="Method Not Allowed")

    @staticmethod
    def _authorized(request: httpx.Request, entry: dict[str, Any]) -> bool:
        return request.headers.get("Authorization") == f"Bearer {entry['token']}"

    @staticmethod
    def _unauthorized(reason: str | None = None) -> httpx.Response:
        body: dict[str, Any] = {"code": "401"}
        if reason:
            body["reason"] = reason
        return httpx.Response(401, json=body)


def _matches(user: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, value in query.items():
        if key in ("electionId", "consumed", "userId"):
            if user.get(key) != value:
                return False
        elif user["user"].get(key) != value:
            return False
    return True


@pytest.fixture
def fake_csp() -> Iterator[FakeCsp]:
    fake = FakeCsp()
    with respx.mock(assert_all_called=False) as router:
        router.route(url__startswith=BASE_URL).mock(side_effect=fake.handle)
        yield fake
