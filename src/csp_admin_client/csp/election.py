"""CSP 選挙エンドポイント"""

from __future__ import annotations

import builtins

from ..api import build_url, request, unwrap
from ..config import CspClientConfig
from ..models import DeleteResult, Election, ElectionAuth, ElectionWithToken

CREATE = "/elections"
GET = "/elections/{id}"
AUTH = "/elections/{id}/auth"
DELETE = "/elections/{id}"
LIST = "/elections"


async def create(
    base_url: str,
    election: Election,
    config: CspClientConfig | None = None,
) -> ElectionWithToken:
    """選挙を作成し、管理トークン付きの選挙を返す。

    管理トークンはこのレスポンスでしか返されない。署名者アドレスを埋め込んだ
    ID で作成した場合に限り、auth で再取得できる。
    """
    data = await request("POST", build_url(base_url, CREATE), json=election.to_dict(), config=config)
    return ElectionWithToken.from_dict(unwrap(data))


async def auth(
    base_url: str,
    election_id: str,
    election_auth: ElectionAuth,
    config: CspClientConfig | None = None,
) -> ElectionWithToken:
    """署名付きチャレンジで選挙の管理トークンを取得する。"""
    data = await request(
        "POST",
        build_url(base_url, AUTH, id=election_id),
        json=election_auth.to_dict(),
        config=config,
    )
    return ElectionWithToken.from_dict(unwrap(data))


async def get(
    base_url: str,
    election_id: str,
    config: CspClientConfig | None = None,
) -> Election:
    data = await request("GET", build_url(base_url, GET, id=election_id), config=config)
    return Election.from_dict(unwrap(data))


async def delete(
    base_url: str,
    admin_token: str,
    election_id: str,
    config: CspClientConfig | None = None,
) -> DeleteResult:
    data = await request(
        "DELETE",
        build_url(base_url, DELETE, id=election_id),
        auth_token=admin_token,
        config=config,
    )
    if data is None:
        # 204 No Content
        return DeleteResult(ok=True)
    return DeleteResult.from_dict(data)


async def list(
    base_url: str,
    config: CspClientConfig | None = None,
) -> builtins.list[str]:
    """選挙 ID 一覧をサーバーの返却順で返す。"""
    data = await request("GET", build_url(base_url, LIST), config=config)
    return [str(election_id) for election_id in unwrap(data) or []]
