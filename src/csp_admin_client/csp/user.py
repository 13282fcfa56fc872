"""CSP 投票者エンドポイント

すべての操作で選挙の管理トークンによる Bearer 認証が必要。
"""

from __future__ import annotations

import builtins
from typing import Any

from ..api import build_url, request, unwrap
from ..config import CspClientConfig
from ..models import DeleteResult, User, UserSearch, UserUpdate

CREATE = "/elections/{electionId}/users"
GET = "/elections/{electionId}/users/{id}"
UPDATE = "/elections/{electionId}/users/{id}"
DELETE = "/elections/{electionId}/users/{id}"
LIST = "/elections/{electionId}/users"
SEARCH = "/elections/{electionId}/users/search"


def _users(data: Any) -> builtins.list[User]:
    return [User.from_dict(u) for u in unwrap(data) or []]


def _user(data: Any) -> User:
    # フラットな投票者レコードは data に文字列を持つ
    if isinstance(data, dict) and isinstance(data.get("data"), str):
        return User.from_dict(data)
    return User.from_dict(unwrap(data))


async def create(
    base_url: str,
    admin_token: str,
    election_id: str,
    user: User,
    config: CspClientConfig | None = None,
) -> User:
    """選挙に投票者を追加する。"""
    data = await request(
        "POST",
        build_url(base_url, CREATE, electionId=election_id),
        json=user.to_dict(),
        auth_token=admin_token,
        config=config,
    )
    return _user(data)


async def get(
    base_url: str,
    admin_token: str,
    election_id: str,
    user_id: str,
    config: CspClientConfig | None = None,
) -> User:
    data = await request(
        "GET",
        build_url(base_url, GET, electionId=election_id, id=user_id),
        auth_token=admin_token,
        config=config,
    )
    return _user(data)


async def update(
    base_url: str,
    admin_token: str,
    election_id: str,
    user_id: str,
    user_update: UserUpdate,
    config: CspClientConfig | None = None,
) -> User:
    """投票者の consumed フラグを更新する。"""
    data = await request(
        "PUT",
        build_url(base_url, UPDATE, electionId=election_id, id=user_id),
        json=user_update.to_dict(),
        auth_token=admin_token,
        config=config,
    )
    return _user(data)


async def delete(
    base_url: str,
    admin_token: str,
    election_id: str,
    user_id: str,
    config: CspClientConfig | None = None,
) -> DeleteResult:
    data = await request(
        "DELETE",
        build_url(base_url, DELETE, electionId=election_id, id=user_id),
        auth_token=admin_token,
        config=config,
    )
    if data is None:
        # 204 No Content
        return DeleteResult(ok=True)
    return DeleteResult.from_dict(data)


async def list(
    base_url: str,
    admin_token: str,
    election_id: str,
    config: CspClientConfig | None = None,
) -> builtins.list[User]:
    data = await request(
        "GET",
        build_url(base_url, LIST, electionId=election_id),
        auth_token=admin_token,
        config=config,
    )
    return _users(data)


async def search(
    base_url: str,
    admin_token: str,
    election_id: str,
    query: UserSearch,
    config: CspClientConfig | None = None,
) -> builtins.list[User]:
    """条件に一致する投票者を返す。空の条件は list と同じ結果になる。"""
    data = await request(
        "POST",
        build_url(base_url, SEARCH, electionId=election_id),
        json=query.to_dict(),
        auth_token=admin_token,
        config=config,
    )
    return _users(data)
