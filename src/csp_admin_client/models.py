"""CSP 管理 API データモデル"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")

# 選挙 ID のうち署名者アドレスを埋め込む範囲
ADDRESS_OFFSET = 12
ADDRESS_END = ADDRESS_OFFSET + 40


@dataclass
class Handler:
    """投票者認証ハンドラー定義。"""

    handler: str
    service: str
    mode: str
    data: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Handler:
        return cls(
            handler=data.get("handler", ""),
            service=data.get("service", ""),
            mode=data.get("mode", ""),
            data=list(data.get("data") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "handler": self.handler,
            "service": self.service,
            "mode": self.mode,
            "data": list(self.data),
        }


@dataclass
class Election:
    """選挙。"""

    election_id: str
    handlers: list[Handler] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Election:
        """API レスポンス辞書から Election を生成する。"""
        return cls(
            election_id=data["electionId"],
            handlers=[Handler.from_dict(h) for h in data.get("handlers") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "electionId": self.election_id,
            "handlers": [h.to_dict() for h in self.handlers],
        }


@dataclass
class ElectionWithToken:
    """管理トークン付き選挙。作成時と auth 時に返される。"""

    admin_token: str
    election: Election

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ElectionWithToken:
        return cls(
            admin_token=data["adminToken"],
            election=Election.from_dict(data["election"]),
        )


@dataclass
class ElectionAuth:
    """管理トークン再取得リクエスト。data は署名対象メッセージ。"""

    signature: str
    data: str

    def to_dict(self) -> dict[str, Any]:
        return {"signature": self.signature, "data": self.data}


@dataclass
class DeleteResult:
    """削除結果。"""

    ok: bool
    reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeleteResult:
        return cls(ok=bool(data.get("ok", False)), reason=data.get("reason"))


@dataclass
class User:
    """選挙に登録された投票者。

    現行の CSP は識別情報を ``user`` オブジェクトにネストして返すが、
    フラットな形式も受け付ける。
    """

    election_id: str
    handler: str
    service: str
    mode: str
    data: str
    consumed: bool = False
    user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        """API レスポンス辞書から User を生成する。"""
        inner: dict[str, Any] = data.get("user") or data
        return cls(
            election_id=data.get("electionId", ""),
            handler=inner.get("handler", ""),
            service=inner.get("service", ""),
            mode=inner.get("mode", ""),
            data=inner.get("data", ""),
            consumed=bool(data.get("consumed", False)),
            user_id=data.get("userId") or inner.get("userId"),
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "electionId": self.election_id,
            "handler": self.handler,
            "service": self.service,
            "mode": self.mode,
            "data": self.data,
            "consumed": self.consumed,
        }
        if self.user_id is not None:
            body["userId"] = self.user_id
        return body


@dataclass
class UserUpdate:
    """投票者更新リクエスト。変更可能なのは consumed のみ。"""

    consumed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"consumed": self.consumed}


@dataclass
class UserSearch:
    """投票者検索フィルター。指定されたフィールドは AND 条件になる。"""

    user_id: str | None = None
    election_id: str | None = None
    handler: str | None = None
    service: str | None = None
    mode: str | None = None
    data: str | None = None
    consumed: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """未指定のフィールドを除いた検索条件を返す。"""
        fields = {
            "userId": self.user_id,
            "electionId": self.election_id,
            "handler": self.handler,
            "service": self.service,
            "mode": self.mode,
            "data": self.data,
            "consumed": self.consumed,
        }
        return {k: v for k, v in fields.items() if v is not None}


def embed_signer_address(election_id: str, address: str) -> str:
    """選挙 ID に署名者アドレスを埋め込む。

    ID の 12 文字目から 40 文字を、``0x`` を除いた小文字のアドレスで置き換える。
    この形式の ID であれば auth で管理トークンを再取得できる。

    Args:
        election_id: 元の選挙 ID (16 進文字列)
        address: 署名者アドレス ("0x" 付きでも可)

    Returns:
        アドレスを埋め込んだ選挙 ID

    Raises:
        ValueError: ID が短すぎる、またはアドレスの形式が不正な場合
    """
    if not _ADDRESS_RE.match(address):
        raise ValueError(f"invalid signer address: {address!r}")
    if len(election_id) < ADDRESS_END:
        raise ValueError(f"election id must be at least {ADDRESS_END} characters long")
    hex_address = address[2:] if address.startswith("0x") else address
    return election_id[:ADDRESS_OFFSET] + hex_address.lower() + election_id[ADDRESS_END:]
