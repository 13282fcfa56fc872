"""CSP HTTP リクエスト送信とエラー分類"""

from __future__ import annotations

import math
from typing import Any, NoReturn
from urllib.parse import quote

import httpx
import structlog

from .config import CspClientConfig
from .exceptions import APIError, UnauthorizedError

logger = structlog.get_logger(__name__)

_DEFAULT_CONFIG = CspClientConfig()


def bearer_headers(auth_token: str) -> dict[str, str]:
    """管理トークンの Authorization ヘッダーを返す。"""
    return {"Authorization": f"Bearer {auth_token}"}


def build_url(base_url: str, template: str, **params: str) -> str:
    """URL テンプレートのパスパラメーターを置換して完全な URL を返す。

    Raises:
        ValueError: base_url またはパラメーターが空の場合
    """
    if not base_url:
        raise ValueError("base_url is required")
    path = template
    for name, value in params.items():
        if not value:
            raise ValueError(f"{name} is required")
        path = path.replace("{" + name + "}", quote(value, safe=""))
    return base_url.rstrip("/") + path


def unwrap(payload: Any) -> Any:
    """``data`` にネストされたレスポンスを取り出す。

    ``data`` キーがあればその値 (null を含む) を返し、なければそのまま返す。
    """
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def _is_numeric(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def _body_of(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def raise_api_error(error: Exception) -> NoReturn:
    """失敗した HTTP 呼び出しを型付きエラーに分類して送出する。

    - HTTP ステータスエラー以外 (接続エラー等) はそのまま再送出する。
    - ボディの ``code`` が 401 なら UnauthorizedError (メッセージは ``reason``)。
    - それ以外は APIError (ステータスコード、ステータステキスト、メッセージ)。
    """
    if not isinstance(error, httpx.HTTPStatusError):
        raise error

    response = error.response
    body = _body_of(response)
    message: str | None = None

    if isinstance(body, dict) and _is_numeric(body.get("code")):
        if str(body["code"]).strip() == "401":
            logger.warning(
                "csp request unauthorized",
                status_code=response.status_code,
                error_kind="unauthorized",
            )
            raise UnauthorizedError(body.get("reason"), cause=error) from error
        message = body.get("error")
    elif isinstance(body, dict):
        message = body.get("error") or body.get("message") or response.text
    elif body:
        message = str(body)

    logger.warning(
        "csp request failed",
        status_code=response.status_code,
        error_kind="api_error",
    )
    raise APIError(
        status_code=response.status_code,
        status_text=response.reason_phrase,
        detail=str(message) if message else "",
        cause=error,
    ) from error


async def request(
    method: str,
    url: str,
    *,
    json: Any = None,
    auth_token: str | None = None,
    config: CspClientConfig | None = None,
) -> Any:
    """CSP に HTTP リクエストを 1 回送信し、デコード済み JSON を返す。

    Args:
        method: HTTP メソッド
        url: 完全な URL
        json: リクエストボディ
        auth_token: 指定された場合は Bearer 認証ヘッダーを付与する
        config: タイムアウトと追加ヘッダーの設定

    Returns:
        レスポンスボディ (空の場合は None)
    """
    cfg = config or _DEFAULT_CONFIG
    headers: dict[str, str] = {"Content-Type": "application/json", **cfg.headers}
    if auth_token is not None:
        if not auth_token:
            raise ValueError("admin_token is required")
        headers.update(bearer_headers(auth_token))

    logger.debug("csp request", method=method, url=url, authenticated=auth_token is not None)
    try:
        async with httpx.AsyncClient(timeout=cfg.timeout_seconds) as client:
            resp = await client.request(method, url, json=json, headers=headers)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise_api_error(e)

    if not resp.content:
        return None
    return resp.json()
