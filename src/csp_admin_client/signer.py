"""メッセージ署名プロトコル"""

from __future__ import annotations

from typing import Protocol


class MessageSigner(Protocol):
    """チャレンジメッセージに署名するプロトコル。

    ウォレット等の具体的な実装はライブラリ利用側が注入する。
    """

    async def sign_message(self, message: str) -> str: ...
