"""csp_admin_client ライブラリの例外型定義"""

from __future__ import annotations


class CspClientError(Exception):
    """CSP 管理クライアントのエラー基底クラス。

    設定不足 (ConfigurationError)、管理トークン拒否 (UnauthorizedError)、
    その他の CSP 側エラー (APIError) を code で区別する。
    接続エラー等の httpx 例外はこのクラスに包まずそのまま伝播する。
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class CspClientErrorCodes:
    """CspClientError のエラーコード定数。"""

    CSP_URL_NOT_SET: str = "CSP_URL_NOT_SET"
    SIGNER_NOT_SET: str = "SIGNER_NOT_SET"
    UNAUTHORIZED: str = "UNAUTHORIZED"
    API_ERROR: str = "API_ERROR"


class ConfigurationError(CspClientError):
    """クライアント設定 (CSP URL / 署名者) が不足している。

    ネットワークアクセスの前にローカルで検出される。
    """


class UnauthorizedError(CspClientError):
    """CSP が管理トークンを拒否した (401)。"""

    DEFAULT_MESSAGE = "Authentication failed"

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        super().__init__(
            code=CspClientErrorCodes.UNAUTHORIZED,
            message=message or self.DEFAULT_MESSAGE,
            cause=cause,
        )


class APIError(CspClientError):
    """401 以外の CSP 側エラー。"""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        detail: str = "",
        cause: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.detail = detail
        super().__init__(
            code=CspClientErrorCodes.API_ERROR,
            message=f"{status_code} {status_text}: {detail}",
            cause=cause,
        )
