"""CSP 管理クライアント"""

from __future__ import annotations

import structlog

from . import csp
from .config import CspClientConfig
from .exceptions import ConfigurationError, CspClientErrorCodes
from .models import (
    DeleteResult,
    Election,
    ElectionAuth,
    ElectionWithToken,
    User,
    UserSearch,
    UserUpdate,
)
from .signer import MessageSigner

logger = structlog.get_logger(__name__)


class CspAdminClient:
    """CSP 管理 API クライアント。

    CSP URL と署名者を保持し、各呼び出しの前に設定を検証してから
    csp ファサードへ委譲する。状態はサーバー側のみが持つ。
    """

    def __init__(
        self,
        config: CspClientConfig | None = None,
        signer: MessageSigner | None = None,
    ) -> None:
        self._config = config or CspClientConfig()
        self._signer = signer

    @property
    def base_url(self) -> str | None:
        return self._config.base_url

    @base_url.setter
    def base_url(self, value: str | None) -> None:
        self._config.base_url = value

    def set_signer(self, signer: MessageSigner | None) -> None:
        """election_auth で使う署名者を設定する。"""
        self._signer = signer

    def _require_base_url(self) -> str:
        if not self._config.base_url:
            raise ConfigurationError(
                code=CspClientErrorCodes.CSP_URL_NOT_SET,
                message="Csp URL not set",
            )
        return self._config.base_url

    def _require_signer(self) -> MessageSigner:
        if self._signer is None:
            raise ConfigurationError(
                code=CspClientErrorCodes.SIGNER_NOT_SET,
                message="Csp signer not set",
            )
        return self._signer

    async def election_create(self, election: Election) -> ElectionWithToken:
        url = self._require_base_url()
        return await csp.election_create(url, election, self._config)

    async def election_auth(self, election_id: str, message: str) -> ElectionWithToken:
        """メッセージに署名し、選挙の管理トークンを再取得する。

        選挙 ID に署名者のアドレスが埋め込まれている必要がある
        (models.embed_signer_address)。署名は 1 回のみ試行する。

        Raises:
            ConfigurationError: CSP URL または署名者が未設定の場合
        """
        url = self._require_base_url()
        signer = self._require_signer()
        signature = await signer.sign_message(message)
        logger.debug("csp election auth signed", election_id=election_id)
        return await csp.election_auth(
            url,
            election_id,
            ElectionAuth(signature=signature, data=message),
            self._config,
        )

    async def election_get(self, election_id: str) -> Election:
        url = self._require_base_url()
        return await csp.election_get(url, election_id, self._config)

    async def election_delete(self, admin_token: str, election_id: str) -> DeleteResult:
        url = self._require_base_url()
        return await csp.election_delete(url, admin_token, election_id, self._config)

    async def election_list(self) -> list[str]:
        url = self._require_base_url()
        return await csp.election_list(url, self._config)

    async def user_create(self, admin_token: str, election_id: str, user: User) -> User:
        url = self._require_base_url()
        return await csp.user_create(url, admin_token, election_id, user, self._config)

    async def user_get(self, admin_token: str, election_id: str, user_id: str) -> User:
        url = self._require_base_url()
        return await csp.user_get(url, admin_token, election_id, user_id, self._config)

    async def user_update(
        self,
        admin_token: str,
        election_id: str,
        user_id: str,
        user_update: UserUpdate,
    ) -> User:
        url = self._require_base_url()
        return await csp.user_update(
            url, admin_token, election_id, user_id, user_update, self._config
        )

    async def user_delete(self, admin_token: str, election_id: str, user_id: str) -> DeleteResult:
        url = self._require_base_url()
        return await csp.user_delete(url, admin_token, election_id, user_id, self._config)

    async def user_list(self, admin_token: str, election_id: str) -> list[User]:
        url = self._require_base_url()
        return await csp.user_list(url, admin_token, election_id, self._config)

    async def user_search(
        self,
        admin_token: str,
        election_id: str,
        query: UserSearch | None = None,
    ) -> list[User]:
        url = self._require_base_url()
        return await csp.user_search(
            url, admin_token, election_id, query or UserSearch(), self._config
        )
