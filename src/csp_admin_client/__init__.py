"""CSP admin client library."""

from .client import CspAdminClient
from .config import CspClientConfig
from .exceptions import (
    APIError,
    ConfigurationError,
    CspClientError,
    CspClientErrorCodes,
    UnauthorizedError,
)
from .models import (
    DeleteResult,
    Election,
    ElectionAuth,
    ElectionWithToken,
    Handler,
    User,
    UserSearch,
    UserUpdate,
    embed_signer_address,
)
from .signer import MessageSigner

__all__ = [
    "CspAdminClient",
    "CspClientConfig",
    "MessageSigner",
    "Election",
    "ElectionAuth",
    "ElectionWithToken",
    "Handler",
    "User",
    "UserSearch",
    "UserUpdate",
    "DeleteResult",
    "embed_signer_address",
    "CspClientError",
    "CspClientErrorCodes",
    "ConfigurationError",
    "UnauthorizedError",
    "APIError",
]
