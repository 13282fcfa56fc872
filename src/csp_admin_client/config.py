"""CSP admin client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CspClientConfig:
    """Configuration for the CSP admin client.

    base_url is optional so that a client can be constructed first and
    pointed at a CSP later; calls fail fast until it is set.
    """

    base_url: str | None = None
    timeout_seconds: float = 10.0
    headers: dict[str, str] = field(default_factory=dict)
