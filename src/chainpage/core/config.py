from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_URL_TEMPLATE = "https://{chain}.hypersync.xyz"


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class IndexerConfig:
    """Credentials and endpoint template for the remote range-query indexer."""

    bearer_token: str = ""
    url_template: str = DEFAULT_URL_TEMPLATE

    def url_for(self, chain: int) -> str:
        """Return the per-chain base endpoint."""
        return self.url_template.format(chain=chain)

    @classmethod
    def from_env(cls) -> IndexerConfig:
        return cls(
            bearer_token=os.environ.get("ENVIO_HYPERSYNC_API_KEY", ""),
            url_template=os.environ.get("CHAINPAGE_INDEXER_URL_TEMPLATE") or DEFAULT_URL_TEMPLATE,
        )


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the page HTTP API."""

    host: str = "127.0.0.1"
    port: int = 3000
    # False keeps the always-200 degraded response for existing callers
    strict_errors: bool = False

    @classmethod
    def from_env(cls) -> ServerConfig:
        return cls(
            host=os.environ.get("CHAINPAGE_HOST", "127.0.0.1"),
            port=int(os.environ.get("CHAINPAGE_PORT", "3000")),
            strict_errors=_env_flag(os.environ.get("CHAINPAGE_STRICT_ERRORS")),
        )
