"""HTTP transport for the quote listing endpoint."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..config import ClientConfig
from .errors import TransportError


class QuotesClient:
    """Issue page requests against the configured API.

    Instances are callable with ``(user_id, page, cluster, z)`` so they can be
    handed directly to :class:`~quote_fetcher.engine.pagination.QuoteWalk`.
    """

    def __init__(
        self,
        config: ClientConfig,
        logger: structlog.BoundLogger | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("quote_fetcher.fetcher")
        headers = {"User-Agent": config.user_agent, "Accept": "application/json"}
        headers.update(config.extra_headers)
        client_kwargs: dict[str, Any] = {
            "base_url": config.base_url,
            "headers": headers,
            "cookies": config.cookies,
            "timeout": config.timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    def __enter__(self) -> "QuotesClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __call__(self, user_id: str, page: int, cluster: int, z: int) -> bytes:
        return self.fetch_page(user_id, page, cluster, z)

    def close(self) -> None:
        self._client.close()

    def build_params(self, user_id: str, page: int, cluster: int, z: int) -> dict[str, str]:
        cfg = self.config
        return {
            "id": user_id,
            "bolum": cfg.section,
            "sayfa": str(page),
            "kume": str(cluster),
            "z": str(z),
            "appVersion": cfg.app_version,
            "os": cfg.platform,
            "hl": cfg.locale,
        }

    def fetch_page(self, user_id: str, page: int, cluster: int, z: int) -> bytes:
        params = self.build_params(user_id, page, cluster, z)
        try:
            response = self._client.get(self.config.endpoint, params=params)
        except httpx.HTTPError as exc:
            self.logger.warning("fetch_error", page=page, error=str(exc))
            raise TransportError(f"Request for page {page} failed: {exc}") from exc
        if self._is_failure(response):
            self.logger.warning("fetch_status", page=page, status=response.status_code)
            raise TransportError(
                f"Unexpected status {response.status_code} for page {page}",
                status_code=response.status_code,
                url=str(response.url),
            )
        self.logger.debug("fetch_ok", page=page, bytes=len(response.content))
        return response.content

    @staticmethod
    def _is_failure(response: Any) -> bool:
        status_code = getattr(response, "status_code", 0)
        return status_code >= 400


__all__ = ["QuotesClient"]
