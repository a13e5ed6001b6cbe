"""
/**
 * @file textcapture/services/client_bootstrap_service.py
 * @description 客户端入口：HTML 提供者 / 重定向地址 / 无（启动时确定）。
 */
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from textcapture.config import Settings


logger = logging.getLogger(__name__)

HtmlProvider = Callable[[], Optional[str]]


def html_file_provider(path: str) -> HtmlProvider:
    def provide() -> Optional[str]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            logger.warning(f"Could not read client html {path}: {e}")
            return None

    return provide


def with_server_param(client_url: str, server_url: str) -> str:
    """Append ``server=<server_url>`` so the hosted client knows where to call back."""
    parts = urlsplit(client_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "server"]
    query.append(("server", server_url))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


@dataclass(frozen=True)
class ClientBootstrap:
    html_provider: Optional[HtmlProvider] = None
    url: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientBootstrap":
        if settings.client_html_path:
            return cls(html_provider=html_file_provider(settings.client_html_path))
        return cls(url=settings.client_url)

    def html(self) -> Optional[str]:
        return self.html_provider() if self.html_provider else None
