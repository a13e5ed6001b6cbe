"""
/**
 * @file textcapture/config/settings.py
 * @description 服务配置加载与合并（config.json + config.local.json + 环境变量）。
 */
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(REPO_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(REPO_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(REPO_ROOT, "config.example.json")

DEFAULT_PAPAGO_ENDPOINT = "https://naveropenapi.apigw.ntruss.com/nmt/v1/translation"

logger = logging.getLogger("config_loader")


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _positive_number(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if value > 0 else default


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        value = self.raw.get(name, {})
        return value if isinstance(value, dict) else {}

    @property
    def endpoints(self) -> Dict[str, str]:
        return self._section("endpoints")

    @property
    def api_keys(self) -> Dict[str, str]:
        return self._section("api_keys")

    @property
    def server_host(self) -> str:
        host = self._section("server").get("host")
        return host if isinstance(host, str) and host else "0.0.0.0"

    @property
    def server_port(self) -> int:
        port = self._section("server").get("port")
        return port if isinstance(port, int) and not isinstance(port, bool) and port > 0 else 4444

    @property
    def client_url(self) -> Optional[str]:
        env = os.getenv("TEXT_CAPTURE_CLIENT_URL")
        if env:
            return env
        url = self._section("client").get("url")
        return url if isinstance(url, str) and url else None

    @property
    def client_html_path(self) -> Optional[str]:
        env = os.getenv("TEXT_CAPTURE_CLIENT_PATH")
        if env:
            return env
        path = self._section("client").get("html_path")
        return path if isinstance(path, str) and path else None

    @property
    def papago_endpoint(self) -> str:
        value = self.endpoints.get("papago")
        return value if isinstance(value, str) and value else DEFAULT_PAPAGO_ENDPOINT

    @property
    def tesseract_cmd(self) -> Optional[str]:
        value = self._section("ocr").get("tesseract_cmd")
        return value if isinstance(value, str) and value else None

    @property
    def translation_timeout(self) -> float:
        """Upper bound for waiting on a translation callback, in seconds."""
        return _positive_number(self._section("translation").get("timeout_seconds"), 30.0)

    @property
    def translation_request_timeout(self) -> float:
        return _positive_number(self._section("translation").get("request_timeout_seconds"), 15.0)

    @property
    def translation_max_workers(self) -> int:
        return int(_positive_number(self._section("translation").get("max_workers"), 8))

    @property
    def image_spool_dir(self) -> Optional[str]:
        value = self._section("image").get("spool_dir")
        return value if isinstance(value, str) and value else None

    def resolve_papago_credentials(self) -> Tuple[Optional[str], Optional[str]]:
        client_id = os.getenv("PAPAGO_CLIENT_ID") or (
            self.api_keys.get("papago_client_id") if isinstance(self.api_keys.get("papago_client_id"), str) else None
        )
        client_secret = os.getenv("PAPAGO_CLIENT_SECRET") or (
            self.api_keys.get("papago_client_secret")
            if isinstance(self.api_keys.get("papago_client_secret"), str)
            else None
        )
        return client_id or None, client_secret or None


_CACHED_SETTINGS: Optional[Settings] = None
_LAST_LOAD_TIME = 0.0
_CONFIG_HASH = ""
_SETTINGS_LOCK = threading.Lock()


def _deep_diff(d1: Dict[str, Any], d2: Dict[str, Any], path="") -> list:
    diffs = []
    for k in set(d1.keys()) | set(d2.keys()):
        p = f"{path}.{k}" if path else k
        if k not in d1:
            diffs.append(f"Added: {p}")
        elif k not in d2:
            diffs.append(f"Removed: {p}")
        elif isinstance(d1[k], dict) and isinstance(d2[k], dict):
            diffs.extend(_deep_diff(d1[k], d2[k], p))
        elif d1[k] != d2[k]:
            # api_keys 的值不写入日志
            diffs.append(f"Changed: {p}" if p.startswith("api_keys") else f"Changed: {p} ({d1[k]} -> {d2[k]})")
    return diffs


def reload_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
    force: bool = False,
) -> Settings:
    global _CACHED_SETTINGS, _LAST_LOAD_TIME, _CONFIG_HASH

    with _SETTINGS_LOCK:
        now = time.time()
        # Debounce: 500ms
        if not force and _CACHED_SETTINGS and (now - _LAST_LOAD_TIME < 0.5):
            return _CACHED_SETTINGS

        try:
            base_cfg = _load_json(base_path)
            if not base_cfg.get("endpoints") and os.path.exists(example_path):
                base_cfg = _merge_dicts(_load_json(example_path), base_cfg)

            local_cfg = _load_json(local_path)
            merged = _merge_dicts(base_cfg, local_cfg)

            # Sort keys to ensure consistent hash for same content
            new_hash = hashlib.md5(json.dumps(merged, sort_keys=True).encode("utf-8")).hexdigest()

            if _CACHED_SETTINGS and new_hash == _CONFIG_HASH:
                _LAST_LOAD_TIME = now
                return _CACHED_SETTINGS

            is_reload = _CACHED_SETTINGS is not None
            if is_reload:
                diffs = _deep_diff(_CACHED_SETTINGS.raw, merged)
                if diffs:
                    logger.info(f"Config changes detected: {'; '.join(diffs)}")

            _CACHED_SETTINGS = Settings(raw=merged)
            _CONFIG_HASH = new_hash
            _LAST_LOAD_TIME = now

            if is_reload:
                logger.info("Configuration reloaded successfully.")

        except (OSError, ValueError) as e:
            logger.error(f"Failed to reload config: {e}. Keeping old config.")
            if not _CACHED_SETTINGS:
                logger.warning("Initializing with empty settings due to load failure.")
                _CACHED_SETTINGS = Settings(raw={})

    return _CACHED_SETTINGS


def load_settings() -> Settings:
    """
    Get current settings. Lazy loads on first call.
    Subsequent reloads are handled by the file watcher calling reload_settings().
    """
    if _CACHED_SETTINGS is None:
        return reload_settings()
    return _CACHED_SETTINGS
