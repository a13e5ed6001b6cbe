"""
/**
 * @file textcapture/services/papago_client_service.py
 * @description Papago 翻译客户端：回调式异步接口 + 语言对表。
 */
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import Callable, Dict, List, Optional

import requests

from textcapture.config import Settings, load_settings


logger = logging.getLogger(__name__)

Completion = Callable[[Optional[str], Optional[Exception]], None]

PAPAGO_LANGUAGES = ["ko", "en", "ja", "zh-CN", "zh-TW", "vi", "id", "th", "de", "ru", "es", "it", "fr"]

# source → 可翻译的 target 列表（顺序即客户端下拉顺序）
PAPAGO_TARGETS: Dict[str, List[str]] = {
    "ko": ["en", "ja", "zh-CN", "zh-TW", "vi", "id", "th", "de", "ru", "es", "it", "fr"],
    "en": ["ko", "ja", "zh-CN", "zh-TW", "vi", "id", "th", "fr"],
    "ja": ["ko", "en", "zh-CN", "zh-TW", "vi", "id", "th", "fr"],
    "zh-CN": ["ko", "en", "ja", "zh-TW"],
    "zh-TW": ["ko", "en", "ja", "zh-CN"],
    "vi": ["ko", "en", "ja"],
    "id": ["ko", "en", "ja"],
    "th": ["ko", "en", "ja"],
    "de": ["ko"],
    "ru": ["ko"],
    "es": ["ko"],
    "it": ["ko"],
    "fr": ["ko", "en", "ja"],
    "auto": list(PAPAGO_LANGUAGES),
}


class PapagoError(Exception):
    pass


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if data.get("errorMessage"):
            return str(data["errorMessage"])
    return response.text or f"HTTP {response.status_code}"


class PapagoClient:
    _instance: Optional["PapagoClient"] = None
    _instance_lock = threading.Lock()

    def __init__(self, settings: Optional[Settings] = None, executor: Optional[concurrent.futures.Executor] = None):
        self._initial_settings = settings
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=self.settings.translation_max_workers, thread_name_prefix="papago"
        )

    @classmethod
    def instance(cls) -> "PapagoClient":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = PapagoClient()
            return cls._instance

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @staticmethod
    def target_languages(source: str) -> List[str]:
        return list(PAPAGO_TARGETS.get(source, []))

    def _get_headers(self) -> Dict[str, str]:
        client_id, client_secret = self.settings.resolve_papago_credentials()
        if not client_id or not client_secret:
            raise PapagoError("Missing Papago credentials. Set PAPAGO_CLIENT_ID/PAPAGO_CLIENT_SECRET or config.local.json")
        return {
            "X-NCP-APIGW-API-KEY-ID": client_id,
            "X-NCP-APIGW-API-KEY": client_secret,
        }

    def request_translation(self, text: str, source: str, target: str, honorific: Optional[bool] = None) -> Optional[str]:
        """Run one blocking translation request; ``None`` when the backend returns no text."""
        payload = {"source": source, "target": target, "text": text}
        if honorific is not None:
            payload["honorific"] = "true" if honorific else "false"
        response = requests.post(
            self.settings.papago_endpoint,
            headers=self._get_headers(),
            data=payload,
            timeout=self.settings.translation_request_timeout,
        )
        if response.status_code != 200:
            raise PapagoError(_error_message(response))
        try:
            data = response.json()
        except ValueError:
            raise PapagoError("Invalid response from Papago")
        message = data.get("message") if isinstance(data, dict) else None
        result = message.get("result") if isinstance(message, dict) else None
        translated = result.get("translatedText") if isinstance(result, dict) else None
        return translated if isinstance(translated, str) and translated else None

    def _run(self, text: str, source: str, target: str, honorific: Optional[bool], completion: Completion) -> None:
        try:
            result = self.request_translation(text, source, target, honorific)
        except (PapagoError, requests.RequestException) as e:
            completion(None, e)
            return
        completion(result, None)

    def translate(
        self,
        text: str,
        source: str,
        target: str,
        honorific: Optional[bool],
        completion: Completion,
    ) -> concurrent.futures.Future:
        """Start a translation; ``completion(result, error)`` fires once from a worker thread.

        The returned future is the queued job; cancelling it before a worker picks
        it up drops the request and the completion never fires.
        """
        future = self._executor.submit(self._run, text, source, target, honorific, completion)
        future.add_done_callback(_log_worker_failure)
        return future


def _log_worker_failure(future: concurrent.futures.Future) -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"Papago worker failed: {error}")
