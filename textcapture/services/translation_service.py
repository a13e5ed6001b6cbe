"""
/**
 * @file textcapture/services/translation_service.py
 * @description 回调式翻译 → 阻塞调用（带超时）。
 */
"""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Optional

from textcapture.config import load_settings
from textcapture.models import TranslateOutcome
from textcapture.services.papago_client_service import PapagoClient


logger = logging.getLogger(__name__)


def translate_text(
    text: str,
    source: str = "auto",
    target: str = "en",
    client: Optional[PapagoClient] = None,
    timeout: Optional[float] = None,
) -> TranslateOutcome:
    c = client or PapagoClient.instance()
    wait = timeout if timeout is not None else load_settings().translation_timeout
    gate: concurrent.futures.Future = concurrent.futures.Future()

    def on_complete(result, error):
        try:
            gate.set_result((result, error))
        except concurrent.futures.InvalidStateError:
            logger.debug(f"Ignoring late translation callback ({source} -> {target})")

    job = c.translate(text=text, source=source, target=target, honorific=None, completion=on_complete)

    try:
        result, error = gate.result(timeout=wait)
    except concurrent.futures.TimeoutError:
        if gate.cancel():
            # still queued: drop it so it never reaches the backend
            if job is not None and job.cancel():
                logger.debug(f"Cancelled queued translation ({source} -> {target})")
            return TranslateOutcome.timed_out(wait)
        # callback landed between the timeout and cancel
        result, error = gate.result()

    if error is not None:
        return TranslateOutcome.failure(str(error))
    if not result:
        return TranslateOutcome.no_result()
    return TranslateOutcome.success(result)
