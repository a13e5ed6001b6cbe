"""
/**
 * @file textcapture/models/translate_outcome_model.py
 * @description 翻译结果：success / no_result / error / timeout。
 */
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


SUCCESS = "success"
NO_RESULT = "no_result"
ERROR = "error"
TIMEOUT = "timeout"


@dataclass(frozen=True)
class TranslateOutcome:
    status: str
    text: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "TranslateOutcome":
        return cls(status=SUCCESS, text=text)

    @classmethod
    def no_result(cls) -> "TranslateOutcome":
        return cls(status=NO_RESULT)

    @classmethod
    def failure(cls, message: str) -> "TranslateOutcome":
        return cls(status=ERROR, message=message)

    @classmethod
    def timed_out(cls, seconds: float) -> "TranslateOutcome":
        return cls(status=TIMEOUT, message=f"Translation timed out after {seconds:g}s")
