"""
/**
 * @file textcapture/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .capture_request_model import CaptureRequest
from .language_model import LanguageEntry
from .translate_outcome_model import TranslateOutcome
from .translate_request_model import TranslateRequest

__all__ = ["CaptureRequest", "LanguageEntry", "TranslateOutcome", "TranslateRequest"]
