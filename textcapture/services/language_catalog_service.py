"""
/**
 * @file textcapture/services/language_catalog_service.py
 * @description 语言列表服务：OCR 支持语言（源）与翻译目标语言。
 */
"""

from __future__ import annotations

from typing import Dict, List, Optional

from textcapture.models import LanguageEntry
from textcapture.services.papago_client_service import PapagoClient
from textcapture.services.recognition_service import TesseractRecognizer, get_recognizer
from textcapture.utils import language_name


def create_language_entry(code: str) -> LanguageEntry:
    return LanguageEntry(name=language_name(code), code=code)


def source_languages(recognizer: Optional[TesseractRecognizer] = None) -> List[Dict[str, str]]:
    r = recognizer or get_recognizer()
    # 保持 OCR 引擎返回的顺序
    return [create_language_entry(code).to_dict() for code in r.supported_languages()]


def target_languages(source: str = "en") -> List[Dict[str, str]]:
    return [create_language_entry(code).to_dict() for code in PapagoClient.target_languages(source)]
