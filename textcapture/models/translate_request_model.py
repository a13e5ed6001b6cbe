"""
/**
 * @file textcapture/models/translate_request_model.py
 * @description 翻译请求模型（Pydantic）。
 */
"""

from __future__ import annotations

from pydantic import BaseModel


class TranslateRequest(BaseModel):
    text: str
    source: str = "auto"
    target: str = "en"
