"""
/**
 * @file textcapture/models/capture_request_model.py
 * @description 截图识别请求模型（Pydantic）。
 */
"""

from __future__ import annotations

from pydantic import BaseModel


class CaptureRequest(BaseModel):
    image: str
    lang: str = "en"
