import json
from typing import Dict, Union

from textcapture.models import CaptureRequest, TranslateRequest
from textcapture.utils.errors import BadRequest


def parse_flat_body(raw: Union[bytes, str]) -> Dict[str, str]:
    """Parse a JSON body that must be an object with string values only."""
    try:
        body = json.loads(raw)
    except (ValueError, TypeError):
        raise BadRequest("Could not parse body")
    if not isinstance(body, dict) or not all(isinstance(v, str) for v in body.values()):
        raise BadRequest("Could not parse body")
    return body


def validate_capture_request(body: Dict[str, str]) -> CaptureRequest:
    if "image" not in body:
        raise BadRequest("Could not find base64 image")
    return CaptureRequest(lang=body.get("lang", "en"), image=body["image"])


def validate_translate_request(body: Dict[str, str]) -> TranslateRequest:
    # 不做 strip：只拒绝空字符串
    text = body.get("text", "")
    if not text:
        raise BadRequest("No text to translate")
    return TranslateRequest(
        source=body.get("source", "auto"),
        target=body.get("target", "en"),
        text=text,
    )
