"""
/**
 * @file textcapture/controllers/image_controller.py
 * @description 截图文字识别控制器。
 */
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from textcapture.config import load_settings
from textcapture.models import CaptureRequest
from textcapture.services import RecognitionError, decode_image, get_recognizer
from textcapture.utils import GatewayError, InternalError
from textcapture.utils.validators import parse_flat_body, validate_capture_request


logger = logging.getLogger(__name__)

router = APIRouter()


def _decode_and_recognize(capture: CaptureRequest) -> List[Dict[str, Any]]:
    image = decode_image(capture.image, spool_dir=load_settings().image_spool_dir)
    try:
        return get_recognizer().recognize(image, [capture.lang])
    except RecognitionError as e:
        logger.debug(f"Recognizer error: {e}")
        raise InternalError("Could not recognize text")


@router.post("/image")
async def recognize_image(request: Request):
    raw = await request.body()
    try:
        capture = validate_capture_request(parse_flat_body(raw))
        results = await run_in_threadpool(_decode_and_recognize, capture)
    except GatewayError as e:
        logger.error(e.message)
        return PlainTextResponse(e.message, status_code=e.status_code)
    return JSONResponse(results)
