"""
/**
 * @file textcapture/controllers/translate_controller.py
 * @description 翻译控制器（纯文本响应）。
 */
"""

import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, Response

from textcapture.models.translate_outcome_model import NO_RESULT, SUCCESS, TIMEOUT
from textcapture.services import translate_text
from textcapture.utils import BadRequest, GatewayTimeout, InternalError
from textcapture.utils.validators import parse_flat_body, validate_translate_request


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate")
async def translate(request: Request):
    raw = await request.body()
    try:
        req = validate_translate_request(parse_flat_body(raw))
    except BadRequest as e:
        logger.error(e.message)
        return PlainTextResponse(e.message, status_code=e.status_code)

    outcome = await run_in_threadpool(translate_text, req.text, source=req.source, target=req.target)

    if outcome.status == SUCCESS:
        return PlainTextResponse(outcome.text)
    if outcome.status == NO_RESULT:
        # 204 不允许携带响应体
        logger.error("No result")
        return Response(status_code=204)
    if outcome.status == TIMEOUT:
        logger.error(outcome.message)
        return PlainTextResponse("Translation timed out", status_code=GatewayTimeout.status_code)
    logger.error(outcome.message)
    return PlainTextResponse(outcome.message or "Translation failed", status_code=InternalError.status_code)
