"""
/**
 * @file textcapture/controllers/languages_controller.py
 * @description 语言列表控制器（识别源语言 / 翻译目标语言）。
 */
"""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from textcapture.services import RecognitionError, source_languages, target_languages


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/source-languages")
def get_source_languages():
    try:
        return source_languages()
    except RecognitionError as e:
        logger.error(f"Could not get recognition languages: {e}")
        return PlainTextResponse("Could not get recognition languages")


@router.get("/target-languages")
def get_target_languages(source: str = "en"):
    return target_languages(source)
