"""
/**
 * @file textcapture/services/image_decoder_service.py
 * @description base64（可带 data URI 前缀）→ 字节 → Pillow 图像。
 * @note 每个请求独立处理：默认内存解码；配置 spool_dir 时使用唯一文件名并在读取后删除。
 */
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import re
import uuid
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from textcapture.utils.errors import BadRequest, InternalError


logger = logging.getLogger(__name__)

DATA_URI_PREFIX_RE = re.compile(r"^data:image/\w+;base64,")

# DecompressionBombError 不是 OSError 的子类
_LOAD_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


def strip_data_uri_prefix(value: str) -> str:
    return DATA_URI_PREFIX_RE.sub("", value, count=1)


def decode_base64_image(value: str) -> bytes:
    try:
        return base64.b64decode(strip_data_uri_prefix(value), validate=True)
    except (binascii.Error, ValueError):
        raise BadRequest("Could not decode base64 image")


def _open_image(source) -> Image.Image:
    with Image.open(source) as im:
        im.load()
        return im.copy()


def load_image(data: bytes, spool_dir: Optional[str] = None) -> Image.Image:
    if not spool_dir:
        try:
            return _open_image(BytesIO(data))
        except _LOAD_ERRORS as e:
            logger.debug(f"Image parse failed: {e}")
            raise InternalError("Could not load image")

    path = os.path.join(spool_dir, f"capture_{uuid.uuid4().hex}.png")
    try:
        try:
            os.makedirs(spool_dir, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.debug(f"Image write failed for {path}: {e}")
            raise InternalError("Could not write image to disk")
        try:
            return _open_image(path)
        except _LOAD_ERRORS as e:
            logger.debug(f"Image parse failed for {path}: {e}")
            raise InternalError("Could not load image")
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove spooled image {path}: {e}")


def decode_image(value: str, spool_dir: Optional[str] = None) -> Image.Image:
    return load_image(decode_base64_image(value), spool_dir=spool_dir)
