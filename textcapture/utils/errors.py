"""
/**
 * @file textcapture/utils/errors.py
 * @description 请求处理错误类型：在控制器边界转换为纯文本响应。
 */
"""

from __future__ import annotations


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(GatewayError):
    """Malformed or missing input."""

    status_code = 400


class InternalError(GatewayError):
    """Resource failure after the input was accepted."""

    status_code = 500


class GatewayTimeout(GatewayError):
    status_code = 504
