"""
/**
 * @file textcapture/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .errors import BadRequest, GatewayError, GatewayTimeout, InternalError
from .language_names import language_name

__all__ = ["GatewayError", "BadRequest", "InternalError", "GatewayTimeout", "language_name"]
