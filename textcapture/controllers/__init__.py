"""
/**
 * @file textcapture/controllers/__init__.py
 * @description 控制器（路由）导出。
 */
"""

from .client_controller import router as client_router
from .health_controller import router as health_router
from .image_controller import router as image_router
from .languages_controller import router as languages_router
from .translate_controller import router as translate_router

__all__ = [
    "client_router",
    "health_router",
    "image_router",
    "languages_router",
    "translate_router",
]
