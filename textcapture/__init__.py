"""
/**
 * @file textcapture/__init__.py
 * @description TextCapture 网关服务：截图 OCR 与文本翻译。
 */
"""

__version__ = "0.1.0"
