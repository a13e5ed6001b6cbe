"""
/**
 * @file textcapture/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .client_bootstrap_service import ClientBootstrap, html_file_provider, with_server_param
from .image_decoder_service import decode_base64_image, decode_image, load_image, strip_data_uri_prefix
from .language_catalog_service import source_languages, target_languages
from .papago_client_service import PapagoClient, PapagoError
from .recognition_service import RecognitionError, TesseractRecognizer, get_recognizer
from .translation_service import translate_text

__all__ = [
    "ClientBootstrap",
    "html_file_provider",
    "with_server_param",
    "decode_base64_image",
    "decode_image",
    "load_image",
    "strip_data_uri_prefix",
    "source_languages",
    "target_languages",
    "PapagoClient",
    "PapagoError",
    "RecognitionError",
    "TesseractRecognizer",
    "get_recognizer",
    "translate_text",
]
