"""
/**
 * @file textcapture/controllers/health_controller.py
 * @description 健康检查控制器。
 */
"""

from fastapi import APIRouter


router = APIRouter()


@router.get("/health")
def health():
    from textcapture.config import load_settings
    from textcapture.services import get_recognizer

    settings = load_settings()

    client_id, client_secret = settings.resolve_papago_credentials()
    api_keys_status = {
        "papago": bool(client_id and client_secret),
    }

    tesseract_version = get_recognizer().version()
    ocr_status = {
        "tesseract_available": tesseract_version is not None,
        "tesseract_version": tesseract_version,
    }

    is_healthy = all(api_keys_status.values()) and ocr_status["tesseract_available"]

    return {
        "status": "ok" if is_healthy else "degraded",
        "checks": {
            "api_keys": api_keys_status,
            "ocr": ocr_status,
        }
    }
