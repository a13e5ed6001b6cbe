"""
/**
 * @file textcapture/services/recognition_service.py
 * @description OCR 适配层（Tesseract / pytesseract）：支持语言枚举与文字识别。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytesseract
from PIL import Image

from textcapture.config import Settings, load_settings


logger = logging.getLogger(__name__)

# Tesseract traineddata 名称 → 语言标签
TESSERACT_LANGUAGE_TAGS: Dict[str, str] = {
    "ara": "ar",
    "chi_sim": "zh-Hans",
    "chi_tra": "zh-Hant",
    "deu": "de",
    "eng": "en",
    "fra": "fr",
    "hin": "hi",
    "ind": "id",
    "ita": "it",
    "jpn": "ja",
    "kor": "ko",
    "nld": "nl",
    "pol": "pl",
    "por": "pt",
    "rus": "ru",
    "spa": "es",
    "tha": "th",
    "tur": "tr",
    "ukr": "uk",
    "vie": "vi",
}
_TAG_TO_TESSERACT = {tag: name for name, tag in TESSERACT_LANGUAGE_TAGS.items()}
_TAG_TO_TESSERACT.update({"zh-CN": "chi_sim", "zh-TW": "chi_tra"})

# Not a language: orientation and script detection data.
_NON_LANGUAGE_DATA = {"osd"}


class RecognitionError(Exception):
    pass


def to_language_tag(name: str) -> str:
    return TESSERACT_LANGUAGE_TAGS.get(name, name)


def to_tesseract_language(tag: str) -> str:
    if tag in _TAG_TO_TESSERACT:
        return _TAG_TO_TESSERACT[tag]
    base = tag.split("-")[0]
    return _TAG_TO_TESSERACT.get(base, tag)


def _line_key(data: Dict[str, List[Any]], i: int) -> Tuple[int, int, int, int]:
    return (data["page_num"][i], data["block_num"][i], data["par_num"][i], data["line_num"][i])


def group_words_to_lines(data: Dict[str, List[Any]]) -> List[Dict[str, Any]]:
    """Collapse word-level ``image_to_data`` output into recognized lines.

    Words with no text or a negative confidence are dropped. Each line carries
    the joined text, the mean word confidence scaled to 0..1 and the union
    bounding box in pixels.
    """
    lines: Dict[Tuple[int, int, int, int], Dict[str, Any]] = {}
    order: List[Tuple[int, int, int, int]] = []
    for i, raw_text in enumerate(data.get("text", [])):
        text = (raw_text or "").strip()
        try:
            conf = float(data["conf"][i])
        except (TypeError, ValueError):
            conf = -1.0
        if not text or conf < 0:
            continue
        key = _line_key(data, i)
        left, top = int(data["left"][i]), int(data["top"][i])
        right, bottom = left + int(data["width"][i]), top + int(data["height"][i])
        line = lines.get(key)
        if line is None:
            line = {"words": [], "confs": [], "box": [left, top, right, bottom]}
            lines[key] = line
            order.append(key)
        line["words"].append(text)
        line["confs"].append(conf)
        box = line["box"]
        box[0], box[1] = min(box[0], left), min(box[1], top)
        box[2], box[3] = max(box[2], right), max(box[3], bottom)

    results = []
    for key in order:
        line = lines[key]
        x0, y0, x1, y1 = line["box"]
        results.append(
            {
                "text": " ".join(line["words"]),
                "confidence": round(sum(line["confs"]) / len(line["confs"]) / 100.0, 4),
                "boundingBox": {"x": x0, "y": y0, "width": x1 - x0, "height": y1 - y0},
            }
        )
    return results


class TesseractRecognizer:
    def __init__(self, settings: Optional[Settings] = None):
        self._initial_settings = settings

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    def _configure(self) -> None:
        cmd = self.settings.tesseract_cmd
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

    def supported_languages(self) -> List[str]:
        self._configure()
        try:
            names = pytesseract.get_languages(config="")
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
            raise RecognitionError(str(e)) from e
        return [to_language_tag(name) for name in names if name not in _NON_LANGUAGE_DATA]

    def recognize(self, image: Image.Image, languages: Sequence[str]) -> List[Dict[str, Any]]:
        self._configure()
        lang = "+".join(to_tesseract_language(tag) for tag in languages) or None
        try:
            data = pytesseract.image_to_data(image, lang=lang, output_type=pytesseract.Output.DICT)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError, RuntimeError) as e:
            raise RecognitionError(str(e)) from e
        return group_words_to_lines(data)

    def version(self) -> Optional[str]:
        self._configure()
        try:
            return str(pytesseract.get_tesseract_version())
        except (pytesseract.TesseractNotFoundError, OSError):
            return None


_RECOGNIZER: Optional[TesseractRecognizer] = None


def get_recognizer() -> TesseractRecognizer:
    global _RECOGNIZER
    if _RECOGNIZER is None:
        _RECOGNIZER = TesseractRecognizer()
    return _RECOGNIZER
