"""
/**
 * @file textcapture/models/language_model.py
 * @description 语言列表条目。
 */
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class LanguageEntry:
    name: str
    code: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "code": self.code}
