"""
/**
 * @file textcapture/utils/language_names.py
 * @description 语言代码 → 显示名称（覆盖表 → Babel 本地化名称 → 原始代码）。
 */
"""

from __future__ import annotations

from babel import Locale, UnknownLocaleError


# 通用解析器对中文简繁体变体处理不一致，客户端依赖以下固定文本
LANGUAGE_NAME_OVERRIDES = (
    (("zh-CN", "zh-Hans"), "中文(简体)"),
    (("zh-TW", "zh-Hant"), "中文(繁體)"),
)


def language_name(code: str) -> str:
    for codes, name in LANGUAGE_NAME_OVERRIDES:
        if code in codes:
            return name
    try:
        locale = Locale.parse(code, sep="-")
    except (ValueError, TypeError, UnknownLocaleError):
        return code
    name = locale.get_language_name(locale)
    if not name:
        return code
    return name.title()
