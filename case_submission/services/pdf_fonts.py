"""
Font acquisition for the case PDF.
Tries the bundled TrueType font first and degrades to a built-in PDF font.
"""

import enum
import functools
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

CASE_FONT_NAME = "CaseFont"

_registry_lock = threading.Lock()


class FontStatus(enum.Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"
    FAILED = "failed"


@dataclass(frozen=True)
class FontResolution:
    status: FontStatus
    font_name: Optional[str]
    detail: str = ""


@functools.lru_cache(maxsize=8)
def _load_primary(font_path: str) -> str:
    """Register a TrueType file once per process; failures are not cached"""
    if not font_path or not os.path.isfile(font_path):
        raise FileNotFoundError(f"font file not found: {font_path}")
    font_name = f"{CASE_FONT_NAME}-{Path(font_path).stem}"
    pdfmetrics.registerFont(TTFont(font_name, font_path))
    return font_name


def resolve_font(font_path: Optional[str], fallback_font: str = "Helvetica") -> FontResolution:
    """Register the bundled font, or report which built-in font to use instead"""
    try:
        with _registry_lock:
            font_name = _load_primary(font_path or "")
        return FontResolution(FontStatus.PRIMARY, font_name)
    except Exception as e:
        reason = str(e)

    if fallback_font in pdfmetrics.standardFonts:
        logger.warning(f"⚠️ Case PDF font unavailable ({reason}), using {fallback_font}")
        return FontResolution(FontStatus.FALLBACK, fallback_font, reason)

    logger.error(f"❌ No usable font: {reason}; fallback {fallback_font!r} is not a standard font")
    return FontResolution(FontStatus.FAILED, None, reason)
