# pdf_assets.py
"""
Optional raster/font assets for the receipt.

The composer never touches the filesystem directly: it asks an *asset
provider* (any callable ``name -> bytes | None``) for raw bytes. The default
provider resolves names the way the rest of the project finds static files
(staticfiles finders, STATIC_ROOT, STATICFILES_DIRS, this package). Missing
or broken assets are never fatal.
"""
from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Mapping, Optional

from django.conf import settings
from django.contrib.staticfiles import finders

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from .pdf_layout import flip_y

logger = logging.getLogger(__name__)

AssetProvider = Callable[[str], Optional[bytes]]

DEFAULT_ASSETS = {
    "LOGO": "yatra/logo.png",
    "SEAL": "yatra/seal.png",
    "DISPLAY_FONT": "yatra/AmericanCaptain.otf",
    "BODY_FONT": "yatra/DejaVuSans.ttf",
    "BOLD_FONT": "yatra/DejaVuSans-Bold.ttf",
}


def asset_names() -> dict:
    """DEFAULT_ASSETS overridden by settings.BOOKING_PDF."""
    cfg = getattr(settings, "BOOKING_PDF", {}) or {}
    return {key: cfg.get(key, default) for key, default in DEFAULT_ASSETS.items()}


# =====================================================================
# PROVIDERS
# =====================================================================

def _find_static(name: str) -> Optional[str]:
    """Resolve a static asset name to a path: finders, STATIC_ROOT, STATICFILES_DIRS, this package."""
    if not name:
        return None
    if os.path.isabs(name):
        return name if os.path.exists(name) else None

    p = finders.find(name)
    if p:
        return p

    sroot = getattr(settings, "STATIC_ROOT", None)
    if sroot:
        cand = os.path.join(sroot, name)
        if os.path.exists(cand):
            return cand

    for base in getattr(settings, "STATICFILES_DIRS", []):
        cand = os.path.join(base, name)
        if os.path.exists(cand):
            return cand

    here = os.path.dirname(__file__)
    cand = os.path.join(here, "static", name)
    if os.path.exists(cand):
        return cand
    return None


def _read(path: Optional[str]) -> Optional[bytes]:
    if not path:
        return None
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as e:
        logger.warning("asset unreadable: %s (%s)", path, e)
        return None


def static_asset_provider(name: str) -> Optional[bytes]:
    return _read(_find_static(name))


def directory_asset_provider(base_dir: str) -> AssetProvider:
    """Provider rooted at ``base_dir`` (scripts, tests)."""
    def provide(name: str) -> Optional[bytes]:
        return _read(os.path.join(base_dir, name)) if name else None
    return provide


def mapping_asset_provider(assets: Mapping[str, bytes]) -> AssetProvider:
    """In-memory provider: ``{"yatra/logo.png": b"..."}``."""
    return lambda name: assets.get(name)


def null_asset_provider(name: str) -> Optional[bytes]:
    return None


def load_asset(provider: AssetProvider, name: Optional[str]) -> Optional[bytes]:
    """Ask the provider for ``name``; provider errors are logged and treated as missing."""
    if not name:
        return None
    try:
        data = provider(name)
    except Exception:
        logger.warning("asset provider failed for %s", name, exc_info=True)
        return None
    if not data:
        logger.info("asset not found: %s", name)
        return None
    return data


# =====================================================================
# FONTS
# =====================================================================

@dataclass(frozen=True)
class Fonts:
    body: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    display: str = "Helvetica-Bold"


DEFAULT_FONTS = Fonts()


def _register_ttf(family: str, data: Optional[bytes]) -> Optional[str]:
    """
    Register TrueType bytes under a content-addressed name and return it.
    Re-registering the same bytes is a no-op; anything reportlab can't parse
    (CFF-flavoured .otf, truncated files) returns None.
    """
    if not data:
        return None
    name = f"{family}-{hashlib.sha1(data).hexdigest()[:10]}"
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    try:
        pdfmetrics.registerFont(TTFont(name, BytesIO(data)))
    except Exception as e:
        logger.warning("font %s not usable, falling back (%s)", family, e)
        return None
    return name


def load_fonts(provider: AssetProvider) -> Fonts:
    """Body/bold fonts (DejaVu when shipped) and the display font for the company name."""
    names = asset_names()
    body = _register_ttf("ReceiptBody", load_asset(provider, names["BODY_FONT"]))
    bold = _register_ttf("ReceiptBold", load_asset(provider, names["BOLD_FONT"]))
    display = _register_ttf("ReceiptDisplay", load_asset(provider, names["DISPLAY_FONT"]))

    fallback = DEFAULT_FONTS
    body = body or fallback.body
    bold = bold or (body if body != fallback.body else fallback.bold)
    return Fonts(body=body, bold=bold, display=display or fallback.display)


# =====================================================================
# IMAGES
# =====================================================================

def draw_image(c: canvas.Canvas, data: Optional[bytes], x: float, top: float,
               w: float, h: float, *, label: str = "image") -> bool:
    """
    Draw raster bytes fitted (aspect kept) into the box whose top-left is
    (x, top). Returns False and leaves the box empty if the bytes are
    missing or not a decodable image.
    """
    if not data:
        return False
    try:
        img = ImageReader(BytesIO(data))
        iw, ih = img.getSize()
        r = min(w / iw, h / ih)
        rw, rh = iw * r, ih * r
        c.drawImage(img, x + (w - rw) / 2.0, flip_y(top) - h + (h - rh) / 2.0, rw, rh, mask="auto")
        return True
    except Exception:
        logger.warning("%s could not be drawn; leaving slot blank", label, exc_info=True)
        return False
