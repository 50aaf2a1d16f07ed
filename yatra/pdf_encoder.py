# pdf_encoder.py
from __future__ import annotations

from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


class ReceiptRenderError(RuntimeError):
    """Drawing or finalising the PDF failed; no bytes were produced."""


class DocumentEncoder:
    """
    Owns the reportlab canvas and its byte buffer for one render.

    ``invariant=1`` pins the creation date and document id so identical
    drawing produces identical bytes.
    """

    def __init__(self, *, title: str = "", author: str = "", subject: str = "", pagesize=A4):
        self._buf = BytesIO()
        self.canvas = canvas.Canvas(self._buf, pagesize=pagesize, invariant=1)
        if title:
            self.canvas.setTitle(title)
        if author:
            self.canvas.setAuthor(author)
        if subject:
            self.canvas.setSubject(subject)
        self.page_count = 1
        self._data: Optional[bytes] = None

    @property
    def finalized(self) -> bool:
        return self._data is not None

    def new_page(self):
        if self.finalized:
            raise ReceiptRenderError("document already finalized")
        self.canvas.showPage()
        self.page_count += 1

    def finalize(self) -> bytes:
        """Flush the last page and return the complete PDF. Idempotent."""
        if self._data is not None:
            return self._data
        try:
            self.canvas.showPage()
            self.canvas.save()
        except Exception as e:
            raise ReceiptRenderError(f"could not finalize PDF: {e}") from e

        data = self._buf.getvalue()
        if not data.startswith(b"%PDF-") or b"%%EOF" not in data[-64:]:
            raise ReceiptRenderError("encoder produced an incomplete PDF")
        self._data = data
        return data
