# yatra/storage.py
"""
Bucket/file store for generated receipts, kept in the database.

Submissions reference a stored file with a single string ``"{fileId}|{url}"``.
Older rows only carry a URL; their file id is recovered from the
``.../files/{id}/...`` path segment.
"""
import logging
import re
from typing import Optional, Tuple

from django.conf import settings
from django.urls import reverse

from .models import StoredFile

log = logging.getLogger(__name__)

REF_SEPARATOR = "|"
_LEGACY_FILE_ID = re.compile(r"files/([^/?]+)")


class FileNotFound(LookupError):
    pass


def default_bucket() -> str:
    return (getattr(settings, "OBJECT_STORE", {}) or {}).get("BUCKET", "receipts")


def upload(bucket: str, filename: str, content: bytes,
           content_type: str = "application/octet-stream") -> StoredFile:
    f = StoredFile.objects.create(
        bucket=bucket,
        filename=filename,
        content_type=content_type,
        size=len(content),
        content=content,
    )
    log.info("stored %s/%s as %s (%d bytes)", bucket, filename, f.id, f.size)
    return f


def get_file(file_id: str, bucket: Optional[str] = None) -> StoredFile:
    qs = StoredFile.objects.filter(id=file_id)
    if bucket:
        qs = qs.filter(bucket=bucket)
    f = qs.first()
    if f is None:
        raise FileNotFound(file_id)
    return f


def download(file_id: str, bucket: Optional[str] = None) -> bytes:
    return bytes(get_file(file_id, bucket).content)


def view_url(file_id: str, request=None) -> str:
    path = reverse("storage_view", kwargs={"file_id": file_id})
    return request.build_absolute_uri(path) if request is not None else path


# ---------- "{fileId}|{url}" references ----------

def compose_file_ref(file_id: str, url: str) -> str:
    return f"{file_id}{REF_SEPARATOR}{url}"


def parse_file_ref(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """-> (file_id, url); either may be None."""
    if not value:
        return None, None
    if REF_SEPARATOR in value:
        file_id, url = value.split(REF_SEPARATOR, 1)
        return (file_id or None), (url or None)
    m = _LEGACY_FILE_ID.search(value)
    return (m.group(1) if m else None), value


def public_url(value: Optional[str]) -> Optional[str]:
    return parse_file_ref(value)[1]
