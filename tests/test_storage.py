import pytest

from yatra import storage
from yatra.models import StoredFile


@pytest.mark.django_db
def test_upload_then_download():
    f = storage.upload("receipts", "submission-x.pdf", b"%PDF-1.4 body", "application/pdf")
    assert len(f.id) == 20
    assert f.size == 13
    assert storage.download(f.id) == b"%PDF-1.4 body"
    assert storage.download(f.id, bucket="receipts") == b"%PDF-1.4 body"


@pytest.mark.django_db
def test_download_checks_bucket_and_id():
    f = storage.upload("receipts", "a.pdf", b"x")
    with pytest.raises(storage.FileNotFound):
        storage.download(f.id, bucket="avatars")
    with pytest.raises(storage.FileNotFound):
        storage.download("missing")
    assert StoredFile.objects.count() == 1


def test_default_bucket_from_settings(settings):
    settings.OBJECT_STORE = {"BUCKET": "receipts-staging"}
    assert storage.default_bucket() == "receipts-staging"


def test_view_url_points_at_the_public_file_view():
    assert storage.view_url("abc") == "/api/storage/files/abc/view"


@pytest.mark.parametrize("value, expected", [
    ("abc|https://x/api/storage/files/abc/view", ("abc", "https://x/api/storage/files/abc/view")),
    ("abc|", ("abc", None)),
    ("https://cloud.example.io/v1/storage/buckets/b1/files/f00d/view?project=p",
     ("f00d", "https://cloud.example.io/v1/storage/buckets/b1/files/f00d/view?project=p")),
    ("https://example.com/receipt.pdf", (None, "https://example.com/receipt.pdf")),
    ("", (None, None)),
    (None, (None, None)),
])
def test_parse_file_ref(value, expected):
    assert storage.parse_file_ref(value) == expected


def test_compose_and_public_url():
    ref = storage.compose_file_ref("abc", "https://x/view")
    assert ref == "abc|https://x/view"
    assert storage.public_url(ref) == "https://x/view"
