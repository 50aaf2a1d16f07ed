import jwt
import pytest
from django.conf import settings
from django.utils import timezone
from datetime import timedelta

from yatra.models import Submission, StoredFile

from conftest import client_for, sample_record

pytestmark = pytest.mark.django_db


def _submit(client, **overrides):
    return client.post("/api/form/submit", {"data": sample_record(**overrides)}, format="json")


# ---------- auth ----------

def test_register_issues_a_user_token():
    resp = client_for().post("/api/auth/register",
                             {"email": "Neha@Example.com", "password": "pw", "name": "Neha Nair"}, format="json")
    assert resp.status_code == 201
    assert resp.data["user"]["email"] == "neha@example.com"
    assert resp.data["user"]["role"] == "user"
    assert resp.data["user"]["name"] == "Neha Nair"

    claims = jwt.decode(resp.data["token"], settings.SIMPLE_JWT["SIGNING_KEY"], algorithms=["HS256"])
    assert claims["role"] == "user"
    assert claims["email"] == "neha@example.com"


def test_register_rejects_duplicates_and_missing_fields(user):
    c = client_for()
    dup = c.post("/api/auth/register", {"email": user.email, "password": "pw", "name": "R"}, format="json")
    assert dup.status_code == 400
    assert dup.data == {"error": "User already exists"}

    missing = c.post("/api/auth/register", {"email": "a@b.co"}, format="json")
    assert missing.status_code == 400
    assert missing.data["error"] == "Email, password, and name required"


def test_login(user, staff_user):
    c = client_for()
    ok = c.post("/api/auth/login", {"email": user.email, "password": "secret-pass"}, format="json")
    assert ok.status_code == 200
    assert ok.data["user"]["role"] == "user"

    admin = c.post("/api/auth/login", {"email": "ADMIN@yatrasutra.com", "password": "admin-pass"}, format="json")
    assert admin.status_code == 200
    assert admin.data["user"]["role"] == "admin"

    bad = c.post("/api/auth/login", {"email": user.email, "password": "nope"}, format="json")
    assert bad.status_code == 401
    assert bad.data == {"error": "Invalid credentials"}

    empty = c.post("/api/auth/login", {}, format="json")
    assert empty.status_code == 400


def test_garbage_token_is_refused():
    c = client_for()
    c.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
    assert c.get("/api/form/schema").status_code == 401


# ---------- form ----------

def test_schema_requires_login(api_client):
    assert client_for().get("/api/form/schema").status_code == 401
    resp = api_client.get("/api/form/schema")
    assert resp.status_code == 200
    names = [f["name"] for f in resp.data["fields"]]
    assert "clientName" in names and "terms" in names


def test_submit_creates_pending_submission(api_client, user):
    resp = _submit(api_client)
    assert resp.status_code == 201
    assert resp.data["status"] == "pending"
    sub = Submission.objects.get(id=resp.data["submissionId"])
    assert sub.user == user
    assert sub.data["costPerAdult"] == "27000"


def test_submit_validation(api_client):
    assert api_client.post("/api/form/submit", {}, format="json").data == {"error": "Form data required"}

    resp = _submit(api_client, clientName="")
    assert resp.status_code == 400
    assert resp.data == {"error": "Missing required field: clientName"}

    # an unticked checkbox is still an answer
    assert _submit(api_client, terms=False).status_code == 201


def test_my_submissions_newest_first(api_client, other_user):
    first = _submit(api_client).data["submissionId"]
    second = _submit(api_client).data["submissionId"]
    Submission.objects.filter(id=first).update(created_at=timezone.now() - timedelta(days=1))
    _submit(client_for(other_user))

    resp = api_client.get("/api/form/my-submissions")
    ids = [s["id"] for s in resp.data["submissions"]]
    assert ids == [second, first]
    assert resp.data["submissions"][0]["downloadUrl"] is None


def test_submission_visible_to_owner_and_staff_only(api_client, other_user, staff_user):
    sid = _submit(api_client).data["submissionId"]
    assert api_client.get(f"/api/form/{sid}").status_code == 200
    assert client_for(other_user).get(f"/api/form/{sid}").data == {"error": "Access denied"}
    assert client_for(staff_user).get(f"/api/form/{sid}").status_code == 200
    assert api_client.get("/api/form/nope").status_code == 404


def test_download_before_approval(api_client):
    sid = _submit(api_client).data["submissionId"]
    resp = api_client.get(f"/api/form/{sid}/download")
    assert resp.status_code == 404
    assert resp.data == {"error": "PDF not available"}


# ---------- admin ----------

def test_admin_endpoints_require_staff(api_client):
    assert api_client.get("/api/admin/submissions/").status_code == 403


def test_admin_list_filters_by_status(api_client, admin_client):
    a = _submit(api_client).data["submissionId"]
    b = _submit(api_client).data["submissionId"]
    Submission.objects.filter(id=b).update(status="rejected")

    pending = admin_client.get("/api/admin/submissions/?status=pending").data["submissions"]
    assert [s["id"] for s in pending] == [a]
    everything = admin_client.get("/api/admin/submissions/?status=all").data["submissions"]
    assert {s["id"] for s in everything} == {a, b}


def test_approve_issues_receipt_then_owner_downloads_it(api_client, admin_client):
    sid = _submit(api_client).data["submissionId"]

    resp = admin_client.post(f"/api/admin/submissions/{sid}/approve/")
    assert resp.status_code == 200
    assert resp.data["status"] == "approved"
    assert resp.data["downloadUrl"] == f"/api/form/{sid}/download"

    sub = Submission.objects.get(id=sid)
    file_id, _, url = sub.pdf_url.partition("|")
    assert StoredFile.objects.filter(id=file_id, bucket="receipts").exists()
    assert url.endswith(f"/api/storage/files/{file_id}/view")

    dl = api_client.get(f"/api/form/{sid}/download")
    assert dl.status_code == 200
    assert dl["Content-Type"] == "application/pdf"
    assert f'filename="submission-{sid}.pdf"' in dl["Content-Disposition"]
    assert dl.content.startswith(b"%PDF-")

    public = client_for().get(f"/api/storage/files/{file_id}/view")
    assert public.status_code == 200
    assert public.content == dl.content

    again = admin_client.post(f"/api/admin/submissions/{sid}/approve/")
    assert again.status_code == 400
    assert again.data == {"error": "Submission already approved"}


def test_download_follows_legacy_url_refs(api_client, admin_client):
    sid = _submit(api_client).data["submissionId"]
    admin_client.post(f"/api/admin/submissions/{sid}/approve/")
    sub = Submission.objects.get(id=sid)
    file_id = sub.pdf_url.split("|")[0]
    sub.pdf_url = f"https://cloud.example.io/v1/storage/buckets/receipts/files/{file_id}/view?project=p"
    sub.save()
    assert api_client.get(f"/api/form/{sid}/download").status_code == 200

    sub.pdf_url = "https://example.com/no-id-here.pdf"
    sub.save()
    assert api_client.get(f"/api/form/{sid}/download").data == {"error": "Invalid PDF URL"}


def test_reject(api_client, admin_client):
    sid = _submit(api_client).data["submissionId"]
    resp = admin_client.post(f"/api/admin/submissions/{sid}/reject/", {}, format="json")
    assert resp.status_code == 200
    assert Submission.objects.get(id=sid).admin_message == "Your submission has been rejected"

    again = admin_client.post(f"/api/admin/submissions/{sid}/reject/", {"message": "x"}, format="json")
    assert again.data == {"error": "Submission already rejected"}


def test_reject_with_message_via_legacy_route(api_client, admin_client):
    sid = _submit(api_client).data["submissionId"]
    resp = admin_client.post(f"/api/admin/form/{sid}/reject", {"message": "Dates unavailable"}, format="json")
    assert resp.status_code == 200
    assert Submission.objects.get(id=sid).admin_message == "Dates unavailable"


def test_preview_renders_without_storing(api_client, admin_client):
    sid = _submit(api_client).data["submissionId"]
    resp = admin_client.get(f"/api/admin/submissions/{sid}/preview/")
    assert resp.status_code == 200
    assert resp["Content-Type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF-")
    assert StoredFile.objects.count() == 0
    assert Submission.objects.get(id=sid).status == "pending"


def test_approve_with_unusable_record(api_client, admin_client):
    sid = _submit(api_client).data["submissionId"]
    Submission.objects.filter(id=sid).update(data=["not", "a", "record"])
    resp = admin_client.post(f"/api/admin/submissions/{sid}/approve/")
    assert resp.status_code == 400
    assert resp.data["error"] == "invalid_booking_record"
