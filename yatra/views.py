# views.py
import json
import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import User
from django.http import HttpResponse
from rest_framework import renderers
from rest_framework.decorators import api_view, permission_classes, renderer_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from . import storage
from .auth_jwt import issue_token
from .form_schema import FORM_SCHEMA, first_missing_field
from .models import Submission
from .pdf import receipt_filename
from .serializers import RegisterSerializer, SubmissionSerializer, UserSerializer

log = logging.getLogger(__name__)


def _dbg(*args, **kwargs):
    """
    Compact JSON debug line:
      - _dbg("TAG", key=val, ...)
      - _dbg(key=val, ...)
    Never raises.
    """
    try:
        tag = args[0] if args else kwargs.pop("tag", None)
        payload = {"tag": tag} if tag is not None else {}
        payload.update(kwargs)
        log.debug(json.dumps(payload, default=str))
    except Exception:
        log.debug("[DBG] %s %r", args, kwargs)


class PassthroughPDFRenderer(renderers.BaseRenderer):
    """
    Accepts Accept: application/pdf so DRF doesn't 406 before our view runs.
    We still return HttpResponse(pdf_bytes), so this is a no-op renderer.
    """
    media_type = "application/pdf"
    format = "pdf"
    charset = None
    render_style = "binary"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        return data


# JSON first so error bodies render for clients that send Accept: */*
PDF_RENDERERS = [renderers.JSONRenderer, PassthroughPDFRenderer]


def pdf_response(pdf_bytes: bytes, filename: str, *, inline: bool = False) -> HttpResponse:
    resp = HttpResponse(pdf_bytes, content_type="application/pdf")
    disposition = "inline" if inline else "attachment"
    resp["Content-Disposition"] = f'{disposition}; filename="{filename}"'
    return resp


@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return Response({"ok": True})


# ---------- Auth ----------

@api_view(["POST"])
@permission_classes([AllowAny])
def register(request):
    data = request.data
    if not data.get("email") or not data.get("password") or not data.get("name"):
        return Response({"error": "Email, password, and name required"}, status=400)

    ser = RegisterSerializer(data=data)
    if not ser.is_valid():
        _dbg("REGISTER:INVALID", errors=ser.errors)
        if "email" in ser.errors and "User already exists" in [str(e) for e in ser.errors["email"]]:
            return Response({"error": "User already exists"}, status=400)
        return Response({"error": "invalid_registration", "detail": ser.errors}, status=400)

    user = ser.save()
    _dbg("REGISTER:OK", user_id=user.id)
    return Response({"token": issue_token(user), "user": UserSerializer(user).data}, status=201)


@api_view(["POST"])
@permission_classes([AllowAny])
def login(request):
    email = (request.data.get("email") or "").strip()
    password = request.data.get("password") or ""
    if not email or not password:
        return Response({"error": "Email and password required"}, status=400)

    # accounts made with createsuperuser may have a username that isn't the email
    match = User.objects.filter(email__iexact=email).first()
    username = match.username if match else email.lower()

    user = authenticate(request, username=username, password=password)
    if user is None:
        _dbg("LOGIN:REJECTED", email=email)
        return Response({"error": "Invalid credentials"}, status=401)

    return Response({"token": issue_token(user), "user": UserSerializer(user).data})


# ---------- Booking form ----------

@api_view(["GET"])
@permission_classes([IsAuthenticated])
def form_schema(request):
    return Response(FORM_SCHEMA)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def submit_form(request):
    data = request.data.get("data")
    if not data or not isinstance(data, dict):
        return Response({"error": "Form data required"}, status=400)

    missing = first_missing_field(data)
    if missing:
        _dbg("SUBMIT:MISSING_FIELD", field=missing, user_id=request.user.id)
        return Response({"error": f"Missing required field: {missing}"}, status=400)

    sub = Submission.objects.create(user=request.user, data=data)
    _dbg("SUBMIT:CREATED", submission_id=sub.id, user_id=request.user.id)
    return Response({
        "message": "Form submitted successfully",
        "submissionId": sub.id,
        "status": sub.status,
    }, status=201)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def my_submissions(request):
    qs = Submission.objects.filter(user=request.user).order_by("-created_at")
    return Response({"submissions": SubmissionSerializer(qs, many=True).data})


def _visible_submission(request, submission_id):
    """-> (submission, None) or (None, error Response). Owners and staff only."""
    sub = Submission.objects.filter(id=submission_id).select_related("user").first()
    if sub is None:
        return None, Response({"error": "not found"}, status=404)
    if sub.user_id != request.user.id and not request.user.is_staff:
        _dbg("SUBMISSION:FORBIDDEN", submission_id=submission_id,
             req_user_id=request.user.id, owner_id=sub.user_id)
        return None, Response({"error": "Access denied"}, status=403)
    return sub, None


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def get_submission(request, submission_id: str):
    sub, err = _visible_submission(request, submission_id)
    if err:
        return err
    return Response(SubmissionSerializer(sub).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@renderer_classes(PDF_RENDERERS)
def download_submission(request, submission_id: str):
    sub, err = _visible_submission(request, submission_id)
    if err:
        return err

    if not sub.is_approved or not sub.pdf_url:
        return Response({"error": "PDF not available"}, status=404)

    file_id, _url = storage.parse_file_ref(sub.pdf_url)
    if not file_id:
        _dbg("DOWNLOAD:BAD_REF", submission_id=sub.id, pdf_url=sub.pdf_url)
        return Response({"error": "Invalid PDF URL"}, status=500)

    try:
        pdf_bytes = storage.download(file_id)
    except storage.FileNotFound:
        _dbg("DOWNLOAD:FILE_MISSING", submission_id=sub.id, file_id=file_id)
        return Response({"error": "PDF not available"}, status=404)

    _dbg("DOWNLOAD:OK", submission_id=sub.id, file_id=file_id, size=len(pdf_bytes))
    return pdf_response(pdf_bytes, receipt_filename(sub.id))


# ---------- Stored files ----------

@api_view(["GET"])
@permission_classes([AllowAny])
@renderer_classes(PDF_RENDERERS)
def storage_view(request, file_id: str):
    """Public link stored alongside approved submissions."""
    try:
        f = storage.get_file(file_id)
    except storage.FileNotFound:
        return Response({"error": "not found"}, status=404)
    resp = HttpResponse(bytes(f.content), content_type=f.content_type)
    resp["Content-Disposition"] = f'inline; filename="{f.filename}"'
    return resp
