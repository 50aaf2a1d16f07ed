from django.db import transaction
from django.urls import reverse
from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.routers import DefaultRouter

from . import storage
from .models import Submission
from .pdf import BookingRecordError, ReceiptRenderError, generate_booking_pdf, receipt_filename
from .serializers import SubmissionSerializer
from .views import PDF_RENDERERS, _dbg, pdf_response

DEFAULT_REJECT_MESSAGE = "Your submission has been rejected"


class IsAdminUser(permissions.BasePermission):
    """
    Allows access only to admin users.
    """
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)


def _render_receipt(sub: Submission):
    """-> (pdf_bytes, None) or (None, error Response)."""
    try:
        return generate_booking_pdf(sub.data, sub.id), None
    except BookingRecordError as e:
        _dbg("ADMIN:BAD_RECORD", submission_id=sub.id, err=str(e))
        return None, Response({"error": "invalid_booking_record", "detail": str(e)}, status=400)
    except ReceiptRenderError as e:
        _dbg("ADMIN:PDF_RENDER_FAILED", submission_id=sub.id, err=str(e))
        return None, Response({"error": "pdf_render_failed", "detail": repr(e)}, status=500)


@transaction.atomic
def issue_receipt(sub: Submission, pdf_bytes: bytes, *, request=None):
    """Store the rendered receipt and mark the submission approved. -> (StoredFile, public url)"""
    f = storage.upload(storage.default_bucket(), receipt_filename(sub.id), pdf_bytes, "application/pdf")
    url = storage.view_url(f.id, request)
    sub.status = Submission.STATUS_APPROVED
    sub.pdf_url = storage.compose_file_ref(f.id, url)
    sub.save(update_fields=["status", "pdf_url", "updated_at"])
    return f, url


class AdminSubmissionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Review queue.
      GET  submissions/?status=pending|approved|rejected|all
      POST submissions/{id}/approve/   render + store receipt
      POST submissions/{id}/reject/    {"message": "..."}
      GET  submissions/{id}/preview/   render only
    """
    queryset = Submission.objects.all().select_related("user")
    serializer_class = SubmissionSerializer
    permission_classes = [IsAdminUser]
    pagination_class = None

    def get_queryset(self):
        qs = super().get_queryset()
        status = (self.request.query_params.get("status") or "").strip()
        if status and status != "all":
            qs = qs.filter(status=status)
        return qs.order_by("-created_at")

    def list(self, request, *args, **kwargs):
        data = self.get_serializer(self.get_queryset(), many=True).data
        return Response({"submissions": data})

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        sub = self.get_object()
        if sub.is_approved:
            return Response({"error": "Submission already approved"}, status=400)

        pdf_bytes, err = _render_receipt(sub)
        if err:
            return err

        f, url = issue_receipt(sub, pdf_bytes, request=request)

        _dbg("ADMIN:APPROVED", submission_id=sub.id, file_id=f.id, by=request.user.id)
        return Response({
            "message": "Submission approved successfully",
            "submissionId": sub.id,
            "status": sub.status,
            "pdfUrl": url,
            "downloadUrl": reverse("submission_download", kwargs={"submission_id": sub.id}),
        })

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        sub = self.get_object()
        if sub.status == Submission.STATUS_REJECTED:
            return Response({"error": "Submission already rejected"}, status=400)

        sub.status = Submission.STATUS_REJECTED
        sub.admin_message = str(request.data.get("message") or "").strip() or DEFAULT_REJECT_MESSAGE
        sub.save(update_fields=["status", "admin_message", "updated_at"])

        _dbg("ADMIN:REJECTED", submission_id=sub.id, by=request.user.id)
        return Response({
            "message": "Submission rejected",
            "submissionId": sub.id,
            "status": sub.status,
        })

    @action(detail=True, methods=["get"], renderer_classes=PDF_RENDERERS)
    def preview(self, request, pk=None):
        """Receipt as it would be issued today; nothing is stored."""
        sub = self.get_object()
        pdf_bytes, err = _render_receipt(sub)
        if err:
            return err
        return pdf_response(pdf_bytes, receipt_filename(sub.id), inline=True)


# --- Router Registration Helper ---

router = DefaultRouter()
router.register(r"submissions", AdminSubmissionViewSet, basename="admin-submission")
