# admin.py
from django.contrib import admin, messages
from django.db import models as dj_models
from django.forms import Textarea
from django.shortcuts import get_object_or_404, redirect
from django.urls import path, reverse
from django.utils import timezone
from django.utils.html import format_html

from .admin_api import DEFAULT_REJECT_MESSAGE, issue_receipt
from .models import Submission, StoredFile
from .pdf import BookingRecordError, ReceiptRenderError, generate_booking_pdf, receipt_filename
from .views import pdf_response


admin.site.site_header = "Yatrasutra Admin Panel"
admin.site.site_title = "Yatrasutra Admin"
admin.site.index_title = "Booking receipts"


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("id", "client_name", "destination", "user", "status", "receipt_link", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "user__username", "user__email")
    readonly_fields = ("id", "pdf_url", "created_at", "updated_at", "receipt_link")
    actions = ["approve_and_issue", "mark_rejected"]

    formfield_overrides = {
        dj_models.JSONField: {"widget": Textarea(attrs={"rows": 12, "cols": 100})},
    }

    fieldsets = (
        ("Core", {"fields": ("id", "user", "status", "admin_message")}),
        ("Booking record", {"fields": ("data",)}),
        ("Receipt", {"fields": ("pdf_url", "receipt_link")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )

    @admin.display(description="Client")
    def client_name(self, obj):
        return (obj.data or {}).get("clientName") or "—"

    @admin.display(description="Destination")
    def destination(self, obj):
        return (obj.data or {}).get("destination") or "—"

    @admin.display(description="Receipt")
    def receipt_link(self, obj):
        if not obj.pk:
            return "—"
        url = reverse("admin:yatra_submission_preview", args=[obj.pk])
        return format_html('<a href="{}" target="_blank">preview</a>', url)

    def get_urls(self):
        urls = super().get_urls()
        custom = [
            path("<str:object_id>/preview/", self.admin_site.admin_view(self.preview_view),
                 name="yatra_submission_preview"),
        ]
        return custom + urls

    def preview_view(self, request, object_id):
        sub = get_object_or_404(Submission, pk=object_id)
        try:
            pdf_bytes = generate_booking_pdf(sub.data, sub.id)
        except (BookingRecordError, ReceiptRenderError) as e:
            self.message_user(request, f"{sub.id}: {e}", level=messages.ERROR)
            return redirect("admin:yatra_submission_change", sub.pk)
        return pdf_response(pdf_bytes, receipt_filename(sub.id), inline=True)

    @admin.action(description="Approve and issue receipt")
    def approve_and_issue(self, request, queryset):
        done = 0
        for sub in queryset.exclude(status=Submission.STATUS_APPROVED):
            try:
                pdf_bytes = generate_booking_pdf(sub.data, sub.id)
            except (BookingRecordError, ReceiptRenderError) as e:
                self.message_user(request, f"{sub.id}: {e}", level=messages.ERROR)
                continue
            issue_receipt(sub, pdf_bytes, request=request)
            done += 1
        self.message_user(request, f"Issued {done} receipt(s).", level=messages.SUCCESS)

    @admin.action(description="Reject selected")
    def mark_rejected(self, request, queryset):
        updated = queryset.exclude(status=Submission.STATUS_REJECTED).update(
            status=Submission.STATUS_REJECTED,
            admin_message=DEFAULT_REJECT_MESSAGE,
            updated_at=timezone.now(),
        )
        self.message_user(request, f"Rejected {updated} submission(s).")


@admin.register(StoredFile)
class StoredFileAdmin(admin.ModelAdmin):
    list_display = ("id", "bucket", "filename", "content_type", "size", "created_at")
    list_filter = ("bucket", "content_type")
    search_fields = ("id", "filename")
    exclude = ("content",)
    readonly_fields = ("id", "bucket", "filename", "content_type", "size", "created_at")
