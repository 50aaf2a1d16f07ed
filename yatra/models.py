#models.py
import secrets

from django.db import models
from django.contrib.auth.models import User


def new_object_id() -> str:
    """20-char random id, the shape the mobile/web clients already store."""
    return secrets.token_hex(10)


class Submission(models.Model):
    """
    One booking form as filled in by a customer.
    ``data`` is the raw booking record (camelCase keys) fed to the receipt renderer.
    """
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    id = models.CharField(primary_key=True, max_length=20, default=new_object_id, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="submissions")
    data = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    # "{fileId}|{url}" once approved
    pdf_url = models.CharField(max_length=500, blank=True, default="")
    admin_message = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        name = (self.data or {}).get("clientName") or "?"
        return f"{self.id} - {name} ({self.status})"

    @property
    def is_approved(self) -> bool:
        return self.status == self.STATUS_APPROVED


class StoredFile(models.Model):
    """Blob in a named bucket (generated receipts). Served back by id."""
    id = models.CharField(primary_key=True, max_length=20, default=new_object_id, editable=False)
    bucket = models.CharField(max_length=64, db_index=True)
    filename = models.CharField(max_length=255)
    content_type = models.CharField(max_length=100, default="application/octet-stream")
    size = models.PositiveIntegerField(default=0)
    content = models.BinaryField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.bucket}/{self.filename} ({self.size} bytes)"
