import io
from datetime import date

import pytest
from PIL import Image
from pypdf import PdfReader
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from yatra.auth_jwt import issue_token

FIXED_NOW = date(2026, 4, 1)


def sample_record(**overrides):
    """The booking the sales team uses as the worked example (27000 x 8, 10% off, 80000 advance)."""
    record = {
        "clientName": "Mr. Rajesh Menon",
        "email": "rajesh.menon@gmail.com",
        "contactNo": "+91 98850 12345",
        "destination": "Lakshadweep",
        "duration": "3",
        "checkInDate": "2026-05-15",
        "checkOutDate": "2026-05-18",
        "numberOfAdults": "8",
        "packageType": "deluxe",
        "mealPlan": "MAP",
        "costPerAdult": "27000",
        "discountType": "percentage",
        "discountValue": "10",
        "advanceAmount": "80000",
        "paymentMode": "UPI",
        "terms": True,
    }
    record.update(overrides)
    return record


def pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def pdf_pages(data: bytes) -> int:
    return len(PdfReader(io.BytesIO(data)).pages)


@pytest.fixture
def booking_record():
    return sample_record()


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (80, 40), (30, 58, 138)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def user(db):
    return User.objects.create_user(username="rajesh.menon@gmail.com", email="rajesh.menon@gmail.com",
                                    password="secret-pass", first_name="Rajesh", last_name="Menon")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="anita@example.com", email="anita@example.com",
                                    password="secret-pass")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username="admin", email="admin@yatrasutra.com",
                                    password="admin-pass", is_staff=True)


def client_for(u=None) -> APIClient:
    c = APIClient()
    if u is not None:
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(u)}")
    return c


@pytest.fixture
def api_client(user):
    return client_for(user)


@pytest.fixture
def admin_client(staff_user):
    return client_for(staff_user)
