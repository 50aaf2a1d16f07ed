import os
import sys
from datetime import date

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
django.setup()

from yatra.pdf import generate_booking_pdf, receipt_filename
from yatra.pdf_assets import directory_asset_provider, static_asset_provider

SAMPLE = {
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
}


def render(out_dir="."):
    """Usage: python render_sample_receipt.py [out_dir] [asset_dir]"""
    provider = directory_asset_provider(sys.argv[2]) if len(sys.argv) > 2 else static_asset_provider
    pdf = generate_booking_pdf(SAMPLE, "SAMPLE", now=date.today(), asset_provider=provider)
    path = os.path.join(out_dir, receipt_filename("SAMPLE"))
    with open(path, "wb") as fh:
        fh.write(pdf)
    print(f"wrote {path} ({len(pdf)} bytes)")


if __name__ == "__main__":
    render(sys.argv[1] if len(sys.argv) > 1 else ".")
