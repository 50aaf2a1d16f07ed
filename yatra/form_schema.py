# form_schema.py
"""
Booking form definition served to the clients (they render the form from it)
and used to validate submissions.
"""
from typing import Any, List, Mapping, Optional

FORM_SCHEMA = {
    "fields": [
        # client
        {"name": "clientName", "label": "Client Name", "type": "text", "required": True,
         "placeholder": "Mr. Rajesh Menon"},
        {"name": "email", "label": "Email Address", "type": "email", "required": True,
         "placeholder": "rajesh.menon@gmail.com"},
        {"name": "contactNo", "label": "Contact Number", "type": "text", "required": True,
         "placeholder": "+91 98850 12345"},

        # booking
        {"name": "destination", "label": "Destination", "type": "text", "required": True,
         "placeholder": "Lakshadweep"},
        {"name": "propertyName", "label": "Property / Hotel", "type": "text", "required": False,
         "placeholder": "Bangaram Island Resort"},
        {"name": "duration", "label": "Duration (Nights)", "type": "number", "required": True,
         "placeholder": "3", "min": 1, "max": 365},
        {"name": "checkInDate", "label": "Check-in Date", "type": "date", "required": True},
        {"name": "checkOutDate", "label": "Check-out Date", "type": "date", "required": True},
        {"name": "numberOfAdults", "label": "Number of Adults", "type": "number", "required": True,
         "placeholder": "8", "min": 1, "max": 50},
        {"name": "packageType", "label": "Package Type", "type": "select", "required": True,
         "options": [
             {"value": "deluxe", "label": "Deluxe"},
             {"value": "standard", "label": "Standard"},
             {"value": "premium", "label": "Premium"},
             {"value": "luxury", "label": "Luxury"},
         ]},
        {"name": "mealPlan", "label": "Meal Plan", "type": "select", "required": True,
         "options": [
             {"value": "MAP", "label": "MAP (Breakfast & Dinner)"},
             {"value": "CP", "label": "CP (Breakfast Only)"},
             {"value": "AP", "label": "AP (All Meals)"},
             {"value": "EP", "label": "EP (No Meals)"},
         ]},

        # cost
        {"name": "costPerAdult", "label": "Tour Package Cost per Adult (INR)", "type": "number",
         "required": True, "placeholder": "27000", "min": 0},
        {"name": "additionalServices", "label": "Additional Services (if any)", "type": "textarea",
         "required": False, "placeholder": "Airport transfers, sightseeing, etc."},
        {"name": "discountType", "label": "Discount Type", "type": "select", "required": False,
         "options": [
             {"value": "none", "label": "No Discount"},
             {"value": "percentage", "label": "Percentage (%)"},
             {"value": "fixed", "label": "Fixed Amount (INR)"},
         ]},
        {"name": "discountValue", "label": "Discount Value", "type": "number", "required": False,
         "placeholder": "10", "min": 0},
        {"name": "discountReason", "label": "Discount Reason", "type": "text", "required": False,
         "placeholder": "Early bird offer"},
        {"name": "advanceAmount", "label": "Advance Amount (INR)", "type": "number", "required": True,
         "placeholder": "80000", "min": 0},
        {"name": "paymentMode", "label": "Mode of Payment", "type": "select", "required": True,
         "options": [
             {"value": "UPI", "label": "UPI"},
             {"value": "Bank Transfer", "label": "Bank Transfer"},
             {"value": "Credit Card", "label": "Credit Card"},
             {"value": "Debit Card", "label": "Debit Card"},
             {"value": "Cash", "label": "Cash"},
         ]},
        {"name": "termsAndNotes", "label": "Terms & Notes (leave blank for the standard terms)",
         "type": "textarea", "required": False},
        {"name": "terms", "label": "I agree to the terms and conditions", "type": "checkbox",
         "required": True},
    ]
}


def required_fields() -> List[str]:
    return [f["name"] for f in FORM_SCHEMA["fields"] if f.get("required")]


def _is_missing(value: Any) -> bool:
    # falsy counts as missing, except an explicit False (unticked checkbox is still "answered")
    return not value and value is not False


def first_missing_field(data: Mapping[str, Any]) -> Optional[str]:
    for name in required_fields():
        if _is_missing(data.get(name)):
            return name
    return None
