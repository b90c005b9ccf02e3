"""Region constants for state-level eligibility."""

from __future__ import annotations

# Scheme-side sentinel: the state criterion is satisfied everywhere.
PAN_INDIA = "Pan-India"

INDIAN_STATES: list[str] = [
    PAN_INDIA,
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand", "Karnataka", "Kerala",
    "Madhya Pradesh", "Maharashtra", "Manipur", "Meghalaya", "Mizoram", "Nagaland",
    "Odisha", "Punjab", "Rajasthan", "Sikkim", "Tamil Nadu", "Telangana", "Tripura",
    "Uttar Pradesh", "Uttarakhand", "West Bengal",
]
