"""Document checklist helpers.

Advisory only: documents never influence the score.
"""

from __future__ import annotations

from yogyatha.eligibility.regions import INDIAN_STATES, PAN_INDIA
from yogyatha.models.enums import Language
from yogyatha.schemas.eligibility import Profile, Scheme

COMMON_DOCUMENTS: list[str] = [
    "Aadhaar Card",
    "PAN Card",
    "Passport size photo",
    "Income Certificate",
    "Proof of Residence",
    "Bank Account Details",
    "Bank Passbook",
    "Mobile Number",
    "Ration Card",
    "Caste Certificate",
]

# Additional documents asked for by state schemes in the catalog
STATE_DOCUMENTS: dict[str, list[str]] = {
    "Telangana": ["Bonafide Certificate"],
    "Uttar Pradesh": ["Domicile Certificate of UP", "Project Report", "Educational Qualification Certificate"],
    "West Bengal": ["Birth certificate of girl child", "Unmarried Status Declaration", "Proof of School Enrollment"],
    "Maharashtra": ["Maharashtra Domicile Certificate", "Detailed Project Report (DPR)"],
    "Karnataka": ["Land records (RTC)"],
    "Rajasthan": ["Bhamashah Card"],
    "Kerala": ["Medical Certificates from a Government Doctor"],
    "Gujarat": ["MA Card"],
    "Bihar": ["Birth certificate of girl child", "Educational Qualification Certificate"],
}

OTHER_DOCUMENTS: list[str] = [
    "Land documents",
    "Bonafide Certificate",
    "Startup Recognition Certificate",
    "Business Plan",
    "Parent's identity proof",
    "Domicile Certificate",
    "Medical Certificates",
    "Company Incorporation documents",
]

ALL_DOCUMENT_TYPES: list[str] = sorted(
    set(COMMON_DOCUMENTS)
    | set(OTHER_DOCUMENTS)
    | {doc for docs in STATE_DOCUMENTS.values() for doc in docs}
)


def documents_for_state(state: str | None) -> list[str]:
    """Documents a resident of `state` may be asked for.

    Nationwide, empty, unrecognised or unmapped states get every known
    document type.
    """
    if not state or state == PAN_INDIA or state not in INDIAN_STATES or state not in STATE_DOCUMENTS:
        return list(ALL_DOCUMENT_TYPES)
    return sorted(set(COMMON_DOCUMENTS) | set(STATE_DOCUMENTS[state]))


def missing_documents(scheme: Scheme, profile: Profile, language: Language = Language.EN) -> list[str]:
    """Scheme documents (in `language`, English fallback) the profile does not own."""
    required = scheme.documents.get(language) or scheme.documents.get(Language.EN) or []
    owned = set(profile.documents_owned)
    return [doc for doc in required if doc not in owned]
