"""Director KYC evaluation"""

from typing import Sequence
from loanready.domain.models import Director

# Fields counted by the KYC field-completion metric
KYC_FIELDS = ("name", "dob", "pan", "aadhaar_number")


def is_present(value) -> bool:
    """A field is present when it is neither None nor an empty string"""
    return value is not None and value != ""


def director_contributes_kyc(director: Director) -> bool:
    return is_present(director.pan) and is_present(director.aadhaar_number)


def all_directors_complete(directors: Sequence[Director]) -> bool:
    """
    True when there is at least one director and every director has
    both PAN and Aadhaar number. A business without directors never
    satisfies KYC.
    """
    if not directors:
        return False
    return all(director_contributes_kyc(d) for d in directors)


def director_has_complete_kyc(director: Director) -> bool:
    """Per-director KYC check shown in director listings (PAN, Aadhaar and DOB)"""
    return director_contributes_kyc(director) and is_present(director.dob)


def kyc_field_completion_percentage(directors: Sequence[Director]) -> int:
    """
    Share of filled KYC fields across all directors, 0-100.

    Each director has 4 required fields (name, dob, pan, aadhaar_number).
    Returns 0 when there are no directors.
    """
    if not directors:
        return 0

    total_fields = len(directors) * len(KYC_FIELDS)
    filled_fields = sum(
        1 for d in directors for name in KYC_FIELDS if is_present(getattr(d, name))
    )

    # Half-up rounding: 12.5 -> 13
    return (filled_fields * 200 + total_fields) // (total_fields * 2)
