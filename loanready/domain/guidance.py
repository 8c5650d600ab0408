"""Fundability gate, status messages and next-step guidance"""

from typing import Dict, List, Sequence
from loanready.domain.models import (
    Business,
    CompletionBreakdown,
    Director,
    DocumentGroup,
    ProfileCompletion,
    Section,
)
from loanready.domain.scoring import compute_breakdown, compute_score

# Minimum completion percent for creating funding utilities
FUNDABLE_THRESHOLD = 70

# (upper bound inclusive, message), checked in order
STATUS_MESSAGES = [
    (20, "Just getting started"),
    (50, "Halfway there"),
    (69, "Almost ready"),
    (89, "Ready to share with banks"),
]
BANK_READY_MESSAGE = "Bank-ready profile"

NEXT_STEPS: Dict[Section, str] = {
    Section.BUSINESS_INFO: "Complete basic business information",
    Section.FINANCIALS: "Upload Balance Sheet & P&L statements",
    Section.SANCTIONS: "Upload bank sanction letters",
    Section.BUSINESS_PROFILE: "Add business profile documents or description",
    Section.KYC_DIRECTORS: "Complete director KYC documents",
    Section.ITR_DIRECTORS: "Upload director ITR documents",
}
PROFILE_COMPLETE_STEP = "Profile complete! You can now access funding options"


def status_message(score: int) -> str:
    """
    Map completion percent to a status message.

    Bands (inclusive):
    - 0-20:   Just getting started
    - 21-50:  Halfway there
    - 51-69:  Almost ready
    - 70-89:  Ready to share with banks
    - 90-100: Bank-ready profile
    """
    for upper_bound, message in STATUS_MESSAGES:
        if score <= upper_bound:
            return message
    return BANK_READY_MESSAGE


def is_fundable(score: int) -> bool:
    return score >= FUNDABLE_THRESHOLD


def next_steps(breakdown: CompletionBreakdown) -> List[str]:
    """Remediation for every incomplete section, in section order"""
    steps = [NEXT_STEPS[section] for section, score in breakdown.items() if not score.completed]
    return steps or [PROFILE_COMPLETE_STEP]


def evaluate(
    business: Business,
    document_groups: Sequence[DocumentGroup],
    directors: Sequence[Director],
) -> ProfileCompletion:
    """
    Main entry point: score the profile and derive all guidance from one breakdown.
    """
    breakdown = compute_breakdown(business, document_groups, directors)
    percent = compute_score(breakdown)

    return ProfileCompletion(
        percent=percent,
        breakdown=breakdown,
        status_message=status_message(percent),
        is_fundable=is_fundable(percent),
        next_steps=next_steps(breakdown),
    )
