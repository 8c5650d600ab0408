"""Unit tests for fundability, status messages and next steps"""

import pytest
from loanready.domain.guidance import (
    FUNDABLE_THRESHOLD,
    NEXT_STEPS,
    PROFILE_COMPLETE_STEP,
    evaluate,
    is_fundable,
    next_steps,
    status_message,
)
from loanready.domain.models import DocumentGroupStatus, Section
from loanready.domain.scoring import compute_breakdown

COMPLETE = DocumentGroupStatus.COMPLETE


def test_status_message_literals():
    assert status_message(0) == "Just getting started"
    assert status_message(70) == "Ready to share with banks"
    assert status_message(100) == "Bank-ready profile"


@pytest.mark.parametrize(
    "score,message",
    [
        (20, "Just getting started"),
        (21, "Halfway there"),
        (50, "Halfway there"),
        (51, "Almost ready"),
        (69, "Almost ready"),
        (89, "Ready to share with banks"),
        (90, "Bank-ready profile"),
    ],
)
def test_status_message_band_edges(score, message):
    assert status_message(score) == message


def test_is_fundable_boundary():
    assert FUNDABLE_THRESHOLD == 70
    assert is_fundable(69) is False
    assert is_fundable(70) is True
    assert is_fundable(100) is True


def test_next_steps_for_business_info_only(complete_business, make_groups):
    """Only basic info complete: the other five steps, in section order"""
    steps = next_steps(compute_breakdown(complete_business, make_groups(), []))

    assert steps == [
        "Upload Balance Sheet & P&L statements",
        "Upload bank sanction letters",
        "Add business profile documents or description",
        "Complete director KYC documents",
        "Upload director ITR documents",
    ]


def test_next_steps_for_empty_profile(empty_business, make_groups):
    steps = next_steps(compute_breakdown(empty_business, make_groups(), []))

    assert steps == [NEXT_STEPS[section] for section in Section]


def test_partial_credit_still_produces_step(complete_business, make_groups):
    steps = next_steps(compute_breakdown(complete_business, make_groups(BS_PNL=DocumentGroupStatus.IN_PROGRESS), []))

    assert NEXT_STEPS[Section.FINANCIALS] in steps


def test_evaluate_complete_profile(complete_business, kyc_director, make_groups):
    groups = make_groups(
        BS_PNL=COMPLETE, SANCTION=COMPLETE, PROFILE=COMPLETE, KYC_DIRECTOR=COMPLETE, ITR_DIRECTOR=COMPLETE
    )

    completion = evaluate(complete_business, groups, [kyc_director])

    assert completion.percent == 100
    assert completion.is_fundable is True
    assert completion.status_message == "Bank-ready profile"
    assert completion.next_steps == [PROFILE_COMPLETE_STEP]


def test_evaluate_almost_ready_is_not_fundable(complete_business, kyc_director, make_groups):
    """10 + 20 + 20 + 10 + 0 (KYC group pending) + 0 = 60"""
    groups = make_groups(BS_PNL=COMPLETE, SANCTION=COMPLETE, PROFILE=COMPLETE)
    director = kyc_director
    director.aadhaar_number = None

    completion = evaluate(complete_business, groups, [director])

    assert completion.percent == 60
    assert completion.status_message == "Almost ready"
    assert completion.is_fundable is False
    assert completion.next_steps == [NEXT_STEPS[Section.KYC_DIRECTORS], NEXT_STEPS[Section.ITR_DIRECTORS]]
