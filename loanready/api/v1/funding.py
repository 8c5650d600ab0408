"""Funding utility endpoints, gated on profile completion"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from loanready.api.v1.schemas import (
    FundingSubmitResponse,
    FundingUtilityCreateRequest,
    FundingUtilityListResponse,
    FundingUtilityResponse,
    FundingUtilityUpdateRequest,
)
from loanready.api.dependencies import get_completion_service, get_request_id, parse_uuid
from loanready.infrastructure.database.session import get_db
from loanready.infrastructure.database.models import FundingUtility
from loanready.infrastructure.database.repositories import BusinessRepository, FundingUtilityRepository
from loanready.infrastructure.observability.metrics import record_funding_gate
from loanready.services.profile_completion import ProfileCompletionService
from loanready.domain.guidance import FUNDABLE_THRESHOLD
from loanready.domain.exceptions import (
    BusinessNotFoundError,
    FundingUtilityNotFoundError,
    NoDraftUtilitiesError,
    ProfileNotFundableError,
)

router = APIRouter()


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def utility_response(utility: FundingUtility) -> FundingUtilityResponse:
    return FundingUtilityResponse(
        id=str(utility.id),
        business_id=str(utility.business_id),
        type=utility.type,
        requested_amount=_as_float(utility.requested_amount),
        tenure_months=utility.tenure_months,
        purpose=utility.purpose,
        security_type=utility.security_type,
        security_available=utility.security_available,
        existing_emis=_as_float(utility.existing_emis),
        frequency=utility.frequency,
        asset_type=utility.asset_type,
        asset_cost=_as_float(utility.asset_cost),
        schemes_interested=utility.schemes_interested,
        status=utility.status,
        notes=utility.notes,
        created_at=utility.created_at,
    )


@router.post("/funding-utilities", response_model=FundingUtilityResponse, status_code=201)
def create_funding_utility(
    request_body: FundingUtilityCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """
    Create a funding utility request in DRAFT status.

    The fundability gate is evaluated from a fresh recompute of current
    state, never from the cached percent.
    """
    request_id = get_request_id(request)
    business_uuid = parse_uuid(request_body.business_id, "business")

    try:
        completion = completion_service.recalculate(business_uuid, "funding_gate", request_id)
        record_funding_gate(completion.is_fundable)
        if not completion.is_fundable:
            raise ProfileNotFundableError(completion.percent, FUNDABLE_THRESHOLD)

        fields = request_body.model_dump(exclude={"business_id", "type"})
        utility = FundingUtilityRepository(db).create_utility(business_uuid, request_body.type, fields)
        db.commit()

    except BusinessNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Business not found") from e

    except ProfileNotFundableError as e:
        db.rollback()
        logging.warning(f"Funding gate blocked: {e}", extra={"request_id": request_id})
        return JSONResponse(
            status_code=400,
            content={
                "detail": str(e),
                "current_completion": e.percent,
                "required_completion": e.required,
            },
        )

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error creating funding utility: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return utility_response(utility)


@router.get("/businesses/{business_id}/funding-utilities", response_model=FundingUtilityListResponse)
def get_funding_utilities(business_id: str, db: Session = Depends(get_db)):
    """List a business's funding requests with the total amount requested"""
    business_uuid = parse_uuid(business_id, "business")
    if BusinessRepository(db).get_business(business_uuid) is None:
        raise HTTPException(status_code=404, detail="Business not found")

    utility_repo = FundingUtilityRepository(db)
    utilities = utility_repo.get_utilities_for_business(business_uuid)

    return FundingUtilityListResponse(
        business_id=str(business_uuid),
        utilities=[utility_response(u) for u in utilities],
        total_requested_amount=utility_repo.get_total_requested_amount(business_uuid),
    )


@router.patch("/funding-utilities/{utility_id}", response_model=FundingUtilityResponse)
def update_funding_utility(
    utility_id: str,
    request_body: FundingUtilityUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Partially update a funding request; status is left to submit"""
    request_id = get_request_id(request)
    utility_uuid = parse_uuid(utility_id, "funding utility")
    utility_repo = FundingUtilityRepository(db)

    try:
        utility = utility_repo.get_utility(utility_uuid)
        if utility is None:
            raise FundingUtilityNotFoundError(utility_uuid)

        fields = request_body.model_dump(exclude_unset=True)
        if "type" in fields:
            fields["type"] = fields["type"].value

        utility_repo.update_utility(utility, fields)
        db.commit()

    except FundingUtilityNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Funding utility not found") from e

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error updating funding utility: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return utility_response(utility)


@router.delete("/funding-utilities/{utility_id}")
def delete_funding_utility(utility_id: str, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    utility_uuid = parse_uuid(utility_id, "funding utility")
    utility_repo = FundingUtilityRepository(db)

    try:
        utility = utility_repo.get_utility(utility_uuid)
        if utility is None:
            raise FundingUtilityNotFoundError(utility_uuid)

        utility_repo.delete_utility(utility)
        db.commit()

    except FundingUtilityNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Funding utility not found") from e

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error deleting funding utility: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"id": str(utility_uuid), "deleted": True}


@router.post("/businesses/{business_id}/funding-utilities/submit", response_model=FundingSubmitResponse)
def submit_funding_utilities(business_id: str, request: Request, db: Session = Depends(get_db)):
    """
    Submit every DRAFT funding request of a business.

    Moves DRAFT utilities to SUBMITTED; utilities already past DRAFT are
    left untouched. 400 when there is nothing to submit.
    """
    request_id = get_request_id(request)
    business_uuid = parse_uuid(business_id, "business")
    utility_repo = FundingUtilityRepository(db)

    try:
        if BusinessRepository(db).get_business(business_uuid) is None:
            raise BusinessNotFoundError(business_uuid)

        submitted_count = utility_repo.submit_utilities(business_uuid)
        if submitted_count == 0:
            raise NoDraftUtilitiesError(business_uuid)
        db.commit()

    except BusinessNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Business not found") from e

    except NoDraftUtilitiesError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error submitting funding utilities: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        f"Submitted {submitted_count} funding utilities",
        extra={"request_id": request_id, "business_id": str(business_uuid)},
    )
    utilities = utility_repo.get_utilities_for_business(business_uuid)

    return FundingSubmitResponse(
        business_id=str(business_uuid),
        submitted_count=submitted_count,
        utilities=[utility_response(u) for u in utilities],
    )
