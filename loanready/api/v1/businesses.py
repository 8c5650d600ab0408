"""Business profile endpoints and the completion summary"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from loanready.api.v1.schemas import (
    BusinessCreateRequest,
    BusinessResponse,
    BusinessUpdateRequest,
    CompletionResponse,
    GroupStatusSummarySchema,
    SectionScoreSchema,
)
from loanready.api.dependencies import get_completion_service, get_request_id, parse_uuid
from loanready.infrastructure.database.session import get_db
from loanready.infrastructure.database.models import Business
from loanready.infrastructure.database.repositories import BusinessRepository, DocumentGroupRepository, to_domain_group
from loanready.services.profile_completion import ProfileCompletionService
from loanready.domain.document_groups import summarize_statuses
from loanready.domain.exceptions import BusinessAlreadyExistsError, BusinessNotFoundError

router = APIRouter()


def business_response(business: Business, percent: Optional[int]) -> BusinessResponse:
    return BusinessResponse(
        id=str(business.id),
        owner_id=business.owner_id,
        legal_name=business.legal_name,
        business_name=business.business_name,
        entity_type=business.entity_type,
        pan=business.pan,
        gstin=business.gstin,
        udyam=business.udyam,
        sector=business.sector,
        city=business.city,
        state=business.state,
        brief_description=business.brief_description,
        profile_completion_percent=percent,
        created_at=business.created_at,
        updated_at=business.updated_at,
    )


@router.post("/businesses", response_model=BusinessResponse, status_code=201)
def create_business(
    request_body: BusinessCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """
    Create a business profile.

    Flow:
    1. Reject owners that already have a business (409)
    2. Persist the business and its five document groups in one transaction
    3. Compute and cache the initial completion percent
    """
    request_id = get_request_id(request)
    business_repo = BusinessRepository(db)

    try:
        if business_repo.get_business_by_owner(request_body.owner_id) is not None:
            raise BusinessAlreadyExistsError(request_body.owner_id)

        fields = request_body.model_dump(exclude={"owner_id"})
        fields["entity_type"] = request_body.entity_type.value
        business = business_repo.create_business(request_body.owner_id, fields)
        db.commit()

    except BusinessAlreadyExistsError as e:
        db.rollback()
        logging.warning(f"Duplicate business: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except IntegrityError as e:
        # Concurrent create for the same owner
        db.rollback()
        logging.warning(f"Business insert conflict: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Business profile already exists for this owner")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error creating business: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business.id, "business_created", request_id)
    return business_response(business, percent)


@router.get("/businesses", response_model=BusinessResponse)
def get_business_by_owner(
    owner_id: str = Query(..., min_length=1, description="Owning user identifier"),
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """Look up the business owned by a user"""
    business = BusinessRepository(db).get_business_by_owner(owner_id)
    if business is None:
        raise HTTPException(status_code=404, detail="Business not found")

    return business_response(business, completion_service.calculate(business.id))


@router.get("/businesses/{business_id}", response_model=BusinessResponse)
def get_business(
    business_id: str,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """
    Retrieve a business profile.

    The completion percent is recomputed from current state rather than
    read from the cached column.
    """
    business_uuid = parse_uuid(business_id, "business")
    business = BusinessRepository(db).get_business(business_uuid)
    if business is None:
        raise HTTPException(status_code=404, detail="Business not found")

    return business_response(business, completion_service.calculate(business_uuid))


@router.patch("/businesses/{business_id}", response_model=BusinessResponse)
def update_business(
    business_id: str,
    request_body: BusinessUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """Update business fields and recompute completion"""
    request_id = get_request_id(request)
    business_uuid = parse_uuid(business_id, "business")
    business_repo = BusinessRepository(db)

    try:
        business = business_repo.get_business(business_uuid)
        if business is None:
            raise BusinessNotFoundError(business_uuid)

        fields = request_body.model_dump(exclude_unset=True)
        if request_body.entity_type is not None:
            fields["entity_type"] = request_body.entity_type.value
        business_repo.update_business(business, fields)
        db.commit()

    except BusinessNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Business not found") from e

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error updating business: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business_uuid, "business_updated", request_id)
    return business_response(business, percent)


@router.get("/businesses/{business_id}/completion", response_model=CompletionResponse)
def get_profile_completion(
    business_id: str,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """
    Completion percent with breakdown, status message, fundability and next steps.

    Recomputes from current state and refreshes the cached percent.
    """
    business_uuid = parse_uuid(business_id, "business")

    try:
        completion = completion_service.read_completion(business_uuid)
        groups = DocumentGroupRepository(db).get_document_groups_for_business(business_uuid)
        db.commit()

    except BusinessNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Business not found") from e

    summary = summarize_statuses([to_domain_group(g) for g in groups])

    return CompletionResponse(
        business_id=str(business_uuid),
        percent=completion.percent,
        breakdown={
            section: SectionScoreSchema(**score)
            for section, score in completion.breakdown.to_dict().items()
        },
        status_message=completion.status_message,
        is_fundable=completion.is_fundable,
        next_steps=completion.next_steps,
        document_groups=GroupStatusSummarySchema(
            total=summary.total,
            not_started=summary.not_started,
            in_progress=summary.in_progress,
            complete=summary.complete,
        ),
    )
