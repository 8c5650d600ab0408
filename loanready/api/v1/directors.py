"""Director endpoints - every change recomputes profile completion"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from loanready.api.v1.schemas import (
    DirectorCreateRequest,
    DirectorListResponse,
    DirectorMutationResponse,
    DirectorResponse,
    DirectorUpdateRequest,
)
from loanready.api.dependencies import get_completion_service, get_request_id, parse_uuid
from loanready.infrastructure.database.session import get_db
from loanready.infrastructure.database.models import Director
from loanready.infrastructure.database.repositories import BusinessRepository, DirectorRepository, to_domain_director
from loanready.services.profile_completion import ProfileCompletionService
from loanready.domain.kyc import director_has_complete_kyc, kyc_field_completion_percentage
from loanready.domain.exceptions import BusinessNotFoundError, DirectorNotFoundError, DuplicateDirectorError

router = APIRouter()


def director_response(director: Director) -> DirectorResponse:
    return DirectorResponse(
        id=str(director.id),
        business_id=str(director.business_id),
        name=director.name,
        dob=director.dob,
        pan=director.pan,
        aadhaar_number=director.aadhaar_number,
        email=director.email,
        phone=director.phone,
        address=director.address,
        has_complete_kyc=director_has_complete_kyc(to_domain_director(director)),
    )


@router.post("/businesses/{business_id}/directors", response_model=DirectorMutationResponse, status_code=201)
def add_director(
    business_id: str,
    request_body: DirectorCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """Register a director; PAN must be unique within the business"""
    request_id = get_request_id(request)
    business_uuid = parse_uuid(business_id, "business")
    director_repo = DirectorRepository(db)

    try:
        if BusinessRepository(db).get_business(business_uuid) is None:
            raise BusinessNotFoundError(business_uuid)

        if request_body.pan and director_repo.pan_exists(business_uuid, request_body.pan):
            raise DuplicateDirectorError("Director with this PAN already exists")

        director = director_repo.create_director(business_uuid, request_body.model_dump())
        db.commit()

    except BusinessNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Business not found") from e

    except DuplicateDirectorError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error adding director: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business_uuid, "director_added", request_id)
    return DirectorMutationResponse(director=director_response(director), profile_completion_percent=percent)


@router.get("/businesses/{business_id}/directors", response_model=DirectorListResponse)
def get_directors(business_id: str, db: Session = Depends(get_db)):
    """
    List directors with per-director KYC state.

    Returns:
        Directors plus the share of filled KYC fields across all of them
    """
    business_uuid = parse_uuid(business_id, "business")
    if BusinessRepository(db).get_business(business_uuid) is None:
        raise HTTPException(status_code=404, detail="Business not found")

    directors = DirectorRepository(db).get_directors_for_business(business_uuid)

    return DirectorListResponse(
        business_id=str(business_uuid),
        directors=[director_response(d) for d in directors],
        kyc_completion=kyc_field_completion_percentage([to_domain_director(d) for d in directors]),
    )


@router.patch("/directors/{director_id}", response_model=DirectorMutationResponse)
def update_director(
    director_id: str,
    request_body: DirectorUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    request_id = get_request_id(request)
    director_uuid = parse_uuid(director_id, "director")
    director_repo = DirectorRepository(db)

    try:
        director = director_repo.get_director(director_uuid)
        if director is None:
            raise DirectorNotFoundError(director_uuid)

        fields = request_body.model_dump(exclude_unset=True)
        pan = fields.get("pan")
        if pan and director_repo.pan_exists(director.business_id, pan, exclude_director_id=director.id):
            raise DuplicateDirectorError("Director with this PAN already exists")

        director_repo.update_director(director, fields)
        business_uuid = director.business_id
        db.commit()

    except DirectorNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Director not found") from e

    except DuplicateDirectorError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error updating director: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business_uuid, "director_updated", request_id)
    return DirectorMutationResponse(director=director_response(director), profile_completion_percent=percent)


@router.delete("/directors/{director_id}", response_model=DirectorMutationResponse)
def delete_director(
    director_id: str,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    request_id = get_request_id(request)
    director_uuid = parse_uuid(director_id, "director")
    director_repo = DirectorRepository(db)

    try:
        director = director_repo.get_director(director_uuid)
        if director is None:
            raise DirectorNotFoundError(director_uuid)

        business_uuid = director.business_id
        director_repo.delete_director(director)
        db.commit()

    except DirectorNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Director not found") from e

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error deleting director: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business_uuid, "director_deleted", request_id)
    return DirectorMutationResponse(director=None, profile_completion_percent=percent)
