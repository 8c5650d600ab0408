"""Document metadata endpoints - uploads and deletions refresh group status and completion"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from loanready.api.v1.schemas import (
    DocumentCreateRequest,
    DocumentGroupResponse,
    DocumentListResponse,
    DocumentMutationResponse,
    DocumentResponse,
    GroupedDocuments,
)
from loanready.api.dependencies import get_completion_service, get_request_id, parse_uuid
from loanready.config import settings
from loanready.infrastructure.database.session import get_db
from loanready.infrastructure.database.models import Document, DocumentGroup
from loanready.infrastructure.database.repositories import (
    BusinessRepository,
    DocumentGroupRepository,
    DocumentRepository,
)
from loanready.services.profile_completion import ProfileCompletionService
from loanready.domain.models import DocumentGroupType
from loanready.domain.exceptions import BusinessNotFoundError, DocumentGroupNotFoundError, DocumentNotFoundError

router = APIRouter()


def document_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=str(document.id),
        document_group_id=str(document.document_group_id),
        file_name=document.file_name,
        file_url=document.file_url,
        mime_type=document.mime_type,
        file_size_bytes=document.file_size_bytes,
        uploaded_at=document.uploaded_at,
    )


def group_response(group: DocumentGroup) -> DocumentGroupResponse:
    return DocumentGroupResponse(id=str(group.id), type=group.type, status=group.status)


def validate_document_metadata(request_body: DocumentCreateRequest) -> None:
    """Reject file types and sizes the upload layer does not accept"""
    if request_body.mime_type not in settings.allowed_document_mime_types:
        raise HTTPException(status_code=422, detail=f"Unsupported file type: {request_body.mime_type}")
    if request_body.file_size_bytes > settings.max_document_size_bytes:
        raise HTTPException(
            status_code=422,
            detail=f"File exceeds maximum size of {settings.max_document_size_bytes} bytes",
        )


@router.post("/businesses/{business_id}/documents", response_model=DocumentMutationResponse, status_code=201)
def upload_document(
    business_id: str,
    request_body: DocumentCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """
    Register an uploaded document.

    Flow:
    1. Validate file metadata
    2. Save the document into the business's group of the requested type
    3. Refresh the group status from its document count
    4. Recompute and cache profile completion
    """
    request_id = get_request_id(request)
    business_uuid = parse_uuid(business_id, "business")
    validate_document_metadata(request_body)

    try:
        if BusinessRepository(db).get_business(business_uuid) is None:
            raise BusinessNotFoundError(business_uuid)

        group_repo = DocumentGroupRepository(db)
        group = group_repo.get_group_by_type(business_uuid, request_body.group_type)
        if group is None:
            raise DocumentGroupNotFoundError(business_uuid, request_body.group_type.value)

        document = DocumentRepository(db).create_document(
            group_id=group.id,
            file_name=request_body.file_name,
            file_url=request_body.file_url,
            mime_type=request_body.mime_type,
            file_size_bytes=request_body.file_size_bytes,
        )
        group_repo.refresh_status(group)
        db.commit()

    except BusinessNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Business not found") from e

    except DocumentGroupNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Document group not found") from e

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error saving document: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business_uuid, "document_uploaded", request_id)
    return DocumentMutationResponse(
        document=document_response(document),
        group=group_response(group),
        profile_completion_percent=percent,
    )


@router.get("/businesses/{business_id}/documents", response_model=DocumentListResponse)
def get_documents(
    business_id: str,
    group_type: Optional[DocumentGroupType] = Query(None, description="Only documents of this group type"),
    db: Session = Depends(get_db),
):
    """
    List documents of a business.

    Returns:
        All documents newest first, and every group with its own documents
    """
    business_uuid = parse_uuid(business_id, "business")
    if BusinessRepository(db).get_business(business_uuid) is None:
        raise HTTPException(status_code=404, detail="Business not found")

    documents = DocumentRepository(db).get_documents_for_business(business_uuid, group_type)
    groups = DocumentGroupRepository(db).get_document_groups_for_business(business_uuid)

    return DocumentListResponse(
        business_id=str(business_uuid),
        documents=[document_response(d) for d in documents],
        documents_by_group=[
            GroupedDocuments(
                group=group_response(g),
                documents=[document_response(d) for d in documents if d.document_group_id == g.id],
            )
            for g in groups
        ],
    )


@router.delete("/documents/{document_id}", response_model=DocumentMutationResponse)
def delete_document(
    document_id: str,
    request: Request,
    db: Session = Depends(get_db),
    completion_service: ProfileCompletionService = Depends(get_completion_service),
):
    """Delete a document, then refresh its group status and profile completion"""
    request_id = get_request_id(request)
    document_uuid = parse_uuid(document_id, "document")
    document_repo = DocumentRepository(db)

    try:
        document = document_repo.get_document(document_uuid)
        if document is None:
            raise DocumentNotFoundError(document_uuid)

        group = document.group
        business_uuid = group.business_id
        document_repo.delete_document(document)
        DocumentGroupRepository(db).refresh_status(group)
        db.commit()

    except DocumentNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail="Document not found") from e

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error deleting document: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    percent = completion_service.refresh_after_mutation(business_uuid, "document_deleted", request_id)
    return DocumentMutationResponse(group=group_response(group), profile_completion_percent=percent)
