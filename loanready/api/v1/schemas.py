"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from loanready.domain.models import (
    DocumentGroupStatus,
    DocumentGroupType,
    EntityType,
    FundingUtilityStatus,
    FundingUtilityType,
)


# Businesses


class BusinessCreateRequest(BaseModel):
    """Request body for POST /v1/businesses"""

    owner_id: str = Field(..., min_length=1, description="Owning user identifier")
    legal_name: str = Field(..., min_length=1)
    business_name: Optional[str] = None
    entity_type: EntityType
    pan: Optional[str] = Field(None, max_length=10)
    gstin: Optional[str] = Field(None, max_length=15)
    udyam: Optional[str] = None
    sector: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    brief_description: Optional[str] = None


class BusinessUpdateRequest(BaseModel):
    """Request body for PATCH /v1/businesses/{business_id}; omitted fields are left unchanged"""

    legal_name: Optional[str] = Field(None, min_length=1)
    business_name: Optional[str] = None
    entity_type: Optional[EntityType] = None
    pan: Optional[str] = Field(None, max_length=10)
    gstin: Optional[str] = Field(None, max_length=15)
    udyam: Optional[str] = None
    sector: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    state: Optional[str] = Field(None, min_length=1)
    brief_description: Optional[str] = None

    @field_validator("legal_name", "entity_type", "sector", "city", "state")
    @classmethod
    def required_fields_not_null(cls, value):
        if value is None:
            raise ValueError("field is required and cannot be null")
        return value


class BusinessResponse(BaseModel):
    id: str
    owner_id: str
    legal_name: str
    business_name: Optional[str] = None
    entity_type: str
    pan: Optional[str] = None
    gstin: Optional[str] = None
    udyam: Optional[str] = None
    sector: str
    city: str
    state: str
    brief_description: Optional[str] = None
    profile_completion_percent: Optional[int] = Field(
        None, description="Null when the recalculation after this change failed"
    )
    created_at: datetime
    updated_at: datetime


class SectionScoreSchema(BaseModel):
    weight: int
    completed: bool
    percentage: int


class GroupStatusSummarySchema(BaseModel):
    total: int
    not_started: int
    in_progress: int
    complete: int


class CompletionResponse(BaseModel):
    """Response for GET /v1/businesses/{business_id}/completion"""

    business_id: str
    percent: int
    breakdown: Dict[str, SectionScoreSchema]
    status_message: str
    is_fundable: bool
    next_steps: List[str]
    document_groups: GroupStatusSummarySchema


# Directors


class DirectorCreateRequest(BaseModel):
    """Request body for POST /v1/businesses/{business_id}/directors"""

    name: str = Field(..., min_length=1)
    dob: Optional[date] = None
    pan: Optional[str] = Field(None, max_length=10)
    aadhaar_number: Optional[str] = Field(None, max_length=12)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class DirectorUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    dob: Optional[date] = None
    pan: Optional[str] = Field(None, max_length=10)
    aadhaar_number: Optional[str] = Field(None, max_length=12)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("name cannot be null")
        return value


class DirectorResponse(BaseModel):
    id: str
    business_id: str
    name: str
    dob: Optional[date] = None
    pan: Optional[str] = None
    aadhaar_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    has_complete_kyc: bool = False


class DirectorMutationResponse(BaseModel):
    director: Optional[DirectorResponse] = None
    profile_completion_percent: Optional[int] = None


class DirectorListResponse(BaseModel):
    """Response for GET /v1/businesses/{business_id}/directors"""

    business_id: str
    directors: List[DirectorResponse]
    kyc_completion: int


# Documents


class DocumentCreateRequest(BaseModel):
    """Metadata of a file already stored by the upload layer"""

    group_type: DocumentGroupType
    file_name: str = Field(..., min_length=1)
    file_url: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1)
    file_size_bytes: int = Field(..., gt=0)


class DocumentResponse(BaseModel):
    id: str
    document_group_id: str
    file_name: str
    file_url: str
    mime_type: str
    file_size_bytes: int
    uploaded_at: datetime


class DocumentGroupResponse(BaseModel):
    id: str
    type: DocumentGroupType
    status: DocumentGroupStatus


class DocumentMutationResponse(BaseModel):
    document: Optional[DocumentResponse] = None
    group: DocumentGroupResponse
    profile_completion_percent: Optional[int] = None


class GroupedDocuments(BaseModel):
    group: DocumentGroupResponse
    documents: List[DocumentResponse]


class DocumentListResponse(BaseModel):
    """Response for GET /v1/businesses/{business_id}/documents"""

    business_id: str
    documents: List[DocumentResponse]
    documents_by_group: List[GroupedDocuments]


# Funding utilities


class FundingUtilityCreateRequest(BaseModel):
    """Request body for POST /v1/funding-utilities"""

    business_id: str = Field(..., min_length=1)
    type: FundingUtilityType
    requested_amount: Optional[float] = Field(None, gt=0)
    tenure_months: Optional[int] = Field(None, gt=0)
    purpose: Optional[str] = None
    security_type: Optional[str] = None
    security_available: bool = False
    existing_emis: Optional[float] = Field(None, ge=0)
    frequency: Optional[str] = None
    asset_type: Optional[str] = None
    asset_cost: Optional[float] = Field(None, gt=0)
    schemes_interested: Optional[List[str]] = None
    notes: Optional[str] = None


class FundingUtilityUpdateRequest(BaseModel):
    """Request body for PATCH /v1/funding-utilities/{utility_id}"""

    type: Optional[FundingUtilityType] = None
    requested_amount: Optional[float] = Field(None, gt=0)
    tenure_months: Optional[int] = Field(None, gt=0)
    purpose: Optional[str] = None
    security_type: Optional[str] = None
    security_available: Optional[bool] = None
    existing_emis: Optional[float] = Field(None, ge=0)
    frequency: Optional[str] = None
    asset_type: Optional[str] = None
    asset_cost: Optional[float] = Field(None, gt=0)
    schemes_interested: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("type", "security_available")
    @classmethod
    def required_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class FundingUtilityResponse(BaseModel):
    id: str
    business_id: str
    type: FundingUtilityType
    requested_amount: Optional[float] = None
    tenure_months: Optional[int] = None
    purpose: Optional[str] = None
    security_type: Optional[str] = None
    security_available: bool
    existing_emis: Optional[float] = None
    frequency: Optional[str] = None
    asset_type: Optional[str] = None
    asset_cost: Optional[float] = None
    schemes_interested: Optional[List[str]] = None
    status: FundingUtilityStatus
    notes: Optional[str] = None
    created_at: datetime


class FundingUtilityListResponse(BaseModel):
    business_id: str
    utilities: List[FundingUtilityResponse]
    total_requested_amount: float


class FundingSubmitResponse(BaseModel):
    """Response for POST /v1/businesses/{business_id}/funding-utilities/submit"""

    business_id: str
    submitted_count: int
    utilities: List[FundingUtilityResponse]
