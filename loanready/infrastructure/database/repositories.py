"""Data access layer for onboarding entities"""

import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from loanready.infrastructure.database.models import Business, Director, DocumentGroup, Document, FundingUtility
from loanready.domain import models as domain
from loanready.domain.document_groups import DEFAULT_GROUP_TYPES, derive_status

# Columns a business update may never touch
IMMUTABLE_BUSINESS_FIELDS = {"id", "owner_id", "profile_completion_percent", "created_at", "updated_at"}
IMMUTABLE_DIRECTOR_FIELDS = {"id", "business_id", "created_at", "updated_at"}
IMMUTABLE_UTILITY_FIELDS = {"id", "business_id", "status", "created_at", "updated_at"}


def to_domain_business(row: Business) -> domain.Business:
    return domain.Business(
        legal_name=row.legal_name,
        entity_type=row.entity_type,
        sector=row.sector,
        city=row.city,
        state=row.state,
        brief_description=row.brief_description,
    )


def to_domain_director(row: Director) -> domain.Director:
    return domain.Director(name=row.name, dob=row.dob, pan=row.pan, aadhaar_number=row.aadhaar_number)


def to_domain_group(row: DocumentGroup) -> domain.DocumentGroup:
    return domain.DocumentGroup(
        type=domain.DocumentGroupType(row.type),
        status=domain.DocumentGroupStatus(row.status),
    )


def _apply_fields(row: Any, fields: Dict[str, Any], immutable: set) -> None:
    for key, value in fields.items():
        if key in immutable:
            continue
        setattr(row, key, value)


class BusinessRepository:
    """Repository for business profiles"""

    def __init__(self, db: Session):
        self.db = db

    def create_business(self, owner_id: str, fields: Dict[str, Any]) -> Business:
        """Persist a business together with its five document groups"""
        db_business = Business(owner_id=owner_id, profile_completion_percent=0)
        _apply_fields(db_business, fields, IMMUTABLE_BUSINESS_FIELDS)
        self.db.add(db_business)
        self.db.flush()  # Get ID without committing

        DocumentGroupRepository(self.db).create_default_groups(db_business.id)
        return db_business

    def get_business(self, business_id: uuid.UUID) -> Optional[Business]:
        return self.db.query(Business).filter(Business.id == business_id).first()

    def get_business_by_owner(self, owner_id: str) -> Optional[Business]:
        return self.db.query(Business).filter(Business.owner_id == owner_id).first()

    def update_business(self, business: Business, fields: Dict[str, Any]) -> Business:
        _apply_fields(business, fields, IMMUTABLE_BUSINESS_FIELDS)
        self.db.flush()
        return business

    def set_completion_percent(self, business_id: uuid.UUID, percent: int) -> None:
        """Cache the latest computed completion percent"""
        (
            self.db.query(Business)
            .filter(Business.id == business_id)
            .update({Business.profile_completion_percent: percent}, synchronize_session="fetch")
        )
        self.db.flush()


class DirectorRepository:
    """Repository for business directors"""

    def __init__(self, db: Session):
        self.db = db

    def create_director(self, business_id: uuid.UUID, fields: Dict[str, Any]) -> Director:
        db_director = Director(business_id=business_id)
        _apply_fields(db_director, fields, IMMUTABLE_DIRECTOR_FIELDS)
        self.db.add(db_director)
        self.db.flush()
        return db_director

    def get_director(self, director_id: uuid.UUID) -> Optional[Director]:
        return self.db.query(Director).filter(Director.id == director_id).first()

    def get_directors_for_business(self, business_id: uuid.UUID) -> List[Director]:
        return (
            self.db.query(Director)
            .filter(Director.business_id == business_id)
            .order_by(Director.created_at.asc())
            .all()
        )

    def pan_exists(self, business_id: uuid.UUID, pan: str, exclude_director_id: Optional[uuid.UUID] = None) -> bool:
        """Check whether another director of the business already uses this PAN"""
        query = self.db.query(Director.id).filter(Director.business_id == business_id, Director.pan == pan)
        if exclude_director_id is not None:
            query = query.filter(Director.id != exclude_director_id)
        return query.first() is not None

    def update_director(self, director: Director, fields: Dict[str, Any]) -> Director:
        _apply_fields(director, fields, IMMUTABLE_DIRECTOR_FIELDS)
        self.db.flush()
        return director

    def delete_director(self, director: Director) -> None:
        self.db.delete(director)
        self.db.flush()


class DocumentGroupRepository:
    """Repository for document groups and their derived status"""

    def __init__(self, db: Session):
        self.db = db

    def create_default_groups(self, business_id: uuid.UUID) -> List[DocumentGroup]:
        groups = [
            DocumentGroup(business_id=business_id, type=group_type.value, status=domain.DocumentGroupStatus.NOT_STARTED.value)
            for group_type in DEFAULT_GROUP_TYPES
        ]
        self.db.add_all(groups)
        self.db.flush()
        return groups

    def get_document_groups_for_business(self, business_id: uuid.UUID) -> List[DocumentGroup]:
        return (
            self.db.query(DocumentGroup)
            .filter(DocumentGroup.business_id == business_id)
            .order_by(DocumentGroup.type)
            .all()
        )

    def get_group_by_type(self, business_id: uuid.UUID, group_type: domain.DocumentGroupType) -> Optional[DocumentGroup]:
        return (
            self.db.query(DocumentGroup)
            .filter(DocumentGroup.business_id == business_id, DocumentGroup.type == group_type.value)
            .first()
        )

    def count_documents(self, group_id: uuid.UUID) -> int:
        return self.db.query(func.count(Document.id)).filter(Document.document_group_id == group_id).scalar() or 0

    def refresh_status(self, group: DocumentGroup) -> domain.DocumentGroupStatus:
        """Recount the group's documents and persist the derived status"""
        status = derive_status(self.count_documents(group.id))
        group.status = status.value
        self.db.flush()
        return status


class DocumentRepository:
    """Repository for uploaded document metadata"""

    def __init__(self, db: Session):
        self.db = db

    def create_document(
        self,
        group_id: uuid.UUID,
        file_name: str,
        file_url: str,
        mime_type: str,
        file_size_bytes: int,
    ) -> Document:
        db_document = Document(
            document_group_id=group_id,
            file_name=file_name,
            file_url=file_url,
            mime_type=mime_type,
            file_size_bytes=file_size_bytes,
        )
        self.db.add(db_document)
        self.db.flush()
        return db_document

    def get_document(self, document_id: uuid.UUID) -> Optional[Document]:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def get_documents_for_business(
        self,
        business_id: uuid.UUID,
        group_type: Optional[domain.DocumentGroupType] = None,
    ) -> List[Document]:
        """Documents across a business's groups, newest first"""
        query = (
            self.db.query(Document)
            .join(DocumentGroup, Document.document_group_id == DocumentGroup.id)
            .filter(DocumentGroup.business_id == business_id)
        )
        if group_type is not None:
            query = query.filter(DocumentGroup.type == group_type.value)
        return query.order_by(Document.uploaded_at.desc()).all()

    def delete_document(self, document: Document) -> None:
        self.db.delete(document)
        self.db.flush()


class FundingUtilityRepository:
    """Repository for funding utility requests"""

    def __init__(self, db: Session):
        self.db = db

    def create_utility(
        self,
        business_id: uuid.UUID,
        utility_type: domain.FundingUtilityType,
        fields: Dict[str, Any],
    ) -> FundingUtility:
        db_utility = FundingUtility(
            business_id=business_id,
            type=utility_type.value,
            status=domain.FundingUtilityStatus.DRAFT.value,
            **fields,
        )
        self.db.add(db_utility)
        self.db.flush()
        return db_utility

    def get_utilities_for_business(self, business_id: uuid.UUID) -> List[FundingUtility]:
        return (
            self.db.query(FundingUtility)
            .filter(FundingUtility.business_id == business_id)
            .order_by(FundingUtility.created_at.desc())
            .all()
        )

    def get_total_requested_amount(self, business_id: uuid.UUID) -> float:
        total = (
            self.db.query(func.sum(FundingUtility.requested_amount))
            .filter(FundingUtility.business_id == business_id)
            .scalar()
        )
        return float(total or 0)

    def get_utility(self, utility_id: uuid.UUID) -> Optional[FundingUtility]:
        return self.db.query(FundingUtility).filter(FundingUtility.id == utility_id).first()

    def get_utilities_by_status(
        self, business_id: uuid.UUID, status: domain.FundingUtilityStatus
    ) -> List[FundingUtility]:
        return (
            self.db.query(FundingUtility)
            .filter(FundingUtility.business_id == business_id, FundingUtility.status == status.value)
            .order_by(FundingUtility.created_at.desc())
            .all()
        )

    def update_utility(self, utility: FundingUtility, fields: Dict[str, Any]) -> FundingUtility:
        """Apply a partial update; status only moves through submit_utilities"""
        _apply_fields(utility, fields, IMMUTABLE_UTILITY_FIELDS)
        self.db.flush()
        return utility

    def delete_utility(self, utility: FundingUtility) -> None:
        self.db.delete(utility)
        self.db.flush()

    def submit_utilities(self, business_id: uuid.UUID) -> int:
        """
        Move every DRAFT utility of a business to SUBMITTED.

        Returns:
            Number of utilities submitted
        """
        drafts = self.get_utilities_by_status(business_id, domain.FundingUtilityStatus.DRAFT)
        for utility in drafts:
            utility.status = domain.FundingUtilityStatus.SUBMITTED.value
        self.db.flush()
        return len(drafts)
