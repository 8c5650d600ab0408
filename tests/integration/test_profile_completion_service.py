"""Integration tests for the completion service over the database"""

import uuid
import pytest
from sqlalchemy.orm import Session
from loanready.domain.exceptions import BusinessNotFoundError
from loanready.domain.guidance import PROFILE_COMPLETE_STEP
from loanready.domain.models import (
    DocumentGroupStatus,
    DocumentGroupType,
    FundingUtilityStatus,
    FundingUtilityType,
    Section,
)
from loanready.infrastructure.database.repositories import (
    BusinessRepository,
    DirectorRepository,
    DocumentGroupRepository,
    DocumentRepository,
    FundingUtilityRepository,
)
from loanready.services.profile_completion import ProfileCompletionService

BUSINESS_FIELDS = {
    "legal_name": "Sharma Textiles Pvt Ltd",
    "entity_type": "PRIVATE_LIMITED",
    "sector": "Manufacturing",
    "city": "Surat",
    "state": "Gujarat",
}


@pytest.fixture
def business(db: Session):
    business = BusinessRepository(db).create_business("owner_1", dict(BUSINESS_FIELDS))
    db.commit()
    return business


def add_documents(db: Session, business_id: uuid.UUID, group_type: DocumentGroupType, count: int) -> None:
    group_repo = DocumentGroupRepository(db)
    group = group_repo.get_group_by_type(business_id, group_type)
    for i in range(count):
        DocumentRepository(db).create_document(group.id, f"doc_{i}.pdf", f"s3://bucket/doc_{i}.pdf", "application/pdf", 1000)
    group_repo.refresh_status(group)
    db.commit()


def test_business_created_with_five_groups(db: Session, business):
    groups = DocumentGroupRepository(db).get_document_groups_for_business(business.id)

    assert {g.type for g in groups} == {t.value for t in DocumentGroupType}
    assert all(g.status == DocumentGroupStatus.NOT_STARTED.value for g in groups)


def test_refresh_status_follows_document_count(db: Session, business):
    group_repo = DocumentGroupRepository(db)

    add_documents(db, business.id, DocumentGroupType.BS_PNL, 2)
    assert group_repo.get_group_by_type(business.id, DocumentGroupType.BS_PNL).status == "IN_PROGRESS"

    add_documents(db, business.id, DocumentGroupType.BS_PNL, 1)
    assert group_repo.get_group_by_type(business.id, DocumentGroupType.BS_PNL).status == "COMPLETE"


def test_calculate_and_breakdown(db: Session, business):
    service = ProfileCompletionService(db)
    add_documents(db, business.id, DocumentGroupType.SANCTION, 1)

    assert service.calculate(business.id) == 20
    breakdown = service.get_breakdown(business.id)
    assert breakdown[Section.SANCTIONS].percentage == 10
    assert breakdown[Section.SANCTIONS].completed is False


def test_recalculate_persists_cached_percent(db: Session, business):
    service = ProfileCompletionService(db)
    add_documents(db, business.id, DocumentGroupType.BS_PNL, 3)

    completion = service.recalculate(business.id, trigger="test")
    db.commit()
    db.refresh(business)

    assert completion.percent == 30
    assert business.profile_completion_percent == 30


def test_cached_percent_is_never_read(db: Session, business):
    """A stale cached value does not affect the computed score"""
    BusinessRepository(db).set_completion_percent(business.id, 95)
    db.commit()

    assert ProfileCompletionService(db).calculate(business.id) == 10


def test_full_profile_next_steps(db: Session, business):
    DirectorRepository(db).create_director(
        business.id, {"name": "Anita Sharma", "pan": "ABCPS1234K", "aadhaar_number": "123456789012"}
    )
    db.commit()
    for group_type in DocumentGroupType:
        add_documents(db, business.id, group_type, 3)

    service = ProfileCompletionService(db)
    percent = service.calculate(business.id)

    assert percent == 100
    assert service.is_fundable(percent) is True
    assert service.get_status_message(percent) == "Bank-ready profile"
    assert service.get_next_steps(business.id) == [PROFILE_COMPLETE_STEP]


def test_unknown_business_raises_not_found(db: Session):
    service = ProfileCompletionService(db)

    with pytest.raises(BusinessNotFoundError):
        service.calculate(uuid.uuid4())


def test_submit_utilities_only_moves_drafts(db: Session, business):
    utility_repo = FundingUtilityRepository(db)
    draft = utility_repo.create_utility(business.id, FundingUtilityType.TERM_LOAN, {"requested_amount": 100000})
    approved = utility_repo.create_utility(business.id, FundingUtilityType.SCHEME_LOAN, {})
    approved.status = FundingUtilityStatus.APPROVED.value
    db.commit()

    assert utility_repo.submit_utilities(business.id) == 1
    db.commit()

    assert utility_repo.get_utility(draft.id).status == FundingUtilityStatus.SUBMITTED.value
    assert utility_repo.get_utility(approved.id).status == FundingUtilityStatus.APPROVED.value
    assert utility_repo.get_utilities_by_status(business.id, FundingUtilityStatus.DRAFT) == []


def test_update_utility_leaves_status_alone(db: Session, business):
    utility_repo = FundingUtilityRepository(db)
    utility = utility_repo.create_utility(business.id, FundingUtilityType.TERM_LOAN, {})

    utility_repo.update_utility(utility, {"notes": "Needs collateral details", "status": "APPROVED"})
    db.commit()

    assert utility.notes == "Needs collateral details"
    assert utility.status == FundingUtilityStatus.DRAFT.value
