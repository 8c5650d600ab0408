"""Domain models - pure Python dataclasses representing onboarding entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class EntityType(str, Enum):
    SOLE_PROPRIETOR = "SOLE_PROPRIETOR"
    PARTNERSHIP = "PARTNERSHIP"
    PRIVATE_LIMITED = "PRIVATE_LIMITED"
    LLP = "LLP"
    PUBLIC_LIMITED = "PUBLIC_LIMITED"


class DocumentGroupType(str, Enum):
    """Fixed document categories, one group per business each"""

    BS_PNL = "BS_PNL"
    SANCTION = "SANCTION"
    PROFILE = "PROFILE"
    KYC_DIRECTOR = "KYC_DIRECTOR"
    ITR_DIRECTOR = "ITR_DIRECTOR"


class DocumentGroupStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class FundingUtilityType(str, Enum):
    TERM_LOAN = "TERM_LOAN"
    WORKING_CAPITAL = "WORKING_CAPITAL"
    ASSET_FINANCE = "ASSET_FINANCE"
    SCHEME_LOAN = "SCHEME_LOAN"


class FundingUtilityStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Section(str, Enum):
    """Completion breakdown sections, declared in next-steps order"""

    BUSINESS_INFO = "businessInfo"
    FINANCIALS = "financials"
    SANCTIONS = "sanctions"
    BUSINESS_PROFILE = "businessProfile"
    KYC_DIRECTORS = "kycDirectors"
    ITR_DIRECTORS = "itrDirectors"


@dataclass
class Business:
    """Business profile fields the completion engine reads"""

    legal_name: Optional[str]
    entity_type: Optional[str]
    sector: Optional[str]
    city: Optional[str]
    state: Optional[str]
    brief_description: Optional[str] = None


@dataclass
class Director:
    """Director KYC fields"""

    name: Optional[str]
    dob: Optional[date] = None
    pan: Optional[str] = None
    aadhaar_number: Optional[str] = None


@dataclass
class DocumentGroup:
    """Upload status of one document category"""

    type: DocumentGroupType
    status: DocumentGroupStatus = DocumentGroupStatus.NOT_STARTED


@dataclass(frozen=True)
class SectionScore:
    """Score of a single breakdown section"""

    weight: int
    completed: bool
    percentage: int


@dataclass(frozen=True)
class CompletionBreakdown:
    """Per-section scoring snapshot, keyed by Section in declaration order"""

    sections: dict = field(default_factory=dict)

    def __getitem__(self, section: Section) -> SectionScore:
        return self.sections[section]

    def items(self):
        return [(section, self.sections[section]) for section in Section]

    def to_dict(self) -> dict:
        return {
            section.value: {
                "weight": score.weight,
                "completed": score.completed,
                "percentage": score.percentage,
            }
            for section, score in self.items()
        }


@dataclass(frozen=True)
class GroupStatusSummary:
    total: int
    not_started: int
    in_progress: int
    complete: int


@dataclass
class ProfileCompletion:
    """Output of one completion evaluation"""

    percent: int
    breakdown: CompletionBreakdown
    status_message: str
    is_fundable: bool
    next_steps: List[str]
