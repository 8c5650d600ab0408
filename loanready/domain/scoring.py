"""Profile completion scoring engine - core business logic for loan readiness"""

from typing import Dict, Sequence
from loanready.domain.models import (
    Business,
    CompletionBreakdown,
    Director,
    DocumentGroup,
    DocumentGroupStatus,
    DocumentGroupType,
    Section,
    SectionScore,
)
from loanready.domain.kyc import all_directors_complete, is_present

SECTION_WEIGHTS: Dict[Section, int] = {
    Section.BUSINESS_INFO: 10,
    Section.FINANCIALS: 20,
    Section.SANCTIONS: 20,
    Section.BUSINESS_PROFILE: 10,
    Section.KYC_DIRECTORS: 20,
    Section.ITR_DIRECTORS: 20,
}

MAX_SCORE = 100

# A description longer than this counts as a complete business profile
DESCRIPTION_MIN_LENGTH = 50

REQUIRED_BUSINESS_FIELDS = ("legal_name", "entity_type", "sector", "city", "state")


def _group_statuses(document_groups: Sequence[DocumentGroup]) -> Dict[DocumentGroupType, DocumentGroupStatus]:
    """Index group statuses by type; absent groups read as NOT_STARTED"""
    statuses = {group_type: DocumentGroupStatus.NOT_STARTED for group_type in DocumentGroupType}
    for group in document_groups:
        statuses[DocumentGroupType(group.type)] = DocumentGroupStatus(group.status)
    return statuses


def _section(section: Section, completed: bool, partial: bool = False) -> SectionScore:
    """Full weight when completed, half weight for partial progress, else nothing"""
    weight = SECTION_WEIGHTS[section]
    if completed:
        percentage = weight
    elif partial:
        percentage = weight // 2
    else:
        percentage = 0
    return SectionScore(weight=weight, completed=completed, percentage=percentage)


def _document_section(section: Section, status: DocumentGroupStatus) -> SectionScore:
    return _section(
        section,
        completed=status == DocumentGroupStatus.COMPLETE,
        partial=status == DocumentGroupStatus.IN_PROGRESS,
    )


def compute_breakdown(
    business: Business,
    document_groups: Sequence[DocumentGroup],
    directors: Sequence[Director],
) -> CompletionBreakdown:
    """
    Score each profile section from already-fetched records.

    Sections and weights:
    - businessInfo (10): all required business fields filled, no partial credit
    - financials (20): BS_PNL group, half credit while in progress
    - sanctions (20): SANCTION group, half credit while in progress
    - businessProfile (10): PROFILE group complete or a description longer
      than 50 characters; half credit while the group is in progress
    - kycDirectors (20): every director has PAN and Aadhaar AND the
      KYC_DIRECTOR group is complete; half credit when only the director
      fields are complete
    - itrDirectors (20): at least one director AND ITR_DIRECTOR group
      complete; half credit while the group is in progress

    Pure function: no I/O, equal inputs give equal breakdowns.
    """
    statuses = _group_statuses(document_groups)
    has_directors = len(directors) > 0
    directors_kyc_complete = all_directors_complete(directors)

    business_info_complete = all(
        is_present(getattr(business, name)) for name in REQUIRED_BUSINESS_FIELDS
    )

    description = business.brief_description
    has_long_description = is_present(description) and len(description) > DESCRIPTION_MIN_LENGTH
    profile_status = statuses[DocumentGroupType.PROFILE]

    kyc_group_complete = statuses[DocumentGroupType.KYC_DIRECTOR] == DocumentGroupStatus.COMPLETE
    itr_status = statuses[DocumentGroupType.ITR_DIRECTOR]

    sections = {
        Section.BUSINESS_INFO: _section(Section.BUSINESS_INFO, completed=business_info_complete),
        Section.FINANCIALS: _document_section(Section.FINANCIALS, statuses[DocumentGroupType.BS_PNL]),
        Section.SANCTIONS: _document_section(Section.SANCTIONS, statuses[DocumentGroupType.SANCTION]),
        Section.BUSINESS_PROFILE: _section(
            Section.BUSINESS_PROFILE,
            completed=profile_status == DocumentGroupStatus.COMPLETE or has_long_description,
            partial=profile_status == DocumentGroupStatus.IN_PROGRESS,
        ),
        Section.KYC_DIRECTORS: _section(
            Section.KYC_DIRECTORS,
            completed=directors_kyc_complete and kyc_group_complete,
            partial=directors_kyc_complete,
        ),
        Section.ITR_DIRECTORS: _section(
            Section.ITR_DIRECTORS,
            completed=has_directors and itr_status == DocumentGroupStatus.COMPLETE,
            partial=has_directors and itr_status == DocumentGroupStatus.IN_PROGRESS,
        ),
    }

    return CompletionBreakdown(sections=sections)


def compute_score(breakdown: CompletionBreakdown) -> int:
    """Sum of section percentages, capped at 100"""
    total = sum(score.percentage for _, score in breakdown.items())
    return min(total, MAX_SCORE)
