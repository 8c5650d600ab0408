"""Document group status tracking - derives upload status from document counts"""

from typing import Iterable, List
from loanready.domain.models import DocumentGroup, DocumentGroupStatus, DocumentGroupType, GroupStatusSummary

# Documents needed before a group counts as complete, for every group type
COMPLETE_THRESHOLD = 3

# Groups created alongside every business
DEFAULT_GROUP_TYPES: List[DocumentGroupType] = list(DocumentGroupType)


def derive_status(document_count: int) -> DocumentGroupStatus:
    """
    Map the number of uploaded documents in a group to its status.

    - 0 documents: NOT_STARTED
    - 1 to 2 documents: IN_PROGRESS
    - 3 or more documents: COMPLETE
    """
    if document_count < 0:
        raise ValueError(f"Document count cannot be negative: {document_count}")

    if document_count == 0:
        return DocumentGroupStatus.NOT_STARTED
    elif document_count < COMPLETE_THRESHOLD:
        return DocumentGroupStatus.IN_PROGRESS
    else:
        return DocumentGroupStatus.COMPLETE


def summarize_statuses(groups: Iterable[DocumentGroup]) -> GroupStatusSummary:
    """Count groups per status"""
    statuses = [DocumentGroupStatus(g.status) for g in groups]
    return GroupStatusSummary(
        total=len(statuses),
        not_started=statuses.count(DocumentGroupStatus.NOT_STARTED),
        in_progress=statuses.count(DocumentGroupStatus.IN_PROGRESS),
        complete=statuses.count(DocumentGroupStatus.COMPLETE),
    )
