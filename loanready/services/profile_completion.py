"""Profile completion service - reads persisted state and runs the scoring engine"""

import logging
import uuid
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from loanready.domain import guidance
from loanready.domain.exceptions import BusinessNotFoundError
from loanready.domain.models import CompletionBreakdown, ProfileCompletion
from loanready.infrastructure.database.models import Business
from loanready.infrastructure.database.repositories import (
    BusinessRepository,
    DirectorRepository,
    DocumentGroupRepository,
    to_domain_business,
    to_domain_director,
    to_domain_group,
)
from loanready.infrastructure.observability.logging import log_completion
from loanready.infrastructure.observability.metrics import record_completion, completion_failure_counter


class ProfileCompletionService:
    """
    Completion score, breakdown and guidance for a business.

    Every call recomputes from the current business, director and document
    group rows; the cached profile_completion_percent column is only written,
    never read.
    """

    def __init__(self, db: Session):
        self.db = db
        self.businesses = BusinessRepository(db)
        self.directors = DirectorRepository(db)
        self.document_groups = DocumentGroupRepository(db)

    def _get_business(self, business_id: uuid.UUID) -> Business:
        business = self.businesses.get_business(business_id)
        if business is None:
            raise BusinessNotFoundError(business_id)
        return business

    def get_completion(self, business_id: uuid.UUID) -> ProfileCompletion:
        """
        Run the engine over freshly read state.

        Raises:
            BusinessNotFoundError: If the business does not exist
        """
        business = self._get_business(business_id)
        groups = self.document_groups.get_document_groups_for_business(business_id)
        directors = self.directors.get_directors_for_business(business_id)

        return guidance.evaluate(
            to_domain_business(business),
            [to_domain_group(g) for g in groups],
            [to_domain_director(d) for d in directors],
        )

    def calculate(self, business_id: uuid.UUID) -> int:
        return self.get_completion(business_id).percent

    def get_breakdown(self, business_id: uuid.UUID) -> CompletionBreakdown:
        return self.get_completion(business_id).breakdown

    def get_next_steps(self, business_id: uuid.UUID) -> List[str]:
        return self.get_completion(business_id).next_steps

    @staticmethod
    def get_status_message(percent: int) -> str:
        return guidance.status_message(percent)

    @staticmethod
    def is_fundable(percent: int) -> bool:
        return guidance.is_fundable(percent)

    def read_completion(self, business_id: uuid.UUID) -> ProfileCompletion:
        """
        Recompute for a read and refresh the cached percent (flushes, caller commits).

        Reads are not recalculation events, so nothing is recorded in the
        recalculation counter or the completion histogram.
        """
        completion = self.get_completion(business_id)
        self.businesses.set_completion_percent(business_id, completion.percent)
        return completion

    def recalculate(self, business_id: uuid.UUID, trigger: str, request_id: str = "unknown") -> ProfileCompletion:
        """Recompute and cache the completion percent (flushes, caller commits)"""
        completion = self.get_completion(business_id)
        self.businesses.set_completion_percent(business_id, completion.percent)

        record_completion(trigger, completion.percent)
        log_completion(request_id, str(business_id), completion.percent, completion.is_fundable, trigger)
        return completion

    def refresh_after_mutation(self, business_id: uuid.UUID, trigger: str, request_id: str = "unknown") -> Optional[int]:
        """
        Recompute and commit after a mutation that is already committed.

        A failure here leaves the mutation in place: the session is rolled
        back, the failure is logged and counted, and None is returned so the
        caller reports no percent instead of the stale cached one.
        """
        try:
            completion = self.recalculate(business_id, trigger, request_id)
            self.db.commit()
            return completion.percent
        except SQLAlchemyError as e:
            self.db.rollback()
            completion_failure_counter.inc()
            logging.warning(
                f"Completion recalculation failed: {e}",
                extra={"request_id": request_id, "business_id": str(business_id), "trigger": trigger},
            )
            return None
