"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Referenced record does not exist"""

    pass


class BusinessNotFoundError(NotFoundError):
    def __init__(self, business_id):
        super().__init__(f"Business not found: {business_id}")
        self.business_id = business_id


class DirectorNotFoundError(NotFoundError):
    def __init__(self, director_id):
        super().__init__(f"Director not found: {director_id}")
        self.director_id = director_id


class DocumentNotFoundError(NotFoundError):
    def __init__(self, document_id):
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id


class DocumentGroupNotFoundError(NotFoundError):
    def __init__(self, business_id, group_type):
        super().__init__(f"Document group {group_type} not found for business {business_id}")
        self.business_id = business_id
        self.group_type = group_type


class FundingUtilityNotFoundError(NotFoundError):
    def __init__(self, utility_id):
        super().__init__(f"Funding utility not found: {utility_id}")
        self.utility_id = utility_id


class BusinessAlreadyExistsError(DomainException):
    """Owner already has a business profile"""

    def __init__(self, owner_id: str):
        super().__init__(f"Business profile already exists for owner {owner_id}")
        self.owner_id = owner_id


class DuplicateDirectorError(DomainException):
    """Another director of the same business already uses this PAN"""

    pass


class ProfileNotFundableError(DomainException):
    """Completion is below the funding threshold"""

    def __init__(self, percent: int, required: int):
        super().__init__(
            f"Profile must be at least {required}% complete to access funding options. "
            f"Current: {percent}%"
        )
        self.percent = percent
        self.required = required


class NoDraftUtilitiesError(DomainException):
    """Submit requested but the business has no DRAFT funding utilities"""

    def __init__(self, business_id):
        super().__init__("No draft utilities to submit")
        self.business_id = business_id
