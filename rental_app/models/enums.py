from enum import Enum


class UserRole(str, Enum):
    TENANT = "tenant"
    LANDLORD = "landlord"
    PROPERTY_MANAGER = "property_manager"


class Capability(str, Enum):
    LIST_PROPERTIES = "list_properties"
    SUBMIT_APPLICATIONS = "submit_applications"
    REVIEW_APPLICATIONS = "review_applications"


class PropertyTypes(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    STUDIO = "studio"


class PetPolicy(str, Enum):
    ALLOWED = "allowed"
    NOT_ALLOWED = "not_allowed"
    CASE_BY_CASE = "case_by_case"


class PropertyStatus(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    RENTED = "rented"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
