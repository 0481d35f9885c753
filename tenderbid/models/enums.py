from enum import Enum


class TenderStatus(str, Enum):
    CREATED = "Created"
    PUBLISHED = "Published"
    CLOSED = "Closed"


class BidStatus(str, Enum):
    CREATED = "Created"
    PUBLISHED = "Published"
    CANCELED = "Canceled"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class BidDecision(str, Enum):
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AuthorType(str, Enum):
    USER = "User"
    ORGANIZATION = "Organization"


class OrganizationType(str, Enum):
    IE = "IE"
    LLC = "LLC"
    JSC = "JSC"
