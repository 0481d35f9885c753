from tenderbid.models.base import Base
from tenderbid.models.organizations import Employee, Organization, OrganizationResponsible
from tenderbid.models.tenders import Tender, TenderVersion
from tenderbid.models.bids import Bid, BidVersion, BidFeedback

__all__ = [
    "Base",
    "Employee",
    "Organization",
    "OrganizationResponsible",
    "Tender",
    "TenderVersion",
    "Bid",
    "BidVersion",
    "BidFeedback",
]
