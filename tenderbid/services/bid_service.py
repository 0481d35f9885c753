import uuid
from logging import Logger

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenderbid.core.logging_config import logger
from tenderbid.crud import bids as bids_crud
from tenderbid.crud import organizations as organizations_crud
from tenderbid.crud import tenders as tenders_crud
from tenderbid.db.database import transaction
from tenderbid.models.bids import Bid
from tenderbid.models.enums import AuthorType, BidDecision, BidStatus
from tenderbid.models.tenders import Tender
from tenderbid.schemas.bids import BidCreate, BidResponse, BidReviewResponse, BidUpdate
from tenderbid.services.authorization import AuthorizationChecker
from tenderbid.services.errors import (
    AuthorIdEmpty,
    BidNameEmpty,
    BidNotFound,
    FeedbackEmpty,
    InvalidStatus,
    NoAssociationWithOrganization,
    NoPermissionError,
    OrganizationNotFound,
    ReviewsNotFound,
    TenderNotFound,
    VersionNotFound,
)
from tenderbid.services.state_machines import BidStateMachine
from tenderbid.services.tender_service import TenderService, utcnow
from tenderbid.services.validators import check_page, check_version, is_blank, parse_id, parse_status

# Статусы, которые выставляются только через submit_decision
DECISION_STATUSES = (BidStatus.APPROVED, BidStatus.REJECTED)


class BidService:
    """
    Жизненный цикл предложения: создание, статусы, решения, отзывы, версии.

    Одобрение предложения закрывает тендер через `TenderService.close_for_approval`
    в той же транзакции.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        authorization: AuthorizationChecker,
        tender_service: TenderService,
        log: Logger = logger,
    ):
        self.session_factory = session_factory
        self.authorization = authorization
        self.tender_service = tender_service
        self.log = log

    async def create(self, bid: BidCreate) -> BidResponse:
        if not bid.name:
            self.log.error("Bid name is empty")
            raise BidNameEmpty()
        self.log.info(f"Creating bid '{bid.name}' for tender {bid.tender_id} from organization {bid.organization_id}")
        async with transaction(self.session_factory) as db:
            if not await tenders_crud.tender_exists(db, bid.tender_id):
                raise TenderNotFound(f"Tender {bid.tender_id} not found")
            if not await organizations_crud.organization_exists(db, bid.organization_id):
                raise OrganizationNotFound(f"Organization {bid.organization_id} not found")

            author_id = bid.author_id
            if bid.author_type is AuthorType.USER:
                if author_id is None:
                    raise AuthorIdEmpty()
                if not await organizations_crud.is_employee_in_organization(db, author_id, bid.organization_id):
                    raise NoAssociationWithOrganization()
            else:
                author_id = author_id or bid.organization_id
                if author_id != bid.organization_id:
                    raise NoAssociationWithOrganization("Organization author must be the bidding organization")

            db_bid = await bids_crud.create_bid(
                db,
                name=bid.name,
                description=bid.description,
                tender_id=bid.tender_id,
                organization_id=bid.organization_id,
                author_type=bid.author_type,
                author_id=author_id,
            )
            self.log.info(f"Bid {db_bid.id} created")
            return BidResponse.model_validate(db_bid)

    async def list_by_author(self, username: str, limit: int = 5, offset: int = 0) -> list[BidResponse]:
        check_page(limit, offset)
        self.log.info(f"Fetching bids of {username}: limit={limit}, offset={offset}")
        async with transaction(self.session_factory) as db:
            employee = await organizations_crud.get_employee_by_username(db, username)
            if not employee:
                return []
            bids = await bids_crud.get_bids_by_author(db, employee.id, limit, offset)
            return [BidResponse.model_validate(b) for b in bids]

    async def list_by_tender(self, tender_id: uuid.UUID | str, limit: int = 5, offset: int = 0) -> list[BidResponse]:
        tender_uuid = parse_id(tender_id, "tenderId")
        check_page(limit, offset)
        self.log.info(f"Fetching bids of tender {tender_uuid}: limit={limit}, offset={offset}")
        async with transaction(self.session_factory) as db:
            if not await tenders_crud.tender_exists(db, tender_uuid):
                raise TenderNotFound()
            bids = await bids_crud.get_bids_by_tender(db, tender_uuid, limit, offset)
            return [BidResponse.model_validate(b) for b in bids]

    async def get_status(self, bid_id: uuid.UUID | str, username: str) -> BidStatus:
        bid_uuid = parse_id(bid_id, "bidId")
        async with transaction(self.session_factory) as db:
            bid = await self._get_bid(db, bid_uuid)
            await self.authorization.ensure_responsible(db, username, bid.organization_id)
            return BidStatus(bid.status)

    async def update(self, bid_id: uuid.UUID | str, username: str, patch: BidUpdate) -> BidResponse:
        bid_uuid = parse_id(bid_id, "bidId")
        self.log.info(f"Updating bid {bid_uuid} by {username}")
        async with transaction(self.session_factory) as db:
            bid = await self._get_bid(db, bid_uuid, for_update=True)
            await self.authorization.ensure_responsible(db, username, bid.organization_id)
            await bids_crud.save_bid_version(db, bid)
            if not is_blank(patch.name):
                bid.name = patch.name
            if not is_blank(patch.description):
                bid.description = patch.description
            bid.version = bid.version + 1
            bid.updated_at = utcnow()
            await db.flush()
            self.log.info(f"Bid {bid_uuid} updated to version {bid.version}")
            return BidResponse.model_validate(bid)

    async def update_status(self, bid_id: uuid.UUID | str, new_status: BidStatus | str, username: str) -> BidResponse:
        bid_uuid = parse_id(bid_id, "bidId")
        status = parse_status(new_status, BidStatus)
        if status in DECISION_STATUSES:
            raise InvalidStatus(f"Status {status.value} can only be set by submitting a decision")
        self.log.info(f"Updating status of bid {bid_uuid} to {status.value} by {username}")
        async with transaction(self.session_factory) as db:
            bid = await self._get_bid(db, bid_uuid, for_update=True)
            await self.authorization.ensure_responsible(db, username, bid.organization_id)
            await BidStateMachine(bid, self.log).move_to(status)
            bid.updated_at = utcnow()
            await db.flush()
            return BidResponse.model_validate(bid)

    async def submit_decision(self, bid_id: uuid.UUID | str, decision: BidDecision | str, username: str) -> BidResponse:
        bid_uuid = parse_id(bid_id, "bidId")
        decision = parse_status(decision, BidDecision)
        self.log.info(f"Submitting decision {decision.value} for bid {bid_uuid} by {username}")
        async with transaction(self.session_factory) as db:
            bid = await self._get_bid(db, bid_uuid, for_update=True)
            tender = await self._get_bid_tender(db, bid)
            await self.authorization.ensure_can_act(db, username, tender.organization_id)
            await BidStateMachine(bid, self.log).move_to(BidStatus(decision.value))
            bid.updated_at = utcnow()
            await db.flush()
            if decision is BidDecision.APPROVED:
                await self.tender_service.close_for_approval(db, bid.tender_id)
            self.log.info(f"Decision {decision.value} submitted for bid {bid_uuid}")
            return BidResponse.model_validate(bid)

    async def send_feedback(self, bid_id: uuid.UUID | str, feedback: str, username: str) -> BidResponse:
        bid_uuid = parse_id(bid_id, "bidId")
        if not feedback:
            raise FeedbackEmpty()
        self.log.info(f"Sending feedback for bid {bid_uuid} by {username}")
        async with transaction(self.session_factory) as db:
            bid = await self._get_bid(db, bid_uuid)
            tender = await self._get_bid_tender(db, bid)
            await self.authorization.ensure_can_act(db, username, tender.organization_id)
            employee = await organizations_crud.get_employee_by_username(db, username)
            if not employee:
                raise NoPermissionError(f"User {username} not found")
            await bids_crud.add_feedback(db, bid.id, employee.id, feedback)
            self.log.info(f"Feedback for bid {bid_uuid} saved")
            return BidResponse.model_validate(bid)

    async def rollback_version(self, bid_id: uuid.UUID | str, version: int, username: str) -> BidResponse:
        bid_uuid = parse_id(bid_id, "bidId")
        check_version(version)
        self.log.info(f"Rolling back bid {bid_uuid} to version {version} by {username}")
        async with transaction(self.session_factory) as db:
            bid = await self._get_bid(db, bid_uuid, for_update=True)
            snapshot = await bids_crud.get_bid_version(db, bid_uuid, version)
            if not snapshot:
                raise VersionNotFound(f"Version {version} of bid {bid_uuid} not found")
            await self.authorization.ensure_can_act(db, username, bid.organization_id)
            await bids_crud.save_bid_version(db, bid)
            bid.name = snapshot.name
            bid.description = snapshot.description
            bid.version = bid.version + 1
            bid.updated_at = utcnow()
            await db.flush()
            self.log.info(f"Bid {bid_uuid} rolled back to version {version}, now version {bid.version}")
            return BidResponse.model_validate(bid)

    async def get_reviews(
        self,
        tender_id: uuid.UUID | str,
        author_username: str,
        requester_username: str,
        limit: int = 5,
        offset: int = 0,
    ) -> list[BidReviewResponse]:
        tender_uuid = parse_id(tender_id, "tenderId")
        check_page(limit, offset)
        self.log.info(f"Fetching reviews on {author_username} bids for tender {tender_uuid} by {requester_username}")
        async with transaction(self.session_factory) as db:
            tender = await tenders_crud.get_tender(db, tender_uuid)
            if not tender:
                raise TenderNotFound()
            await self.authorization.ensure_can_act(db, requester_username, tender.organization_id)
            author = await organizations_crud.get_employee_by_username(db, author_username)
            reviews = []
            if author:
                reviews = await bids_crud.get_reviews(db, tender_uuid, author.id, limit, offset)
            # пустой результат - отдельная ошибка, а не пустой список
            if not reviews:
                raise ReviewsNotFound()
            return [BidReviewResponse.model_validate(r) for r in reviews]

    async def _get_bid(self, db: AsyncSession, bid_id: uuid.UUID, for_update: bool = False) -> Bid:
        bid = await bids_crud.get_bid(db, bid_id, for_update=for_update)
        if not bid:
            self.log.warning(f"Bid {bid_id} not found")
            raise BidNotFound()
        return bid

    async def _get_bid_tender(self, db: AsyncSession, bid: Bid) -> Tender:
        tender = await tenders_crud.get_tender(db, bid.tender_id)
        if not tender:
            raise TenderNotFound(f"Tender {bid.tender_id} of bid {bid.id} not found")
        return tender
