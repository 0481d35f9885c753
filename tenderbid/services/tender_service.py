import uuid
from datetime import datetime, timezone
from logging import Logger
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenderbid.core.logging_config import logger
from tenderbid.crud import tenders as tenders_crud
from tenderbid.db.database import transaction
from tenderbid.models.enums import TenderStatus
from tenderbid.models.tenders import Tender
from tenderbid.schemas.tenders import TenderCreate, TenderResponse, TenderUpdate
from tenderbid.services.authorization import AuthorizationChecker
from tenderbid.services.errors import (
    CreatorMismatchOrNotFound,
    InvalidStatusTransition,
    TenderCloseFailed,
    TenderNameEmpty,
    TenderNotFound,
    VersionNotFound,
)
from tenderbid.services.state_machines import TenderStateMachine
from tenderbid.services.validators import check_page, check_version, is_blank, parse_id, parse_status


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TenderService:
    """Жизненный цикл тендера: создание, статусы, правки с версиями и откат."""

    def __init__(self, session_factory: async_sessionmaker, authorization: AuthorizationChecker, log: Logger = logger):
        self.session_factory = session_factory
        self.authorization = authorization
        self.log = log

    async def list_published(
        self,
        service_types: Sequence[str] | None = None,
        limit: int = 5,
        offset: int = 0,
    ) -> list[TenderResponse]:
        check_page(limit, offset)
        self.log.info(f"Fetching published tenders: service_types={service_types}, limit={limit}, offset={offset}")
        async with transaction(self.session_factory) as db:
            tenders = await tenders_crud.get_published_tenders(db, service_types, limit, offset)
            return [TenderResponse.model_validate(t) for t in tenders]

    async def create(self, tender: TenderCreate) -> TenderResponse:
        if not tender.name:
            raise TenderNameEmpty()
        self.log.info(f"Creating tender '{tender.name}' for organization {tender.organization_id} by {tender.creator_username}")
        async with transaction(self.session_factory) as db:
            await self.authorization.ensure_responsible(db, tender.creator_username, tender.organization_id)
            db_tender = await tenders_crud.create_tender(db, tender)
            self.log.info(f"Tender {db_tender.id} created")
            return TenderResponse.model_validate(db_tender)

    async def list_by_creator(self, username: str, limit: int = 5, offset: int = 0) -> list[TenderResponse]:
        check_page(limit, offset)
        self.log.info(f"Fetching tenders of {username}: limit={limit}, offset={offset}")
        async with transaction(self.session_factory) as db:
            tenders = await tenders_crud.get_tenders_by_creator(db, username, limit, offset)
            return [TenderResponse.model_validate(t) for t in tenders]

    async def get_status(self, tender_id: uuid.UUID | str, username: str) -> TenderStatus:
        tender_uuid = parse_id(tender_id, "tenderId")
        async with transaction(self.session_factory) as db:
            tender = await tenders_crud.get_tender(db, tender_uuid)
            if not tender:
                raise TenderNotFound()
            # статус опубликованного тендера виден всем
            if tender.status != TenderStatus.PUBLISHED.value:
                await self.authorization.ensure_responsible(db, username, tender.organization_id)
            return TenderStatus(tender.status)

    async def update_status(self, tender_id: uuid.UUID | str, new_status: TenderStatus | str, username: str) -> TenderResponse:
        tender_uuid = parse_id(tender_id, "tenderId")
        status = parse_status(new_status, TenderStatus)
        self.log.info(f"Updating status of tender {tender_uuid} to {status.value} by {username}")
        async with transaction(self.session_factory) as db:
            tender = await self._get_owned(db, tender_uuid, username)
            await TenderStateMachine(tender, self.log).move_to(status)
            tender.updated_at = utcnow()
            await db.flush()
            return TenderResponse.model_validate(tender)

    async def update_info(self, tender_id: uuid.UUID | str, patch: TenderUpdate, username: str) -> TenderResponse:
        tender_uuid = parse_id(tender_id, "tenderId")
        self.log.info(f"Updating tender {tender_uuid} by {username}")
        async with transaction(self.session_factory) as db:
            tender = await self._get_owned(db, tender_uuid, username)
            await tenders_crud.save_tender_version(db, tender)
            if not is_blank(patch.name):
                tender.name = patch.name
            if not is_blank(patch.description):
                tender.description = patch.description
            if not is_blank(patch.service_type):
                tender.service_type = patch.service_type
            # версия растёт даже при пустом патче
            tender.version = tender.version + 1
            tender.updated_at = utcnow()
            await db.flush()
            self.log.info(f"Tender {tender_uuid} updated to version {tender.version}")
            return TenderResponse.model_validate(tender)

    async def rollback_version(self, tender_id: uuid.UUID | str, version: int, username: str) -> TenderResponse:
        tender_uuid = parse_id(tender_id, "tenderId")
        check_version(version)
        self.log.info(f"Rolling back tender {tender_uuid} to version {version} by {username}")
        async with transaction(self.session_factory) as db:
            snapshot = await tenders_crud.get_tender_version(db, tender_uuid, version)
            if not snapshot:
                raise VersionNotFound(f"Version {version} of tender {tender_uuid} not found")
            tender = await self._get_owned(db, tender_uuid, username)
            await tenders_crud.save_tender_version(db, tender)
            tender.name = snapshot.name
            tender.description = snapshot.description
            tender.service_type = snapshot.service_type
            tender.status = snapshot.status
            tender.version = tender.version + 1
            tender.updated_at = utcnow()
            await db.flush()
            self.log.info(f"Tender {tender_uuid} rolled back to version {version}, now version {tender.version}")
            return TenderResponse.model_validate(tender)

    async def close_for_approval(self, db: AsyncSession, tender_id: uuid.UUID) -> Tender:
        """
        Закрывает тендер после одобрения предложения.

        Выполняется в транзакции вызывающего: при ошибке откатывается
        и само решение по предложению.
        """
        try:
            tender = await tenders_crud.get_tender(db, tender_id, for_update=True)
            if not tender:
                raise TenderCloseFailed(f"Tender {tender_id} not found")
            if tender.status != TenderStatus.CLOSED.value:
                await TenderStateMachine(tender, self.log).move_to(TenderStatus.CLOSED)
                tender.updated_at = utcnow()
                await db.flush()
            return tender
        except (SQLAlchemyError, InvalidStatusTransition) as e:
            self.log.error(f"Failed to close tender {tender_id}: {str(e)}")
            raise TenderCloseFailed(f"Failed to close tender {tender_id}") from e

    async def _get_owned(self, db: AsyncSession, tender_id: uuid.UUID, username: str) -> Tender:
        tender = await tenders_crud.get_tender_owned_by(db, tender_id, username)
        if not tender:
            self.log.warning(f"Tender {tender_id} not found or {username} is not its creator")
            raise CreatorMismatchOrNotFound()
        return tender
