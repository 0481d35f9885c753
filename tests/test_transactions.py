import asyncio
from types import SimpleNamespace
import uuid

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from conftest import seed_directory
from tenderbid.crud import bids as bids_crud
from tenderbid.crud import tenders as tenders_crud
from tenderbid.db.database import transaction
from tenderbid.models import Base
from tenderbid.schemas.tenders import TenderCreate, TenderUpdate
from tenderbid.services.authorization import AuthorizationChecker
from tenderbid.services.errors import DomainError, ErrorKind, StorageFailure
from tenderbid.services.tender_service import TenderService

pytestmark = pytest.mark.anyio


class RecordingSession:
    """Запоминает выполненные запросы и ничего не находит."""

    def __init__(self):
        self.statements = []

    async def execute(self, statement):
        self.statements.append(statement)
        return SimpleNamespace(scalars=lambda: SimpleNamespace(first=lambda: None))


def postgres_sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


async def test_edit_queries_lock_the_row_on_postgres():
    db = RecordingSession()

    await tenders_crud.get_tender_owned_by(db, uuid.uuid4(), "alice")
    await tenders_crud.get_tender(db, uuid.uuid4(), for_update=True)
    await bids_crud.get_bid(db, uuid.uuid4(), for_update=True)

    for statement in db.statements:
        assert "FOR UPDATE" in postgres_sql(statement)


async def test_plain_reads_do_not_lock():
    db = RecordingSession()

    await tenders_crud.get_tender(db, uuid.uuid4())
    await bids_crud.get_bid(db, uuid.uuid4())

    for statement in db.statements:
        assert "FOR UPDATE" not in postgres_sql(statement)


async def test_rejected_statement_becomes_storage_failure(session_factory):
    with pytest.raises(StorageFailure) as exc_info:
        async with transaction(session_factory):
            raise IntegrityError("INSERT INTO tender_versions", {}, Exception("duplicate key"))

    assert exc_info.value.kind is ErrorKind.DEPENDENCY_FAILURE


async def test_concurrent_edits_never_lose_a_version(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tenders.db'}")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        seed = await seed_directory(factory)
        service = TenderService(factory, AuthorizationChecker())
        tender = await service.create(
            TenderCreate(name="Shared", service_type="IT", organization_id=seed["orgs"]["o1"], creator_username="alice")
        )

        results = await asyncio.gather(
            service.update_info(tender.id, TenderUpdate(name="First"), "alice"),
            service.update_info(tender.id, TenderUpdate(name="Second"), "alice"),
            return_exceptions=True,
        )

        accepted = [r for r in results if not isinstance(r, BaseException)]
        failed = [r for r in results if isinstance(r, BaseException)]
        assert accepted
        assert all(isinstance(e, DomainError) for e in failed)
        assert sorted(r.version for r in accepted) == list(range(2, 2 + len(accepted)))
        [stored] = await service.list_by_creator("alice")
        assert stored.version == 1 + len(accepted)
    finally:
        await engine.dispose()
