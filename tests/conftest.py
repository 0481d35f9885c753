import os
import sys
import uuid
from pathlib import Path

# Движок в tenderbid.db.database создаётся при импорте
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

# Ensure the repo root is on sys.path so `import tenderbid.*` works in tests.
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tenderbid.models import Base, Employee, Organization, OrganizationResponsible
from tenderbid.models.enums import AuthorType, TenderStatus
from tenderbid.schemas.bids import BidCreate
from tenderbid.schemas.tenders import TenderCreate
from tenderbid.services.authorization import AuthorizationChecker, AuthorizationPolicy
from tenderbid.services.bid_service import BidService
from tenderbid.services.tender_service import TenderService

# username -> организации, за которые он отвечает
RESPONSIBILITIES = {
    "alice": ["o1"],
    "bob": ["o2"],
    "carol": ["o2"],
    "erin": ["o3"],
    "dave": [],
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


async def seed_directory(session_factory):
    """Сотрудники, организации и связи ответственных. Возвращает их id."""
    orgs = {key: uuid.uuid4() for key in ("o1", "o2", "o3")}
    users = {username: uuid.uuid4() for username in RESPONSIBILITIES}
    async with session_factory() as db:
        for key, org_id in orgs.items():
            db.add(Organization(id=org_id, name=f"Organization {key.upper()}", type="LLC"))
        for username, user_id in users.items():
            db.add(Employee(id=user_id, username=username, first_name=username.capitalize()))
        await db.flush()
        for username, org_keys in RESPONSIBILITIES.items():
            for key in org_keys:
                db.add(OrganizationResponsible(organization_id=orgs[key], user_id=users[username]))
        await db.commit()
    return {"orgs": orgs, "users": users}


@pytest.fixture
async def seed(session_factory):
    return await seed_directory(session_factory)


@pytest.fixture
def authorization():
    return AuthorizationChecker(AuthorizationPolicy.ORG_SCOPED)


@pytest.fixture
def tender_service(session_factory, authorization):
    return TenderService(session_factory, authorization)


@pytest.fixture
def bid_service(session_factory, authorization, tender_service):
    return BidService(session_factory, authorization, tender_service)


@pytest.fixture
def make_tender(tender_service, seed):
    async def _make(name="Office network", service_type="IT", org="o1", username="alice", publish=False):
        tender = await tender_service.create(
            TenderCreate(
                name=name,
                description=f"{name} description",
                service_type=service_type,
                organization_id=seed["orgs"][org],
                creator_username=username,
            )
        )
        if publish:
            tender = await tender_service.update_status(tender.id, TenderStatus.PUBLISHED, username)
        return tender

    return _make


@pytest.fixture
def make_bid(bid_service, seed):
    async def _make(tender_id, name="Offer", org="o2", author="bob"):
        return await bid_service.create(
            BidCreate(
                name=name,
                description=f"{name} description",
                tender_id=tender_id,
                organization_id=seed["orgs"][org],
                author_type=AuthorType.USER,
                author_id=seed["users"][author],
            )
        )

    return _make
