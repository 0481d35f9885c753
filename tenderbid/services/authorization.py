import uuid
from enum import Enum
from logging import Logger

from sqlalchemy.ext.asyncio import AsyncSession
from tenderbid.core.logging_config import logger
from tenderbid.crud import organizations as organizations_crud
from tenderbid.services.errors import NoPermissionError


class AuthorizationPolicy(str, Enum):
    # ответственный именно за организацию, от имени которой выполняется действие
    ORG_SCOPED = "org_scoped"
    # ответственный за любую организацию
    ANY_ORG = "any_org"


class AuthorizationChecker:
    """
    Единственная проверка прав в системе: пользователь ответственный за организацию.

    Отсутствие связи - это `False`, а не ошибка. Ошибки хранилища не
    перехватываются и доходят до вызывающего как есть.
    """

    def __init__(self, policy: AuthorizationPolicy | str = AuthorizationPolicy.ORG_SCOPED, log: Logger = logger):
        self.policy = AuthorizationPolicy(policy)
        self.log = log

    async def is_responsible(self, db: AsyncSession, username: str, organization_id: uuid.UUID) -> bool:
        if not username:
            return False
        return await organizations_crud.is_user_responsible(db, username, organization_id)

    async def is_responsible_for_any(self, db: AsyncSession, username: str) -> bool:
        if not username:
            return False
        return await organizations_crud.is_user_responsible_for_any(db, username)

    async def ensure_responsible(self, db: AsyncSession, username: str, organization_id: uuid.UUID) -> None:
        if not await self.is_responsible(db, username, organization_id):
            self.log.warning(f"User {username} is not responsible for organization {organization_id}")
            raise NoPermissionError(f"User {username} is not responsible for the organization")

    async def ensure_can_act(self, db: AsyncSession, username: str, organization_id: uuid.UUID) -> None:
        """Проверка по настроенной политике для решений, отзывов и откатов."""
        if self.policy is AuthorizationPolicy.ORG_SCOPED:
            await self.ensure_responsible(db, username, organization_id)
            return
        if not await self.is_responsible_for_any(db, username):
            self.log.warning(f"User {username} is not responsible for any organization")
            raise NoPermissionError(f"User {username} is not responsible for any organization")
