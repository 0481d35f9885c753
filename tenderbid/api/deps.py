from fastapi import Request
from sqlalchemy.ext.asyncio import async_sessionmaker
from tenderbid.core.config import Config
from tenderbid.core.logging_config import logger
from tenderbid.services.authorization import AuthorizationChecker
from tenderbid.services.bid_service import BidService
from tenderbid.services.tender_service import TenderService


def build_services(session_factory: async_sessionmaker, config: Config) -> tuple[TenderService, BidService]:
    """Собирает сервисы с явными зависимостями; вызывается при старте приложения."""
    authorization = AuthorizationChecker(config.AUTHORIZATION_POLICY, logger)
    tender_service = TenderService(session_factory, authorization, logger)
    bid_service = BidService(session_factory, authorization, tender_service, logger)
    return tender_service, bid_service


def get_tender_service(request: Request) -> TenderService:
    return request.app.state.tender_service


def get_bid_service(request: Request) -> BidService:
    return request.app.state.bid_service
