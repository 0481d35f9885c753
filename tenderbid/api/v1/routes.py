from fastapi import APIRouter
from tenderbid.api.v1.endpoints import bids, health, tenders

router = APIRouter(prefix="/api")

router.include_router(health.router, tags=["Health"])
router.include_router(tenders.router, prefix="/tenders", tags=["Tenders"])
router.include_router(bids.router, prefix="/bids", tags=["Bids"])
