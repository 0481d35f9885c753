from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from tenderbid.api.deps import get_bid_service
from tenderbid.schemas.bids import BidCreate, BidResponse, BidReviewResponse, BidUpdate
from tenderbid.services.bid_service import BidService

router = APIRouter()

@router.post("/new", response_model=BidResponse, summary="Создание предложения")
async def create_bid(bid: BidCreate, service: BidService = Depends(get_bid_service)):
    return await service.create(bid)

@router.get("/my", response_model=List[BidResponse], summary="Предложения пользователя")
async def get_user_bids(
        username: str = Query(...),
        limit: int = Query(5, ge=0),
        offset: int = Query(0, ge=0),
        service: BidService = Depends(get_bid_service)
):
    return await service.list_by_author(username, limit, offset)

@router.get("/{tender_id}/list", response_model=List[BidResponse], summary="Предложения по тендеру")
async def get_tender_bids(
        tender_id: str,
        limit: int = Query(5, ge=0),
        offset: int = Query(0, ge=0),
        service: BidService = Depends(get_bid_service)
):
    return await service.list_by_tender(tender_id, limit, offset)

@router.get("/{bid_id}/status", response_class=PlainTextResponse, summary="Статус предложения")
async def get_bid_status(
        bid_id: str,
        username: str = Query(...),
        service: BidService = Depends(get_bid_service)
):
    status = await service.get_status(bid_id, username)
    return status.value

@router.put("/{bid_id}/status", response_model=BidResponse, summary="Изменение статуса предложения")
async def update_bid_status(
        bid_id: str,
        status: str = Query(...),
        username: str = Query(...),
        service: BidService = Depends(get_bid_service)
):
    return await service.update_status(bid_id, status, username)

@router.patch("/{bid_id}/edit", response_model=BidResponse, summary="Редактирование предложения")
async def edit_bid(
        bid_id: str,
        patch: BidUpdate,
        username: str = Query(...),
        service: BidService = Depends(get_bid_service)
):
    return await service.update(bid_id, username, patch)

@router.put("/{bid_id}/submit_decision", response_model=BidResponse, summary="Решение по предложению")
async def submit_decision(
        bid_id: str,
        decision: str = Query(...),
        username: str = Query(...),
        service: BidService = Depends(get_bid_service)
):
    return await service.submit_decision(bid_id, decision, username)

@router.put("/{bid_id}/feedback", response_model=BidResponse, summary="Отзыв на предложение")
async def send_feedback(
        bid_id: str,
        bid_feedback: str = Query(..., alias="bidFeedback", max_length=1000),
        username: str = Query(...),
        service: BidService = Depends(get_bid_service)
):
    return await service.send_feedback(bid_id, bid_feedback, username)

@router.put("/{bid_id}/rollback/{version}", response_model=BidResponse, summary="Откат версии предложения")
async def rollback_bid(
        bid_id: str,
        version: int,
        username: str = Query(...),
        service: BidService = Depends(get_bid_service)
):
    return await service.rollback_version(bid_id, version, username)

@router.get("/{tender_id}/reviews", response_model=List[BidReviewResponse], summary="Отзывы на предложения автора")
async def get_bid_reviews(
        tender_id: str,
        author_username: str = Query(..., alias="authorUsername"),
        requester_username: str = Query(..., alias="requesterUsername"),
        limit: int = Query(5, ge=0),
        offset: int = Query(0, ge=0),
        service: BidService = Depends(get_bid_service)
):
    return await service.get_reviews(tender_id, author_username, requester_username, limit, offset)
