from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from tenderbid.api.deps import get_tender_service
from tenderbid.schemas.tenders import TenderCreate, TenderResponse, TenderUpdate
from tenderbid.services.tender_service import TenderService

router = APIRouter()

@router.get("", response_model=List[TenderResponse], summary="Список опубликованных тендеров")
async def get_tenders(
        limit: int = Query(5, ge=0, description="Максимальное число тендеров"),
        offset: int = Query(0, ge=0, description="Сколько тендеров пропустить"),
        service_type: Optional[List[str]] = Query(None, description="Фильтр по типу услуг"),
        service: TenderService = Depends(get_tender_service)
):
    return await service.list_published(service_type, limit, offset)

@router.post("/new", response_model=TenderResponse, summary="Создание тендера")
async def create_tender(tender: TenderCreate, service: TenderService = Depends(get_tender_service)):
    return await service.create(tender)

@router.get("/my", response_model=List[TenderResponse], summary="Тендеры пользователя")
async def get_user_tenders(
        username: str = Query(...),
        limit: int = Query(5, ge=0),
        offset: int = Query(0, ge=0),
        service: TenderService = Depends(get_tender_service)
):
    return await service.list_by_creator(username, limit, offset)

@router.get("/{tender_id}/status", response_class=PlainTextResponse, summary="Статус тендера")
async def get_tender_status(
        tender_id: str,
        username: str = Query(""),
        service: TenderService = Depends(get_tender_service)
):
    status = await service.get_status(tender_id, username)
    return status.value

@router.put("/{tender_id}/status", response_model=TenderResponse, summary="Изменение статуса тендера")
async def update_tender_status(
        tender_id: str,
        status: str = Query(...),
        username: str = Query(...),
        service: TenderService = Depends(get_tender_service)
):
    return await service.update_status(tender_id, status, username)

@router.patch("/{tender_id}/edit", response_model=TenderResponse, summary="Редактирование тендера")
async def edit_tender(
        tender_id: str,
        patch: TenderUpdate,
        username: str = Query(...),
        service: TenderService = Depends(get_tender_service)
):
    return await service.update_info(tender_id, patch, username)

@router.put("/{tender_id}/rollback/{version}", response_model=TenderResponse, summary="Откат версии тендера")
async def rollback_tender(
        tender_id: str,
        version: int,
        username: str = Query(...),
        service: TenderService = Depends(get_tender_service)
):
    return await service.rollback_version(tender_id, version, username)
