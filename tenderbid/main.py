from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tenderbid.api.deps import build_services
from tenderbid.api.v1 import routes
from tenderbid.core.config import settings
from tenderbid.core.logging_config import logger
from tenderbid.db.database import AsyncSessionLocal, engine
from tenderbid.services.errors import DomainError, ErrorKind

ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NO_PERMISSION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.DEPENDENCY_FAILURE: 500,
    ErrorKind.STORAGE_UNAVAILABLE: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate()
    app.state.tender_service, app.state.bid_service = build_services(AsyncSessionLocal, settings)
    logger.info(f"Application started, authorization policy: {settings.AUTHORIZATION_POLICY}")
    yield
    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(title="Tender & Bid API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"reason": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"reason": errors})


app.include_router(routes.router)
