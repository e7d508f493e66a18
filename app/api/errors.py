# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.domain.exceptions import StorageError
from app.domain.validation import ValidationResult
from app.utils.logging import get_logger

logger = get_logger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    #{"quantity": "Quantity must be greater than zero"}
    result = ValidationResult.from_errors(exc.errors())
    return JSONResponse(status_code=400, content=result.as_dict())


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return JSONResponse(status_code=503, content={"detail": exc.message})


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} database error")
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
