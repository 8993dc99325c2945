import logging
from functools import wraps
from http import HTTPStatus
from fastapi import HTTPException

from filmorate_api.core.result import Failure, FailureKind

log = logging.getLogger(__name__)

FAILURE_STATUS: dict[FailureKind, HTTPStatus] = {
    FailureKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    FailureKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    FailureKind.STATE_CONFLICT: HTTPStatus.CONFLICT,
}


def raise_for_failure(value):
    """Failure -> HTTPException с кодом по виду ошибки, иначе value как есть."""
    if isinstance(value, Failure):
        raise HTTPException(status_code=FAILURE_STATUS[value.kind],
                            detail=value.message)
    return value


def handle_failures(fn):
    """
    Разворачивает Result из сервиса в ответ эндпоинта.
    Failure -> 400/404/409, RuntimeError (нарушение контракта хранилища)
    -> 500 internal_error.
    """
    @wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            result = await fn(*args, **kwargs)
        except RuntimeError:
            log.exception("internal_error")
            raise HTTPException(
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                detail="internal_error")
        return raise_for_failure(result)
    return wrapper


def not_found_if_none(value, detail: str = "not_found"):
    """Если результат None — бросаем 404."""
    if value is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=detail)
    return value
