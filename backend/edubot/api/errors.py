"""
Map service errors onto HTTP errors: NotFoundError → 404, WriteError → 400, other store errors → 500.
"""
import logging
from typing import NoReturn

from fastapi import HTTPException, status

from edubot.errors import NotFoundError, StoreError, WriteError

logger = logging.getLogger(__name__)


def raise_http(e: Exception, failure_message: str) -> NoReturn:
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    if isinstance(e, WriteError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if isinstance(e, StoreError):
        logger.error("%s [%s]: %s", failure_message, e.marker, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_message) from e
    raise e
