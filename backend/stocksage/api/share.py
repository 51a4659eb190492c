"""REST API for creating and reading shared conversation snapshots."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from stocksage.models.share import SharedRecord, ShareLink
from stocksage.services.share import build_share_service, get_share_store
from stocksage.services.share.base import ShareStore
from stocksage.services.share.errors import (
    MissingShareIdError,
    ShareNotFoundError,
    ShareValidationError,
)
from stocksage.services.share.service import ShareService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_store() -> ShareStore:
    return get_share_store()


def get_share_service(store: ShareStore = Depends(get_store)) -> ShareService:
    return build_share_service(store)


@router.post("", response_model=ShareLink)
async def create_share(request: Request, service: ShareService = Depends(get_share_service)):
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid messages data")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid messages data")

    try:
        return service.create(
            body.get("messages"),
            title=body.get("title"),
            origin=str(request.base_url),
        )
    except ShareValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Error creating shared conversation")
        raise HTTPException(status_code=500, detail="Failed to create shared conversation")


@router.get("", response_model=SharedRecord)
async def get_share(
    share_id: str | None = Query(default=None, alias="id"),
    service: ShareService = Depends(get_share_service),
):
    try:
        return service.retrieve(share_id)
    except MissingShareIdError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ShareNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"Error reading shared conversation {share_id}")
        raise HTTPException(status_code=500, detail="Failed to load shared conversation")
