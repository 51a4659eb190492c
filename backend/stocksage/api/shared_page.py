"""Read-only page served at the share URL."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from stocksage.api.share import get_share_service
from stocksage.services.share.errors import ShareError, ShareNotFoundError
from stocksage.services.share.service import ShareService
from stocksage.viewer import NOT_FOUND_MESSAGE, FETCH_FAILED_MESSAGE, ViewState, ViewStatus, render

router = APIRouter()


@router.get("/{share_id}", response_class=PlainTextResponse)
async def shared_conversation_page(share_id: str, service: ShareService = Depends(get_share_service)):
    try:
        record = service.retrieve(share_id)
    except ShareNotFoundError:
        state = ViewState(ViewStatus.ERROR, error=NOT_FOUND_MESSAGE, not_found=True)
        return PlainTextResponse(render(state), status_code=404)
    except ShareError:
        state = ViewState(ViewStatus.ERROR, error=FETCH_FAILED_MESSAGE)
        return PlainTextResponse(render(state), status_code=400)

    return PlainTextResponse(render(ViewState(ViewStatus.SUCCESS, record=record)))
