import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_app_settings, get_credential_resolver
from ..exceptions import UpstreamProviderError
from ..integrations.google.credentials import CredentialResolver
from ..models.expense import ExpenseRecord
from ..settings import Settings
from .service import SheetAppendService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["expenses"])


def get_append_service(
    settings: Settings = Depends(get_app_settings),
    resolver: CredentialResolver = Depends(get_credential_resolver),
) -> SheetAppendService:
    return SheetAppendService(settings, resolver)


@router.post("/append")
async def append_expense(
    payload: dict[str, Any] | None = Body(None),
    service: SheetAppendService = Depends(get_append_service),
):
    """Append an expense record as a spreadsheet row."""
    record = ExpenseRecord.model_validate(payload or {})

    try:
        updates = await service.append(record)
    except UpstreamProviderError as e:
        logger.error(f"Append row error: {e}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "Internal server error", "details": str(e)},
        )
    return {"success": True, "updates": updates}
