"""wl_ledger REST API — deposit and the entry audit trail."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_common.database import get_db_session
from src.wl_common.enums import LedgerEntryKind
from src.wl_common.response import ApiResponse, request_id_of, success_response
from src.wl_ledger.application.schemas import DepositRequest
from src.wl_ledger.application.service import LedgerService

router = APIRouter(prefix="/accounts", tags=["ledger"])

_service = LedgerService()


@router.post("/{account_id}/deposit")
async def deposit(
    account_id: str,
    body: DepositRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.deposit(db, account_id, body.amount)
    return success_response(data, request_id_of(request))


@router.get("/{account_id}/ledger")
async def list_ledger(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    kind: LedgerEntryKind | None = Query(None, description="Filter by entry kind"),
) -> ApiResponse:
    data = await _service.list_ledger(
        db, account_id, cursor, limit, kind.value if kind else None
    )
    return success_response(data, request_id_of(request))
