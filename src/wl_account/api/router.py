"""wl_account REST API — account directory and balances.

No authentication: the caller is trusted to pass the right account id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_account.application.schemas import CreateAccountRequest
from src.wl_account.application.service import AccountService
from src.wl_common.database import get_db_session
from src.wl_common.response import ApiResponse, request_id_of, success_response

router = APIRouter(prefix="/accounts", tags=["account"])

_service = AccountService()


@router.get("")
async def list_accounts(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_accounts(db)
    return success_response(data, request_id_of(request))


@router.post("")
async def create_account(
    body: CreateAccountRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_account(db, body.display_name, body.initial_deposit)
    return success_response(data, request_id_of(request))


@router.get("/{account_id}")
async def get_account(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_account(db, account_id)
    return success_response(data, request_id_of(request))


@router.get("/{account_id}/balance")
async def get_balance(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, account_id)
    return success_response(data, request_id_of(request))
