"""wl_bet REST API — place, settle and list bets."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.wl_bet.application.schemas import PlaceBetRequest, SettleBetRequest
from src.wl_bet.application.service import (
    OPEN_BETS_DEFAULT_LIMIT,
    OPEN_BETS_MAX_LIMIT,
    BetService,
)
from src.wl_common.database import get_db_session
from src.wl_common.response import ApiResponse, request_id_of, success_response

router = APIRouter(tags=["bet"])

_service = BetService()


@router.post("/accounts/{account_id}/bets")
async def place_bet(
    account_id: str,
    body: PlaceBetRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.place_bet(db, account_id, body.amount)
    return success_response(data, request_id_of(request))


@router.get("/accounts/{account_id}/bets")
async def list_bets(
    account_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.history(db, account_id)
    return success_response(data, request_id_of(request))


# Registered before /bets/{bet_id} so "open" is not captured as an id
@router.get("/bets/open")
async def list_open_bets(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Id of the last bet on the previous page"),
    limit: int = Query(OPEN_BETS_DEFAULT_LIMIT, ge=1, le=OPEN_BETS_MAX_LIMIT),
) -> ApiResponse:
    data = await _service.list_open_bets(db, cursor, limit)
    return success_response(data, request_id_of(request))


@router.get("/bets/{bet_id}")
async def get_bet(
    bet_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_bet(db, bet_id)
    return success_response(data, request_id_of(request))


@router.post("/bets/{bet_id}/settle")
async def settle_bet(
    bet_id: str,
    body: SettleBetRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.settle_bet(db, bet_id, body.result)
    return success_response(data, request_id_of(request))
