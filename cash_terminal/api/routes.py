from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from cash_terminal.api.deps import get_store
from cash_terminal.api.models import (
    AccountCreatedResponse,
    AccountCreateRequest,
    InsertCardRequest,
    PinRequest,
    TerminalCreateRequest,
    TerminalView,
    WithdrawalRequest,
    WithdrawalResponse,
)
from cash_terminal.outcomes import Dispensed, Err, Ok, Outcome
from cash_terminal.terminal_store import Terminal, TerminalStore

router = APIRouter()


def _require_terminal(store: TerminalStore, terminal_id: UUID) -> Terminal:
    terminal = store.get_terminal(terminal_id=terminal_id)
    if terminal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Terminal not found")
    return terminal


def _raise_for_error(outcome: Outcome, terminal: Terminal) -> None:
    if isinstance(outcome, Err):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": outcome.kind.value, "state": terminal.controller.state.value},
        )


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/accounts", response_model=AccountCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_account_route(payload: AccountCreateRequest, store: TerminalStore = Depends(get_store)) -> AccountCreatedResponse:
    card_id = store.create_account(
        pin=payload.pin,
        balance=payload.balance,
        per_transaction_limit=payload.per_transaction_limit,
    )
    return AccountCreatedResponse(card_id=card_id)


@router.post("/terminals", response_model=TerminalView, status_code=status.HTTP_201_CREATED)
async def create_terminal_route(payload: TerminalCreateRequest, store: TerminalStore = Depends(get_store)) -> TerminalView:
    terminal = store.create_terminal(cash=payload.cash)
    return store.view(terminal)


@router.get("/terminals/{terminal_id}", response_model=TerminalView)
async def get_terminal_route(terminal_id: UUID, store: TerminalStore = Depends(get_store)) -> TerminalView:
    return store.view(_require_terminal(store, terminal_id))


@router.post("/terminals/{terminal_id}/card", response_model=TerminalView)
async def insert_card_route(
    terminal_id: UUID,
    payload: InsertCardRequest,
    store: TerminalStore = Depends(get_store),
) -> TerminalView:
    terminal = _require_terminal(store, terminal_id)
    account = store.get_account(card_id=payload.card_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Card not found")

    _raise_for_error(terminal.controller.insert_card(account), terminal)
    return store.view(terminal)


@router.post("/terminals/{terminal_id}/pin", response_model=TerminalView)
async def submit_pin_route(
    terminal_id: UUID,
    payload: PinRequest,
    store: TerminalStore = Depends(get_store),
) -> TerminalView:
    terminal = _require_terminal(store, terminal_id)
    _raise_for_error(terminal.controller.submit_pin(payload.pin), terminal)
    return store.view(terminal)


@router.post("/terminals/{terminal_id}/withdrawals", response_model=WithdrawalResponse)
async def withdraw_route(
    terminal_id: UUID,
    payload: WithdrawalRequest,
    store: TerminalStore = Depends(get_store),
) -> WithdrawalResponse:
    terminal = _require_terminal(store, terminal_id)
    outcome = terminal.controller.request_withdrawal(payload.amount)
    _raise_for_error(outcome, terminal)

    assert isinstance(outcome, Ok) and isinstance(outcome.payload, Dispensed)
    dispensed = outcome.payload
    return WithdrawalResponse(
        amount=dispensed.amount,
        new_balance=dispensed.new_balance,
        terminal=store.view(terminal),
    )


@router.post("/terminals/{terminal_id}/eject", response_model=TerminalView)
async def eject_route(terminal_id: UUID, store: TerminalStore = Depends(get_store)) -> TerminalView:
    terminal = _require_terminal(store, terminal_id)
    _raise_for_error(terminal.controller.eject(), terminal)
    return store.view(terminal)
