from __future__ import annotations

import threading
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class TerminalState(StrEnum):
    idle = "idle"
    card_present = "card_present"
    authenticated = "authenticated"


class Account(BaseModel):
    """Card holder account as seen by the terminal.

    The caller owns the instance; a controller only borrows it while the card is
    inside, and at most one session holds it at a time (`claim` / `release`).
    Balance is only ever lowered through `debit`, under `lock`.
    """

    model_config = ConfigDict(validate_assignment=True)

    # Never rendered in reprs or logs.
    pin: int = Field(..., repr=False)
    balance: int = Field(..., ge=0)
    per_transaction_limit: int = Field(..., ge=0)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)
    _holder: object | None = PrivateAttr(default=None)

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def claim(self, holder: object) -> bool:
        """Bind the card to `holder`; False if another session already has it."""

        with self._lock:
            if self._holder is not None and self._holder is not holder:
                return False
            self._holder = holder
            return True

    def release(self, holder: object) -> None:
        with self._lock:
            if self._holder is holder:
                self._holder = None

    def check_pin(self, pin: int) -> bool:
        return self.pin == pin

    def debit(self, amount: int) -> int:
        if amount <= 0:
            raise ValueError("Debit amount must be > 0")
        if amount > self.balance:
            raise ValueError("Account balance would go negative")
        self.balance -= amount
        return self.balance


class AccountCreateRequest(BaseModel):
    pin: int = Field(..., ge=0)
    balance: int = Field(..., ge=0)
    per_transaction_limit: int = Field(..., ge=0)


class AccountCreatedResponse(BaseModel):
    card_id: UUID


class TerminalCreateRequest(BaseModel):
    # Falls back to the configured initial cash.
    cash: int | None = Field(default=None, ge=0)


class TerminalView(BaseModel):
    terminal_id: UUID
    state: TerminalState
    available_cash: int
    card_id: UUID | None = None


class InsertCardRequest(BaseModel):
    card_id: UUID


class PinRequest(BaseModel):
    pin: int = Field(..., strict=True)


class WithdrawalRequest(BaseModel):
    # Strict: no bool/str/float coercion. Non-positive amounts are rejected by the
    # terminal itself, not by the schema.
    amount: int = Field(..., strict=True)


class WithdrawalResponse(BaseModel):
    amount: int
    new_balance: int
    terminal: TerminalView
