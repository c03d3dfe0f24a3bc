from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    # Sequencing violations.
    no_card_inserted = "no_card_inserted"
    no_card_present = "no_card_present"
    card_already_present = "card_already_present"
    # The card is held by another session.
    card_in_use = "card_in_use"
    pin_not_verified = "pin_not_verified"
    already_authenticated = "already_authenticated"

    # Wrong PIN; the card stays in and the caller may retry.
    invalid_pin = "invalid_pin"

    # Withdrawal validation failures; the session stays authenticated.
    invalid_amount = "invalid_amount"
    insufficient_account_balance = "insufficient_account_balance"
    limit_exceeded = "limit_exceeded"
    insufficient_terminal_cash = "insufficient_terminal_cash"


@dataclass(frozen=True, slots=True)
class CardAccepted:
    pass


@dataclass(frozen=True, slots=True)
class PinAccepted:
    pass


@dataclass(frozen=True, slots=True)
class Dispensed:
    amount: int
    new_balance: int


@dataclass(frozen=True, slots=True)
class CardReturned:
    pass


Payload = CardAccepted | PinAccepted | Dispensed | CardReturned


@dataclass(frozen=True, slots=True)
class Ok:
    payload: Payload

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    kind: ErrorKind

    @property
    def ok(self) -> bool:
        return False


Outcome = Ok | Err
