from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from cash_terminal.api.models import Account, TerminalState
from cash_terminal.lock import account_lock, cash_lock
from cash_terminal.outcomes import CardAccepted, CardReturned, Dispensed, Err, ErrorKind, Ok, Outcome, PinAccepted
from cash_terminal.withdrawal.validators import DEFAULT_WITHDRAWAL_PIPELINE, WithdrawalContext, is_whole_amount

if TYPE_CHECKING:
    from cash_terminal.controller import TransactionController


class Operation(StrEnum):
    insert_card = "insert_card"
    submit_pin = "submit_pin"
    request_withdrawal = "request_withdrawal"
    eject = "eject"


@dataclass(frozen=True, slots=True)
class Step:
    """What a handler decided: the session's next state, its card, and the outcome."""

    next_state: TerminalState
    account: Account | None
    outcome: Outcome


Handler = Callable[["TransactionController", Any], Step]


def _stay(ctl: TransactionController, outcome: Outcome) -> Step:
    return Step(next_state=ctl.state, account=ctl.account, outcome=outcome)


def _reject(kind: ErrorKind) -> Handler:
    def handler(ctl: TransactionController, _arg: Any) -> Step:
        return _stay(ctl, Err(kind))

    handler.__name__ = f"reject_{kind.value}"
    return handler


def _release(ctl: TransactionController, _arg: Any) -> Step:
    return Step(next_state=TerminalState.idle, account=None, outcome=Ok(CardReturned()))


def _accept_card(ctl: TransactionController, account: Account) -> Step:
    if not account.claim(ctl):
        return _stay(ctl, Err(ErrorKind.card_in_use))
    return Step(next_state=TerminalState.card_present, account=account, outcome=Ok(CardAccepted()))


def _verify_pin(ctl: TransactionController, pin: int) -> Step:
    assert ctl.account is not None
    if not ctl.account.check_pin(pin):
        return _stay(ctl, Err(ErrorKind.invalid_pin))
    return Step(next_state=TerminalState.authenticated, account=ctl.account, outcome=Ok(PinAccepted()))


def _withdraw(ctl: TransactionController, amount: object) -> Step:
    account = ctl.account
    assert account is not None
    if not is_whole_amount(amount):
        return _stay(ctl, Err(ErrorKind.invalid_amount))

    with account_lock(account=account), cash_lock(cash=ctl.cash) as cash:
        ctx = WithdrawalContext(
            amount=amount,
            balance=account.balance,
            per_transaction_limit=account.per_transaction_limit,
            available=cash.available,
        )
        error = DEFAULT_WITHDRAWAL_PIPELINE.first_error(ctx=ctx)
        if error is not None:
            return _stay(ctl, Err(error))

        new_balance = account.debit(amount)
        cash.dispense(amount)

    outcome = Ok(Dispensed(amount=amount, new_balance=new_balance))
    if ctl.config.auto_eject_on_success:
        return Step(next_state=TerminalState.idle, account=None, outcome=outcome)
    return _stay(ctl, outcome)


# Every (state, operation) pair has an entry.
HANDLERS: dict[tuple[TerminalState, Operation], Handler] = {
    (TerminalState.idle, Operation.insert_card): _accept_card,
    (TerminalState.idle, Operation.submit_pin): _reject(ErrorKind.no_card_inserted),
    (TerminalState.idle, Operation.request_withdrawal): _reject(ErrorKind.no_card_inserted),
    (TerminalState.idle, Operation.eject): _reject(ErrorKind.no_card_present),
    (TerminalState.card_present, Operation.insert_card): _reject(ErrorKind.card_already_present),
    (TerminalState.card_present, Operation.submit_pin): _verify_pin,
    (TerminalState.card_present, Operation.request_withdrawal): _reject(ErrorKind.pin_not_verified),
    (TerminalState.card_present, Operation.eject): _release,
    (TerminalState.authenticated, Operation.insert_card): _reject(ErrorKind.card_already_present),
    (TerminalState.authenticated, Operation.submit_pin): _reject(ErrorKind.already_authenticated),
    (TerminalState.authenticated, Operation.request_withdrawal): _withdraw,
    (TerminalState.authenticated, Operation.eject): _release,
}


def handler_for(state: TerminalState, operation: Operation) -> Handler:
    return HANDLERS[(state, operation)]
