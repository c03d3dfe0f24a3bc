from __future__ import annotations

import logging
import threading
from typing import Any

from cash_terminal.api.models import Account, TerminalState
from cash_terminal.cash import TerminalCash
from cash_terminal.config import TerminalConfig
from cash_terminal.fsm import TerminalFSM
from cash_terminal.handlers import Operation, handler_for
from cash_terminal.outcomes import Err, Outcome

logger = logging.getLogger(__name__)


class TransactionController:
    """One session against a cash terminal.

    Every operation:
    - looks up the handler for (current state, operation)
    - invokes it
    - applies the returned state and card binding
    - returns the outcome (`Ok` / `Err`), never raises for domain errors

    Calls on the same controller are serialized; the cash pool has its own lock
    so controllers sharing one terminal cannot overdraw it.
    """

    def __init__(self, *, cash: TerminalCash, config: TerminalConfig | None = None):
        self._cash = cash
        self._config = config or TerminalConfig()
        self._fsm = TerminalFSM()
        self._account: Account | None = None
        self._lock = threading.RLock()

    @property
    def state(self) -> TerminalState:
        return self._fsm.terminal_state

    @property
    def account(self) -> Account | None:
        return self._account

    @property
    def cash(self) -> TerminalCash:
        return self._cash

    @property
    def config(self) -> TerminalConfig:
        return self._config

    def insert_card(self, account: Account) -> Outcome:
        return self._dispatch(Operation.insert_card, account)

    def submit_pin(self, pin: int) -> Outcome:
        return self._dispatch(Operation.submit_pin, pin)

    def request_withdrawal(self, amount: int) -> Outcome:
        return self._dispatch(Operation.request_withdrawal, amount)

    def eject(self) -> Outcome:
        return self._dispatch(Operation.eject, None)

    def _dispatch(self, operation: Operation, arg: Any) -> Outcome:
        with self._lock:
            before = self.state
            previous = self._account
            step = handler_for(before, operation)(self, arg)

            self._fsm.move_to(step.next_state)
            self._account = step.account
            if previous is not None and previous is not step.account:
                previous.release(self)

            if isinstance(step.outcome, Err):
                logger.debug("rejected %s in %s: %s", operation.value, before.value, step.outcome.kind.value)
            elif step.next_state != before:
                logger.info("terminal %s -> %s on %s", before.value, step.next_state.value, operation.value)
            return step.outcome
