from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from cash_terminal.api.models import Account
from cash_terminal.cash import TerminalCash


@contextmanager
def cash_lock(*, cash: TerminalCash) -> Iterator[TerminalCash]:
    """Critical section around a terminal's cash pool.

    Liquidity checks and the deduction that follows them must both run inside
    this block, so no other session can spend the same notes in between.
    """

    cash.lock.acquire()
    try:
        yield cash
    finally:
        cash.lock.release()


@contextmanager
def account_lock(*, account: Account) -> Iterator[Account]:
    """Serialize balance checks and debits on one account across sessions.

    Take it before `cash_lock` when both are needed.
    """

    with account.lock:
        yield account
