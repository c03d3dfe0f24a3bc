from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from cash_terminal.api.models import Account
from cash_terminal.cash import TerminalCash
from cash_terminal.controller import TransactionController
from cash_terminal.outcomes import Err, ErrorKind, Ok


def _authenticated(*, cash: TerminalCash, account: Account) -> TransactionController:
    controller = TransactionController(cash=cash)
    controller.insert_card(account)
    controller.submit_pin(account.pin)
    return controller


def _race(n: int, fn):  # type: ignore[no-untyped-def]
    barrier = threading.Barrier(n)

    def _run(_: int):  # type: ignore[no-untyped-def]
        barrier.wait()
        return fn()

    with ThreadPoolExecutor(max_workers=n) as pool:
        return list(pool.map(_run, range(n)))


def test_concurrent_withdrawals_on_one_account_never_overdraw() -> None:
    account = Account(pin=1234, balance=100, per_transaction_limit=5000)
    cash = TerminalCash(available=5000)
    controller = _authenticated(cash=cash, account=account)

    outcomes = _race(2, lambda: controller.request_withdrawal(60))

    assert sum(1 for o in outcomes if o.ok) == 1
    assert Err(ErrorKind.insufficient_account_balance) in outcomes
    assert account.balance == 40
    assert cash.available == 4940


def test_concurrent_sessions_never_overdraw_shared_cash() -> None:
    cash = TerminalCash(available=1000)
    controllers = [
        _authenticated(cash=cash, account=Account(pin=i, balance=10_000, per_transaction_limit=10_000))
        for i in range(8)
    ]
    it = iter(controllers)
    lock = threading.Lock()

    def _withdraw():  # type: ignore[no-untyped-def]
        with lock:
            c = next(it)
        return c.request_withdrawal(300)

    outcomes = _race(len(controllers), _withdraw)

    dispensed = [o for o in outcomes if isinstance(o, Ok)]
    assert len(dispensed) == 3
    assert all(o == Err(ErrorKind.insufficient_terminal_cash) for o in outcomes if not o.ok)
    assert cash.available == 100


def test_hammering_one_session_conserves_money() -> None:
    account = Account(pin=1, balance=1000, per_transaction_limit=1000)
    cash = TerminalCash(available=700)
    controller = _authenticated(cash=cash, account=account)

    def _burst():  # type: ignore[no-untyped-def]
        return [controller.request_withdrawal(7) for _ in range(50)]

    results = [o for batch in _race(10, _burst) for o in batch]
    paid = sum(o.payload.amount for o in results if isinstance(o, Ok))

    assert paid == 700
    assert cash.available == 0
    assert account.balance == 300
    assert account.balance >= 0 and cash.available >= 0


def test_one_card_races_into_many_terminals() -> None:
    account = Account(pin=1234, balance=100, per_transaction_limit=5000)
    controllers = [TransactionController(cash=TerminalCash(available=5000)) for _ in range(6)]
    it = iter(controllers)
    lock = threading.Lock()

    def _insert():  # type: ignore[no-untyped-def]
        with lock:
            c = next(it)
        return c.insert_card(account)

    outcomes = _race(len(controllers), _insert)

    assert sum(1 for o in outcomes if o.ok) == 1
    assert all(o == Err(ErrorKind.card_in_use) for o in outcomes if not o.ok)


def test_two_terminals_one_account_never_overdraw() -> None:
    for _ in range(50):
        account = Account(pin=1234, balance=100, per_transaction_limit=5000)
        cashes = [TerminalCash(available=5000), TerminalCash(available=5000)]
        controllers = [TransactionController(cash=c) for c in cashes]
        it = iter(controllers)
        lock = threading.Lock()

        def _session():  # type: ignore[no-untyped-def]
            with lock:
                c = next(it)
            c.insert_card(account)
            c.submit_pin(1234)
            return c.request_withdrawal(60)

        outcomes = _race(2, _session)

        dispensed = [o for o in outcomes if isinstance(o, Ok)]
        assert len(dispensed) == 1
        assert account.balance == 40
        assert sum(5000 - c.available for c in cashes) == 60
