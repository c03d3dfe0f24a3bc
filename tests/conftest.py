from __future__ import annotations

import pytest

from cash_terminal.api.models import Account
from cash_terminal.cash import TerminalCash
from cash_terminal.config import TerminalConfig
from cash_terminal.controller import TransactionController


@pytest.fixture(autouse=True)
def _clear_terminal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests hermetic: ignore whatever the developer exported in their shell."""

    monkeypatch.delenv("CASH_TERMINAL_AUTO_EJECT", raising=False)
    monkeypatch.delenv("CASH_TERMINAL_INITIAL_CASH", raising=False)


@pytest.fixture()
def account() -> Account:
    return Account(pin=1234, balance=5000, per_transaction_limit=2000)


@pytest.fixture()
def cash() -> TerminalCash:
    return TerminalCash(available=10_000)


@pytest.fixture()
def controller(cash: TerminalCash) -> TransactionController:
    return TransactionController(cash=cash)


@pytest.fixture()
def auto_eject_controller(cash: TerminalCash) -> TransactionController:
    return TransactionController(cash=cash, config=TerminalConfig(auto_eject_on_success=True))


@pytest.fixture()
def client_and_store():
    """FastAPI TestClient wired to a fresh in-memory store."""

    from fastapi.testclient import TestClient

    from cash_terminal.api.deps import get_store
    from cash_terminal.main import app
    from cash_terminal.terminal_store import TerminalStore

    store = TerminalStore(config=TerminalConfig(initial_cash=10_000))

    def _override() -> TerminalStore:
        return store

    app.dependency_overrides[get_store] = _override
    with TestClient(app) as c:
        yield c, store
    app.dependency_overrides.clear()
