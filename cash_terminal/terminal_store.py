from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from uuid import UUID, uuid4

from cash_terminal.api.models import Account, TerminalView
from cash_terminal.cash import TerminalCash
from cash_terminal.config import TerminalConfig
from cash_terminal.controller import TransactionController

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Terminal:
    terminal_id: UUID
    cash: TerminalCash
    controller: TransactionController


class TerminalStore:
    """In-memory registry of accounts (by card id) and terminals.

    Nothing is persisted; a process restart starts from scratch.
    """

    def __init__(self, *, config: TerminalConfig | None = None):
        self.config = config or TerminalConfig()
        self._accounts: dict[UUID, Account] = {}
        # id(account) -> card id; accounts live as long as the store, so ids are stable.
        self._card_ids: dict[int, UUID] = {}
        self._terminals: dict[UUID, Terminal] = {}
        self._lock = threading.Lock()

    def create_account(self, *, pin: int, balance: int, per_transaction_limit: int) -> UUID:
        account = Account(pin=pin, balance=balance, per_transaction_limit=per_transaction_limit)
        card_id = uuid4()
        with self._lock:
            self._accounts[card_id] = account
            self._card_ids[id(account)] = card_id
        logger.info("issued card %s", card_id)
        return card_id

    def get_account(self, *, card_id: UUID) -> Account | None:
        with self._lock:
            return self._accounts.get(card_id)

    def card_id_for(self, account: Account | None) -> UUID | None:
        if account is None:
            return None
        # Identity, not equality: two accounts may hold identical numbers.
        with self._lock:
            return self._card_ids.get(id(account))

    def create_terminal(self, *, cash: int | None = None) -> Terminal:
        pool = TerminalCash(available=self.config.initial_cash if cash is None else cash)
        terminal = Terminal(
            terminal_id=uuid4(),
            cash=pool,
            controller=TransactionController(cash=pool, config=self.config),
        )
        with self._lock:
            self._terminals[terminal.terminal_id] = terminal
        logger.info("created terminal %s with cash %d", terminal.terminal_id, pool.available)
        return terminal

    def get_terminal(self, *, terminal_id: UUID) -> Terminal | None:
        with self._lock:
            return self._terminals.get(terminal_id)

    def view(self, terminal: Terminal) -> TerminalView:
        return TerminalView(
            terminal_id=terminal.terminal_id,
            state=terminal.controller.state,
            available_cash=terminal.cash.available,
            card_id=self.card_id_for(terminal.controller.account),
        )
