from __future__ import annotations

from cash_terminal.config import load_config
from cash_terminal.terminal_store import TerminalStore


_STORE: TerminalStore | None = None


def get_store() -> TerminalStore:
    """Process-wide store, created on first use from the environment config."""

    global _STORE
    if _STORE is None:
        _STORE = TerminalStore(config=load_config())
    return _STORE
