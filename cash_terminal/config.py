from __future__ import annotations

import os
from dataclasses import dataclass


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

DEFAULT_INITIAL_CASH = 20_000


@dataclass(frozen=True, slots=True)
class TerminalConfig:
    # Return to Idle right after a successful withdrawal instead of waiting for eject().
    auto_eject_on_success: bool = False
    # Cash loaded into terminals created without an explicit amount.
    initial_cash: int = DEFAULT_INITIAL_CASH


def get_auto_eject() -> bool:
    raw = os.environ.get("CASH_TERMINAL_AUTO_EJECT", "").strip().casefold()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"Invalid CASH_TERMINAL_AUTO_EJECT value: {raw!r}")


def get_initial_cash() -> int:
    raw = os.environ.get("CASH_TERMINAL_INITIAL_CASH")
    if raw is None or not raw.strip():
        return DEFAULT_INITIAL_CASH
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Invalid CASH_TERMINAL_INITIAL_CASH value: {raw!r}") from e
    if value < 0:
        raise ValueError("CASH_TERMINAL_INITIAL_CASH must be >= 0")
    return value


def load_config() -> TerminalConfig:
    return TerminalConfig(auto_eject_on_success=get_auto_eject(), initial_cash=get_initial_cash())
