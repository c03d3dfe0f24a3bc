from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass(slots=True)
class TerminalCash:
    """Physical cash pool of one terminal.

    Shared by every session running against the terminal. Mutate it only while
    holding `cash_lock(cash=...)`.
    """

    available: int
    lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.available < 0:
            raise ValueError("Terminal cash must be >= 0")

    def dispense(self, amount: int) -> int:
        if amount <= 0:
            raise ValueError("Dispensed amount must be > 0")
        if amount > self.available:
            raise ValueError("Terminal cash would go negative")
        self.available -= amount
        return self.available
