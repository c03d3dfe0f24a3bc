from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from cash_terminal.api.models import Account, TerminalState
from cash_terminal.controller import TransactionController
from cash_terminal.outcomes import Outcome


IntentName = Literal["pin", "withdraw", "eject"]
Intent = tuple[Any, ...]


def run_session(
    *,
    controller: TransactionController,
    account: Account,
    steps: Iterable[Intent],
    eject_when_done: bool = True,
) -> list[Outcome]:
    """Insert a card and replay caller intents until the terminal is idle again.

    `steps` are what a front end would collect from the user, e.g.
    `[("pin", 1234), ("withdraw", 500), ("eject",)]`. Remaining steps are ignored
    once the session ends. If the steps run out first and `eject_when_done` is set,
    the card is returned so the session always ends idle.
    """

    outcomes = [controller.insert_card(account)]
    if not outcomes[0].ok:
        return outcomes

    for step in steps:
        if controller.state == TerminalState.idle:
            break
        name: IntentName = step[0]
        if name == "pin":
            outcomes.append(controller.submit_pin(step[1]))
        elif name == "withdraw":
            outcomes.append(controller.request_withdrawal(step[1]))
        elif name == "eject":
            outcomes.append(controller.eject())
        else:
            raise ValueError(f"Unknown intent: {name}")

    if eject_when_done and controller.state != TerminalState.idle:
        outcomes.append(controller.eject())
    return outcomes
