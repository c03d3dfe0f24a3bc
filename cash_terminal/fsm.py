from __future__ import annotations

from statemachine import State, StateMachine

from cash_terminal.api.models import TerminalState


class TerminalFSM(StateMachine):
    """Legal transition graph of a cash terminal session.

    Handlers decide *where* to go; the FSM only guards that the move exists:
    - idle -> card_present (card inserted)
    - card_present -> authenticated (PIN verified)
    - card_present | authenticated -> idle (card released: eject or auto-eject)
    """

    idle = State(TerminalState.idle.value, value=TerminalState.idle.value, initial=True)
    card_present = State(TerminalState.card_present.value, value=TerminalState.card_present.value)
    authenticated = State(TerminalState.authenticated.value, value=TerminalState.authenticated.value)

    card_inserted = idle.to(card_present)
    pin_verified = card_present.to(authenticated)
    card_released = card_present.to(idle) | authenticated.to(idle)

    @property
    def terminal_state(self) -> TerminalState:
        return TerminalState(str(self.current_state.value))

    def move_to(self, target: TerminalState) -> None:
        """Fire the event that leads to `target`.

        Raises `statemachine.exceptions.TransitionNotAllowed` if the move is not
        declared from the current state.
        """

        if target == self.terminal_state:
            return
        self.send(_EVENT_FOR_TARGET[target])


_EVENT_FOR_TARGET: dict[TerminalState, str] = {
    TerminalState.card_present: "card_inserted",
    TerminalState.authenticated: "pin_verified",
    TerminalState.idle: "card_released",
}
