from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeGuard

from cash_terminal.outcomes import ErrorKind


@dataclass(frozen=True, slots=True)
class WithdrawalContext:
    """Inputs available to validators.

    Plain numbers only (no PIN) so it is safe to log. Build it while holding the
    cash lock so `available` is the live value.
    """

    amount: int
    balance: int
    per_transaction_limit: int
    available: int


def is_whole_amount(amount: object) -> TypeGuard[int]:
    """True for plain ints. `bool` is an int subclass but never an amount."""

    return isinstance(amount, int) and not isinstance(amount, bool)


class WithdrawalValidator(ABC):
    """A small, composable check on a requested withdrawal."""

    @abstractmethod
    def validate(self, *, ctx: WithdrawalContext) -> ErrorKind | None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PositiveAmountValidator(WithdrawalValidator):
    def validate(self, *, ctx: WithdrawalContext) -> ErrorKind | None:
        if ctx.amount <= 0:
            return ErrorKind.invalid_amount
        return None


@dataclass(frozen=True, slots=True)
class AccountBalanceValidator(WithdrawalValidator):
    def validate(self, *, ctx: WithdrawalContext) -> ErrorKind | None:
        if ctx.amount > ctx.balance:
            return ErrorKind.insufficient_account_balance
        return None


@dataclass(frozen=True, slots=True)
class TransactionLimitValidator(WithdrawalValidator):
    def validate(self, *, ctx: WithdrawalContext) -> ErrorKind | None:
        if ctx.amount > ctx.per_transaction_limit:
            return ErrorKind.limit_exceeded
        return None


@dataclass(frozen=True, slots=True)
class TerminalCashValidator(WithdrawalValidator):
    def validate(self, *, ctx: WithdrawalContext) -> ErrorKind | None:
        if ctx.amount > ctx.available:
            return ErrorKind.insufficient_terminal_cash
        return None


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[WithdrawalValidator, ...]

    def first_error(self, *, ctx: WithdrawalContext) -> ErrorKind | None:
        """Run validators in order; stop at the first failure."""

        for v in self.validators:
            error = v.validate(ctx=ctx)
            if error is not None:
                return error
        return None


DEFAULT_WITHDRAWAL_PIPELINE = ValidatorPipeline(
    validators=(
        PositiveAmountValidator(),
        AccountBalanceValidator(),
        TransactionLimitValidator(),
        TerminalCashValidator(),
    )
)
