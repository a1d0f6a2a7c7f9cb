"""Ledger domain specific exceptions."""


class LedgerError(Exception):
    """Base class for transfer rejections. Nothing has been applied when one is raised."""


class InvalidAmountError(LedgerError):
    """Raised when the amount is not a positive value with at most two decimals."""


class SenderNotFoundError(LedgerError):
    """Raised when the sending account does not exist."""


class RecipientNotFoundError(LedgerError):
    """Raised when no account matches the recipient email or id."""


class SelfTransferError(LedgerError):
    """Raised when sender and recipient resolve to the same account."""


class InsufficientFundsError(LedgerError):
    """Raised when the sender's balance does not cover the amount."""

    def __init__(self, available_cents: int, requested_cents: int) -> None:
        super().__init__("Insufficient funds.")
        self.available_cents = available_cents
        self.requested_cents = requested_cents
