# simulated card payment, nothing leaves the process
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

from utils.errors import ErrorKind, Result
from utils.logger import get_logger

_logger = get_logger(__name__)

MIN_CARD_NUMBER_LENGTH = 16
MIN_EXPIRY_LENGTH = 5  # "MM/YY"
MIN_CVC_LENGTH = 3


class PaymentState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


def check_card_fields(
    card_number: str, expiry_date: str, cvc: str, card_name: str
) -> Result[None]:
    """Length checks only. No Luhn, expiry or issuer validation."""
    if not (card_number and expiry_date and cvc and card_name):
        return Result.fail(
            ErrorKind.INCOMPLETE_FIELDS, "Please fill in all card details."
        )
    if (
        len(card_number) < MIN_CARD_NUMBER_LENGTH
        or len(expiry_date) < MIN_EXPIRY_LENGTH
        or len(cvc) < MIN_CVC_LENGTH
    ):
        return Result.fail(
            ErrorKind.INVALID_CARD_DETAILS, "Invalid card details provided."
        )
    return Result.ok(message="Payment processed successfully!")


class CheckoutSimulator:
    """
    Resolves a payment after a fixed delay.

    Only one payment may be pending at a time; a submission made while
    another is pending is rejected straight away and leaves it untouched.
    """

    def __init__(self, delay: float = 1.5) -> None:
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._state = PaymentState.IDLE

    @property
    def state(self) -> PaymentState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is PaymentState.PENDING

    async def submit_payment(
        self, card_number: str, expiry_date: str, cvc: str, card_name: str
    ) -> Result[None]:
        if self.pending:
            _logger.warning("Payment submitted while another one is pending.")
            return Result.fail(
                ErrorKind.PAYMENT_IN_PROGRESS,
                "A payment is already being processed. Please wait.",
            )

        self._state = PaymentState.PENDING
        self._task = asyncio.ensure_future(
            self._process(card_number, expiry_date, cvc, card_name)
        )
        # shield: a caller giving up must not leave the simulator stuck pending
        return await asyncio.shield(self._task)

    async def _process(
        self, card_number: str, expiry_date: str, cvc: str, card_name: str
    ) -> Result[None]:
        try:
            await asyncio.sleep(self.delay)
            result = check_card_fields(card_number, expiry_date, cvc, card_name)
        except BaseException:
            self._state = PaymentState.REJECTED
            raise
        self._state = PaymentState.RESOLVED if result else PaymentState.REJECTED
        _logger.info(f"Payment {self._state.value}: {result.message}")
        return result
