import logging
import random
import string
from typing import Iterator

from .errors import BookingIdExhaustedError, DuplicateBookingError, TicketNotFoundError
from .models import Ticket

BOOKING_ID_PREFIX = "BK"
BOOKING_ID_ALPHABET = string.ascii_uppercase + string.digits
BOOKING_ID_RANDOM_LENGTH = 8
DEFAULT_MAX_ATTEMPTS = 1000


class TicketLedger:
    """Booking ID -> Ticket mapping, kept in insertion order."""

    def __init__(self, rng: random.Random | None = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self._tickets: dict[str, Ticket] = {}
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def __contains__(self, booking_id: object) -> bool:
        return booking_id in self._tickets

    def __iter__(self) -> Iterator[Ticket]:
        return iter(self._tickets.values())

    def __len__(self) -> int:
        return len(self._tickets)

    def _candidate(self) -> str:
        return BOOKING_ID_PREFIX + "".join(self.rng.choices(BOOKING_ID_ALPHABET, k=BOOKING_ID_RANDOM_LENGTH))

    def generate_booking_id(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self._candidate()
            if candidate not in self._tickets:
                return candidate
            logging.debug("Booking ID collision on attempt %d: %s", attempt, candidate)
        raise BookingIdExhaustedError(self.max_attempts)

    def insert(self, booking_id: str, ticket: Ticket) -> None:
        if booking_id in self._tickets:
            raise DuplicateBookingError(booking_id)
        self._tickets[booking_id] = ticket

    def remove(self, booking_id: str) -> Ticket:
        try:
            return self._tickets.pop(booking_id)
        except KeyError:
            raise TicketNotFoundError(booking_id) from None

    def find(self, booking_id: str) -> Ticket:
        try:
            return self._tickets[booking_id]
        except KeyError:
            raise TicketNotFoundError(booking_id) from None

    def clear(self) -> None:
        self._tickets.clear()
