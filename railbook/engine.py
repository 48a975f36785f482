"""Booking engine: owns the train registry and the ticket ledger.

Every public operation returns an ``Outcome``. Expected failures (unknown train, full train,
unknown booking...) are logged and reported through ``Outcome.error``; anything else propagates.
Seats allocated during a failed booking are always released before returning or re-raising.
"""
import logging
import random
from dataclasses import dataclass
from typing import Any

from .config import settings
from .errors import ErrorKind, InvalidInputError, ReservationError
from .ledger import TicketLedger
from .models import SeatAvailability, Ticket, Train
from .registry import TrainRegistry

DEFAULT_TRAINS: tuple[tuple[int, str, int], ...] = (
    (1001, "Express Delhi", 100),
    (1002, "Mumbai Local", 100),
    (1003, "Chennai Mail", 100),
    (1004, "Kolkata Express", 100),
)


@dataclass(frozen=True, slots=True)
class Outcome:
    value: Any = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, exc: ReservationError) -> "Outcome":
        logging.error("Error: %s", exc)
        return cls(error=exc.kind, message=str(exc))


class BookingEngine:
    def __init__(self, registry: TrainRegistry | None = None, ledger: TicketLedger | None = None):
        self.registry = registry if registry is not None else TrainRegistry()
        self.ledger = ledger if ledger is not None else TicketLedger()

    @classmethod
    def with_default_trains(cls, rng: random.Random | None = None) -> "BookingEngine":
        registry = TrainRegistry(Train(train_id, name, seats) for train_id, name, seats in DEFAULT_TRAINS)
        return cls(registry, TicketLedger(rng=rng, max_attempts=settings.booking_id_attempts))

    # ---------------- queries -----------------
    def list_trains(self) -> list[SeatAvailability]:
        return [SeatAvailability.of(train) for train in self.registry]

    def check_seat_availability(self, train_id: int) -> Outcome:
        try:
            train = self.registry.find_by_id(train_id)
        except ReservationError as e:
            return Outcome.failure(e)
        return Outcome(SeatAvailability.of(train))

    def check_ticket_status(self, booking_id: str) -> Outcome:
        try:
            ticket = self.ledger.find(booking_id)
        except ReservationError as e:
            return Outcome.failure(e)
        return Outcome(ticket)

    # ---------------- commands -----------------
    def book_ticket(self, train_id: int, passenger_name: str) -> Outcome:
        passenger_name = passenger_name.strip() if passenger_name else ""
        try:
            if not passenger_name:
                raise InvalidInputError("Passenger name cannot be empty")
            train = self.registry.find_mutable_by_id(train_id)
            seat_number = train.allocate_first_available()
        except ReservationError as e:
            return Outcome.failure(e)

        try:
            booking_id = self.ledger.generate_booking_id()
            ticket = Ticket(booking_id, train_id, seat_number, passenger_name)
            self.ledger.insert(booking_id, ticket)
        except ReservationError as e:
            train.release(seat_number)
            return Outcome.failure(e)
        except Exception:
            train.release(seat_number)
            raise

        logging.info("Booked seat %d on train %d for %s (%s)", seat_number, train_id, passenger_name, booking_id)
        return Outcome(booking_id)

    def cancel_ticket(self, booking_id: str) -> Outcome:
        try:
            ticket = self.ledger.find(booking_id)
            train = self.registry.find_mutable_by_id(ticket.train_id)
            released = train.release(ticket.seat_number)
        except ReservationError as e:
            return Outcome.failure(e)

        if not released:
            message = (f"Seat {ticket.seat_number} on train {ticket.train_id} was already available; "
                       f"ticket {booking_id} kept")
            logging.error("Failed to cancel seat: %s", message)
            return Outcome(error=ErrorKind.INCONSISTENT_STATE, message=message)

        self.ledger.remove(booking_id)
        logging.info("Ticket with booking ID %s cancelled", booking_id)
        return Outcome(ticket)
