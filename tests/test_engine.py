"""
Unit tests for the booking engine: booking, cancellation and rollback on failure.

Each test builds its own engine so no state leaks between cases.
"""

import random
import unittest
from unittest import mock

from railbook.engine import DEFAULT_TRAINS, BookingEngine
from railbook.errors import BookingIdExhaustedError, ErrorKind
from railbook.ledger import TicketLedger
from railbook.models import SeatAvailability, Train
from railbook.registry import TrainRegistry


class TestBooking(unittest.TestCase):

    def setUp(self):
        self.engine = BookingEngine.with_default_trains(rng=random.Random(1))

    def available(self, train_id: int) -> int:
        return self.engine.registry.find_by_id(train_id).available_count()

    def test_default_trains(self):
        self.assertEqual(self.engine.registry.ids(), [t[0] for t in DEFAULT_TRAINS])
        self.assertTrue(all(s.total == 100 and s.available == 100 for s in self.engine.list_trains()))

    def test_book_then_cancel_scenario(self):
        outcome = self.engine.book_ticket(1001, "Alice")
        self.assertTrue(outcome.ok)
        booking_id = outcome.value

        status = self.engine.check_ticket_status(booking_id)
        self.assertEqual(status.value.seat_number, 1)
        self.assertEqual(status.value.passenger_name, "Alice")
        self.assertEqual(self.available(1001), 99)

        cancelled = self.engine.cancel_ticket(booking_id)
        self.assertTrue(cancelled.ok)
        self.assertEqual(cancelled.value.booking_id, booking_id)
        self.assertEqual(self.available(1001), 100)
        self.assertEqual(self.engine.check_ticket_status(booking_id).error, ErrorKind.TICKET_NOT_FOUND)

    def test_single_seat_train(self):
        self.engine.registry.add(Train(2001, "Tiny", 1))
        first = self.engine.book_ticket(2001, "Alice")
        self.assertTrue(first.ok)
        self.assertEqual(self.engine.check_ticket_status(first.value).value.seat_number, 1)
        self.assertEqual(self.available(2001), 0)

        second = self.engine.book_ticket(2001, "Bob")
        self.assertFalse(second.ok)
        self.assertEqual(second.error, ErrorKind.NO_SEATS_AVAILABLE)
        self.assertEqual(self.available(2001), 0)
        self.assertEqual(len(self.engine.ledger), 1)

    def test_blank_passenger_name_has_no_effect(self):
        for name in ("", "   "):
            outcome = self.engine.book_ticket(1001, name)
            self.assertEqual(outcome.error, ErrorKind.INVALID_INPUT)
        self.assertEqual(self.available(1001), 100)
        self.assertEqual(len(self.engine.ledger), 0)

    def test_passenger_name_is_trimmed(self):
        outcome = self.engine.book_ticket(1001, "  Alice  ")
        self.assertEqual(self.engine.check_ticket_status(outcome.value).value.passenger_name, "Alice")

    def test_unknown_train(self):
        outcome = self.engine.book_ticket(4242, "Alice")
        self.assertEqual(outcome.error, ErrorKind.TRAIN_NOT_FOUND)
        self.assertIn("4242", outcome.message)
        self.assertEqual(len(self.engine.ledger), 0)

    def test_booking_ids_are_unique_and_resolvable(self):
        ids = [self.engine.book_ticket(1002, f"Passenger {n}").value for n in range(60)]
        self.assertEqual(len(set(ids)), 60)
        for booking_id in ids:
            self.assertTrue(self.engine.check_ticket_status(booking_id).ok)
        seats = sorted(self.engine.check_ticket_status(b).value.seat_number for b in ids)
        self.assertEqual(seats, list(range(1, 61)))

    def test_counts_add_up_after_mixed_operations(self):
        ids = [self.engine.book_ticket(1003, "X").value for _ in range(10)]
        for booking_id in ids[::3]:
            self.engine.cancel_ticket(booking_id)
        for train in self.engine.registry:
            self.assertEqual(train.available_count() + train.booked_count(), train.total_seats)
        self.assertEqual(self.available(1003), 100 - len(self.engine.ledger))

    def test_cancelled_seat_is_reused_first(self):
        ids = [self.engine.book_ticket(1001, "X").value for _ in range(3)]
        self.engine.cancel_ticket(ids[1])
        again = self.engine.book_ticket(1001, "Y")
        self.assertEqual(self.engine.check_ticket_status(again.value).value.seat_number, 2)

    def test_check_seat_availability(self):
        self.engine.book_ticket(1004, "Alice")
        outcome = self.engine.check_seat_availability(1004)
        self.assertEqual(outcome.value, SeatAvailability(1004, "Kolkata Express", 99, 100))
        self.assertEqual(self.engine.check_seat_availability(1).error, ErrorKind.TRAIN_NOT_FOUND)


class TestBookingRollback(unittest.TestCase):
    """A failure after the seat was taken must give the seat back."""

    def setUp(self):
        self.train = Train(1001, "Express Delhi", 3)
        self.engine = BookingEngine(TrainRegistry([self.train]), TicketLedger(rng=random.Random(5)))

    def test_invalid_ticket_releases_seat(self):
        with mock.patch.object(self.engine.ledger, "generate_booking_id", return_value=""):
            outcome = self.engine.book_ticket(1001, "Alice")
        self.assertEqual(outcome.error, ErrorKind.INVALID_INPUT)
        self.assertEqual(self.train.available_count(), 3)
        self.assertEqual(len(self.engine.ledger), 0)

    def test_duplicate_booking_id_releases_seat(self):
        first = self.engine.book_ticket(1001, "Alice").value
        with mock.patch.object(self.engine.ledger, "generate_booking_id", return_value=first):
            outcome = self.engine.book_ticket(1001, "Bob")
        self.assertEqual(outcome.error, ErrorKind.DUPLICATE_BOOKING)
        self.assertEqual(self.train.available_count(), 2)
        self.assertEqual(self.engine.check_ticket_status(first).value.passenger_name, "Alice")

    def test_unexpected_failure_releases_seat_and_propagates(self):
        self.engine.ledger.max_attempts = 1
        self.engine.book_ticket(1001, "Alice")
        self.engine.ledger.rng = random.Random(5)
        with self.assertRaises(BookingIdExhaustedError):
            self.engine.book_ticket(1001, "Bob")
        self.assertEqual(self.train.available_count(), 2)
        self.assertEqual(len(self.engine.ledger), 1)


class TestCancellation(unittest.TestCase):

    def setUp(self):
        self.engine = BookingEngine.with_default_trains(rng=random.Random(2))
        self.booking_id = self.engine.book_ticket(1001, "Alice").value

    def test_unknown_booking(self):
        outcome = self.engine.cancel_ticket("BKNOTHERE1")
        self.assertEqual(outcome.error, ErrorKind.TICKET_NOT_FOUND)
        self.assertEqual(len(self.engine.ledger), 1)

    def test_missing_train_keeps_ticket(self):
        self.engine.registry.replace_all([])
        outcome = self.engine.cancel_ticket(self.booking_id)
        self.assertEqual(outcome.error, ErrorKind.TRAIN_NOT_FOUND)
        self.assertIn(self.booking_id, self.engine.ledger)

    def test_seat_already_free_keeps_ticket(self):
        self.engine.registry.find_mutable_by_id(1001).release(1)
        with self.assertLogs(level="ERROR"):
            outcome = self.engine.cancel_ticket(self.booking_id)
        self.assertEqual(outcome.error, ErrorKind.INCONSISTENT_STATE)
        self.assertIn(self.booking_id, self.engine.ledger)
        self.assertEqual(self.engine.registry.find_by_id(1001).available_count(), 100)

    def test_double_cancel(self):
        self.assertTrue(self.engine.cancel_ticket(self.booking_id).ok)
        self.assertEqual(self.engine.cancel_ticket(self.booking_id).error, ErrorKind.TICKET_NOT_FOUND)
        self.assertEqual(self.engine.registry.find_by_id(1001).available_count(), 100)


if __name__ == '__main__':
    unittest.main()
