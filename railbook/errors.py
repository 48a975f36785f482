"""Error kinds raised inside the reservation core.

Engine and storage boundaries catch ``ReservationError`` and turn it into a result or a
skipped row; ``BookingIdExhaustedError`` is not a ``ReservationError`` and is meant to escape.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    TRAIN_NOT_FOUND = "TRAIN_NOT_FOUND"
    SEAT_OUT_OF_RANGE = "SEAT_OUT_OF_RANGE"
    NO_SEATS_AVAILABLE = "NO_SEATS_AVAILABLE"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    FILE_IO = "FILE_IO"
    DUPLICATE_BOOKING = "DUPLICATE_BOOKING"
    INCONSISTENT_STATE = "INCONSISTENT_STATE"


class ReservationError(Exception):
    kind: ErrorKind = ErrorKind.INVALID_INPUT


class InvalidInputError(ReservationError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str):
        super().__init__(f"Invalid input: {message}")


class TrainNotFoundError(ReservationError):
    kind = ErrorKind.TRAIN_NOT_FOUND

    def __init__(self, train_id: int):
        self.train_id = train_id
        super().__init__(f"Train with ID {train_id} not found!")


class SeatOutOfRangeError(ReservationError):
    kind = ErrorKind.SEAT_OUT_OF_RANGE

    def __init__(self, train_id: int, seat_number: int):
        self.train_id = train_id
        self.seat_number = seat_number
        super().__init__(f"Seat number {seat_number} on train {train_id} is invalid!")


class NoSeatsAvailableError(ReservationError):
    kind = ErrorKind.NO_SEATS_AVAILABLE

    def __init__(self, train_id: int):
        self.train_id = train_id
        super().__init__(f"No seats available on train {train_id}!")


class TicketNotFoundError(ReservationError):
    kind = ErrorKind.TICKET_NOT_FOUND

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Ticket with booking ID {booking_id} not found!")


class DuplicateBookingError(ReservationError):
    kind = ErrorKind.DUPLICATE_BOOKING

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Booking ID {booking_id} already exists!")


class FileIOError(ReservationError):
    kind = ErrorKind.FILE_IO

    def __init__(self, filename: str, operation: str):
        self.filename = filename
        self.operation = operation
        super().__init__(f"Failed to {operation} file: {filename}")


class BookingIdExhaustedError(RuntimeError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique booking ID after {attempts} attempts")
