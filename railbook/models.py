from dataclasses import dataclass, field
from datetime import datetime

from .errors import InvalidInputError, NoSeatsAvailableError, SeatOutOfRangeError

BOOKING_TIME_FORMAT = "%m/%d/%Y %H:%M:%S"


def _now_text() -> str:
    return datetime.now().strftime(BOOKING_TIME_FORMAT)


@dataclass(slots=True)
class Train:
    """Train with a fixed-size seat map.

    seats[i] describes seat number i + 1; True means the seat is still available.
    The available count is always recomputed from the map, never cached.
    """
    train_id: int
    name: str
    total_seats: int
    seats: list[bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.train_id <= 0:
            raise InvalidInputError("Train ID must be positive")
        if not self.name:
            raise InvalidInputError("Train name cannot be empty")
        if self.total_seats <= 0:
            raise InvalidInputError("Number of seats must be positive")
        self.seats = [True] * self.total_seats

    def _index(self, seat_number: int) -> int:
        if seat_number < 1 or seat_number > self.total_seats:
            raise SeatOutOfRangeError(self.train_id, seat_number)
        return seat_number - 1

    def is_available(self, seat_number: int) -> bool:
        return self.seats[self._index(seat_number)]

    def available_count(self) -> int:
        return sum(1 for seat in self.seats if seat)

    def booked_count(self) -> int:
        return self.total_seats - self.available_count()

    def allocate_first_available(self) -> int:
        for index, available in enumerate(self.seats):
            if available:
                self.seats[index] = False
                return index + 1
        raise NoSeatsAvailableError(self.train_id)

    def allocate_specific(self, seat_number: int) -> bool:
        index = self._index(seat_number)
        if not self.seats[index]:
            return False
        self.seats[index] = False
        return True

    def release(self, seat_number: int) -> bool:
        index = self._index(seat_number)
        if self.seats[index]:
            return False
        self.seats[index] = True
        return True

    def release_all(self) -> None:
        self.seats = [True] * self.total_seats


@dataclass(frozen=True, slots=True)
class Ticket:
    """Issued ticket. booking_time is kept as text so reloaded values survive verbatim."""
    booking_id: str
    train_id: int
    seat_number: int
    passenger_name: str
    booking_time: str = field(default_factory=_now_text)

    def __post_init__(self) -> None:
        if not self.booking_id:
            raise InvalidInputError("Booking ID cannot be empty")
        if self.train_id <= 0:
            raise InvalidInputError("Train ID must be positive")
        if self.seat_number <= 0:
            raise InvalidInputError("Seat number must be positive")
        if not self.passenger_name:
            raise InvalidInputError("Passenger name cannot be empty")


@dataclass(frozen=True, slots=True)
class SeatAvailability:
    train_id: int
    name: str
    available: int
    total: int

    @property
    def fully_booked(self) -> bool:
        return self.available == 0

    @classmethod
    def of(cls, train: Train) -> "SeatAvailability":
        return cls(train.train_id, train.name, train.available_count(), train.total_seats)
