"""CSV persistence for trains and tickets.

Files are plain comma separated text without quoting: a comma inside a train or passenger
name corrupts the row. The booking time is the last ticket column and takes the remainder
of the line, so it may contain commas.

Loading is forgiving (bad rows are skipped with a warning); failing to open or read a file
raises ``FileIOError`` before any state is touched. Saving is not atomic: if a write fails
the rows written so far stay on disk.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator

import dacite
from tqdm import tqdm

from ..config import settings
from ..errors import FileIOError, InvalidInputError, NoSeatsAvailableError, ReservationError
from ..ledger import TicketLedger
from ..models import Ticket, Train
from ..registry import TrainRegistry

if TYPE_CHECKING:
    from ..engine import BookingEngine

TRAINS_HEADER = "trainId,trainName,totalSeats,availableSeats"
TICKETS_HEADER = "bookingId,trainId,seatNumber,passengerName,bookingTime"


@dataclass(frozen=True, slots=True)
class TrainRow:
    train_id: int
    name: str
    total_seats: int
    available_seats: int


@dataclass(frozen=True, slots=True)
class TicketRow:
    booking_id: str
    train_id: int
    seat_number: int
    passenger_name: str
    booking_time: str


@dataclass(frozen=True, slots=True)
class LoadReport:
    loaded: int
    skipped: int


# ---------------- line framing -----------------
def _read_lines(path: Path) -> list[str]:
    try:
        f = open(path, 'rt', encoding='utf-8', newline='')
    except OSError as e:
        raise FileIOError(str(path), "open") from e
    with f:
        try:
            text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(str(path), "read") from e
    # only \n ends a row; other Unicode line breaks may appear inside names
    return [line.removesuffix("\r") for line in text.split("\n")]


def _data_lines(lines: list[str], desc: str, show_progress: bool | None) -> Iterator[str]:
    if show_progress is None:
        show_progress = settings.show_progress
    for line in tqdm(lines[1:], desc=desc, disable=not show_progress):
        if line.strip():
            yield line


def _parse_int(token: str, label: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidInputError(f"{label} is not a valid number: {token}") from None


def _split(line: str, labels: list[str], keep_remainder: bool = False) -> list[str]:
    if keep_remainder:
        tokens = line.split(',', len(labels) - 1)
        if len(tokens) == len(labels) - 1:
            # nothing after the last separator: empty trailing field
            tokens.append("")
    else:
        tokens = line.split(',')
    if len(tokens) < len(labels):
        raise InvalidInputError(f"missing {labels[len(tokens)]}")
    return tokens[:len(labels)]


def parse_train_row(line: str) -> TrainRow:
    train_id, name, total_seats, available_seats = _split(
        line, ["train ID", "train name", "total seats", "available seats"])
    data = dict(
        train_id=_parse_int(train_id, "train ID"),
        name=name,
        total_seats=_parse_int(total_seats, "total seats"),
        available_seats=_parse_int(available_seats, "available seats"),
    )
    return dacite.from_dict(data_class=TrainRow, data=data)


def parse_ticket_row(line: str) -> TicketRow:
    booking_id, train_id, seat_number, passenger_name, booking_time = _split(
        line, ["booking ID", "train ID", "seat number", "passenger name", "booking time"], keep_remainder=True)
    data = dict(
        booking_id=booking_id,
        train_id=_parse_int(train_id, "train ID"),
        seat_number=_parse_int(seat_number, "seat number"),
        passenger_name=passenger_name,
        booking_time=booking_time,
    )
    return dacite.from_dict(data_class=TicketRow, data=data)


# ---------------- loading -----------------
def _reconcile(train: Train, available_seats: int) -> None:
    """Mark seats taken, lowest numbers first, until the declared available count is reached."""
    booked = train.total_seats - available_seats
    if booked < 0:
        logging.warning("CSV file declares %d available seats but train %d only has %d",
                        available_seats, train.train_id, train.total_seats)
    for _ in range(booked):
        try:
            train.allocate_first_available()
        except NoSeatsAvailableError:
            logging.warning("CSV file has inconsistent seat data for train %d", train.train_id)
            break


def load_trains(registry: TrainRegistry, path: Path, show_progress: bool | None = None) -> int:
    lines = _read_lines(path)
    trains: list[Train] = []
    for line in _data_lines(lines, "Loading trains", show_progress):
        try:
            row = parse_train_row(line)
            train = Train(row.train_id, row.name, row.total_seats)
        except InvalidInputError as e:
            logging.warning("Error parsing CSV line: %s | line content: %r", e, line)
            continue
        _reconcile(train, row.available_seats)
        trains.append(train)

    registry.replace_all(trains)
    logging.info("Loaded %d trains from %s", len(trains), path)
    return len(trains)


def _place_ticket(registry: TrainRegistry, ledger: TicketLedger, row: TicketRow) -> bool:
    try:
        train = registry.find_mutable_by_id(row.train_id)
        if not train.allocate_specific(row.seat_number):
            logging.warning("Seat %d on train %d is already booked. Skipping ticket: %s",
                            row.seat_number, row.train_id, row.booking_id)
            return False
    except ReservationError as e:
        logging.warning("Skipping ticket %s: %s", row.booking_id, e)
        return False

    try:
        ticket = Ticket(row.booking_id, row.train_id, row.seat_number, row.passenger_name, row.booking_time)
        ledger.insert(row.booking_id, ticket)
    except ReservationError as e:
        train.release(row.seat_number)
        logging.warning("Error creating ticket from CSV: %s", e)
        return False
    return True


def load_tickets(registry: TrainRegistry, ledger: TicketLedger, path: Path,
                 show_progress: bool | None = None) -> LoadReport:
    """Reload the ledger and seat the tickets on their trains.

    Seats reserved by train reconciliation carry no ticket and sit on the lowest seat numbers,
    where they would collide with the tickets being loaded. Each train therefore keeps only its
    booked count: seats are cleared, tickets claim their exact seats, then the remaining booked
    count is re-taken greedily.
    """
    lines = _read_lines(path)
    rows: list[TicketRow] = []
    skipped = 0
    for line in _data_lines(lines, "Loading tickets", show_progress):
        try:
            rows.append(parse_ticket_row(line))
        except InvalidInputError as e:
            logging.warning("Error parsing CSV line: %s | line content: %r", e, line)
            skipped += 1

    ledger.clear()
    declared = [(train, train.booked_count()) for train in registry]
    for train, _ in declared:
        train.release_all()

    loaded = 0
    for row in rows:
        if _place_ticket(registry, ledger, row):
            loaded += 1
        else:
            skipped += 1

    for train, booked in declared:
        extra = booked - train.booked_count()
        if extra < 0 and booked:
            logging.warning("Train %d has %d more tickets than booked seats declared in the trains file",
                            train.train_id, -extra)
        elif extra < 0:
            # nothing was declared booked (e.g. default trains): tickets alone define occupancy
            logging.info("Train %d: %d seats taken by loaded tickets", train.train_id, -extra)
        for _ in range(extra):
            train.allocate_first_available()

    logging.info("Loaded %d tickets from %s", loaded, path)
    if skipped:
        logging.warning("%d tickets could not be loaded due to errors", skipped)
    return LoadReport(loaded, skipped)


# ---------------- saving -----------------
def _write_rows(path: Path, header: str, rows: Iterable[list[str]]) -> int:
    try:
        f = open(path, 'wt', encoding='utf-8', newline='')
    except OSError as e:
        raise FileIOError(str(path), "open for writing") from e
    count = 0
    try:
        with f:
            f.write(header + "\n")
            for row in rows:
                f.write(",".join(row) + "\n")
                count += 1
    except OSError as e:
        raise FileIOError(str(path), "write to") from e
    return count


def _warn_on_separator(kind: str, key: object, value: str) -> None:
    if ',' in value:
        logging.warning("%s %s contains a comma and will not reload cleanly: %r", kind, key, value)


def _train_rows(registry: TrainRegistry) -> Iterator[list[str]]:
    for train in registry:
        _warn_on_separator("Train", train.train_id, train.name)
        yield [str(train.train_id), train.name, str(train.total_seats), str(train.available_count())]


def _ticket_rows(ledger: TicketLedger) -> Iterator[list[str]]:
    for ticket in ledger:
        _warn_on_separator("Ticket", ticket.booking_id, ticket.passenger_name)
        yield [ticket.booking_id, str(ticket.train_id), str(ticket.seat_number),
               ticket.passenger_name, ticket.booking_time]


def save_trains(registry: TrainRegistry, path: Path) -> int:
    count = _write_rows(path, TRAINS_HEADER, _train_rows(registry))
    logging.info("Saved %d trains to %s", count, path)
    return count


def save_tickets(ledger: TicketLedger, path: Path) -> int:
    count = _write_rows(path, TICKETS_HEADER, _ticket_rows(ledger))
    logging.info("Saved %d tickets to %s", count, path)
    return count


# ---------------- process boundaries -----------------
def load_state(engine: "BookingEngine", trains_path: Path, tickets_path: Path) -> None:
    """Best-effort startup load: unreadable files keep the engine's current trains / empty ledger."""
    try:
        load_trains(engine.registry, trains_path)
    except FileIOError as e:
        logging.info("Note: %s. Using default trains.", e)
    try:
        load_tickets(engine.registry, engine.ledger, tickets_path)
    except FileIOError as e:
        logging.info("Note: %s. Starting with no existing bookings.", e)


def save_state(engine: "BookingEngine", trains_path: Path, tickets_path: Path) -> bool:
    """Best-effort shutdown save. Returns False when any of the files could not be written."""
    saved = True
    try:
        save_trains(engine.registry, trains_path)
    except FileIOError as e:
        logging.error("Error: %s. Train data was not saved.", e)
        saved = False
    try:
        save_tickets(engine.ledger, tickets_path)
    except FileIOError as e:
        logging.error("Error: %s. Ticket data was not saved.", e)
        saved = False
    return saved
