"""Interactive menu for the reservation system.

Usage:

   railbook --trains-csv trains.csv --tickets-csv tickets.csv

Data is loaded on start (falling back to the default trains) and saved when the user picks 0.
"""
import argparse
import logging
from pathlib import Path
from typing import Callable, Sequence

from .config import settings
from .engine import BookingEngine
from .logging_config import setup_logging
from .rendering import render_availability, render_menu, render_ticket, render_trains
from .storage.csv_store import load_state, save_state

MAX_INT_INPUT = 10000

ReadLine = Callable[[str], str]
Write = Callable[[str], None]


def parse_int_input(raw: str) -> int | None:
    """Digits only, 0..MAX_INT_INPUT. Logs the reason and returns None otherwise."""
    raw = raw.strip()
    if not raw:
        logging.error("Invalid input: input is empty")
        return None
    if not raw.isdigit() or not raw.isascii():
        logging.error("Invalid input: input contains non-numeric characters")
        return None
    value = int(raw)
    if value > MAX_INT_INPUT:
        logging.error("Invalid input: input is out of reasonable range (0-%d)", MAX_INT_INPUT)
        return None
    return value


def _prompt(read_line: ReadLine, text: str) -> str:
    try:
        return read_line(text)
    except EOFError:
        return ""


def _read_train_id(read_line: ReadLine) -> int | None:
    train_id = parse_int_input(_prompt(read_line, "Enter Train ID: "))
    if not train_id:
        return None
    return train_id


def _read_booking_id(read_line: ReadLine) -> str | None:
    booking_id = _prompt(read_line, "Enter Booking ID: ").strip()
    if not booking_id:
        logging.error("Error: Booking ID cannot be empty.")
        return None
    return booking_id


# ---------------- menu actions -----------------
def _display_trains(engine: BookingEngine, read_line: ReadLine, write: Write) -> None:
    write(render_trains(engine.list_trains()))


def _check_availability(engine: BookingEngine, read_line: ReadLine, write: Write) -> None:
    if (train_id := _read_train_id(read_line)) is None:
        return
    outcome = engine.check_seat_availability(train_id)
    if outcome.ok:
        write(render_availability(outcome.value))


def _book_ticket(engine: BookingEngine, read_line: ReadLine, write: Write) -> None:
    if (train_id := _read_train_id(read_line)) is None:
        return
    passenger_name = _prompt(read_line, "Enter Passenger Name: ")
    if not passenger_name.strip():
        logging.error("Error: Passenger name cannot be empty.")
        return
    outcome = engine.book_ticket(train_id, passenger_name)
    if not outcome.ok:
        write("Ticket booking failed.")
        return
    write("Ticket booked successfully!")
    write(render_ticket(engine.check_ticket_status(outcome.value).value))


def _cancel_ticket(engine: BookingEngine, read_line: ReadLine, write: Write) -> None:
    if (booking_id := _read_booking_id(read_line)) is None:
        return
    if engine.cancel_ticket(booking_id).ok:
        write(f"Ticket with Booking ID {booking_id} cancelled successfully!")


def _ticket_status(engine: BookingEngine, read_line: ReadLine, write: Write) -> None:
    if (booking_id := _read_booking_id(read_line)) is None:
        return
    outcome = engine.check_ticket_status(booking_id)
    if outcome.ok:
        write("Ticket found! Here are the details:")
        write(render_ticket(outcome.value))


_ACTIONS: dict[int, Callable[[BookingEngine, ReadLine, Write], None]] = {
    1: _display_trains,
    2: _check_availability,
    3: _book_ticket,
    4: _cancel_ticket,
    5: _ticket_status,
}


def run_session(engine: BookingEngine, trains_path: Path, tickets_path: Path,
                read_line: ReadLine = input, write: Write = print) -> None:
    while True:
        write(render_menu())
        try:
            raw = read_line("Enter your choice: ")
        except EOFError:
            # end of input behaves like an explicit exit
            raw = "0"
        choice = parse_int_input(raw)
        if choice is None:
            write("Please try again.")
            continue
        if choice == 0:
            save_state(engine, trains_path, tickets_path)
            write("Thank you for using Railway Reservation System. Goodbye!")
            return
        action = _ACTIONS.get(choice)
        if action is None:
            write("Invalid choice. Please enter a number between 0 and 5.")
            continue
        action(engine, read_line, write)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Railway seat reservation system")
    p.add_argument("--trains-csv", type=Path, default=settings.trains_csv, help="Trains CSV file")
    p.add_argument("--tickets-csv", type=Path, default=settings.tickets_csv, help="Tickets CSV file")
    p.add_argument("--log-level", default=settings.log_level)
    return p


def main_cli(argv: Sequence[str] | None = None, read_line: ReadLine = input, write: Write = print) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        engine = BookingEngine.with_default_trains()
        write("Welcome to Railway Reservation System!")
        load_state(engine, args.trains_csv, args.tickets_csv)
        run_session(engine, args.trains_csv, args.tickets_csv, read_line=read_line, write=write)
    except Exception:  # noqa: BLE001
        logging.exception("Critical error. The application will now exit.")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main_cli())
