"""Text rendering of menus, train tables and tickets via jinja2 templates."""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import SeatAvailability, Ticket

TEMPLATES_DIR = Path(__file__).resolve().parent / 'templates'

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(['html', 'xml']),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_menu() -> str:
    return _env.get_template('menu.txt.j2').render()


def render_trains(trains: list[SeatAvailability]) -> str:
    return _env.get_template('trains.txt.j2').render(trains=trains)


def render_availability(availability: SeatAvailability) -> str:
    return _env.get_template('availability.txt.j2').render(train=availability)


def render_ticket(ticket: Ticket) -> str:
    return _env.get_template('ticket.txt.j2').render(ticket=ticket)
