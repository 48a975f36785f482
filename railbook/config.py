"""Configuration utilities.

Central place to load environment driven settings (CSV locations, log level, booking id retries).
Avoids scattering os.getenv calls around the codebase.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Settings:
    trains_csv: Path = Path(os.getenv("RAILBOOK_TRAINS_CSV", "trains.csv"))
    tickets_csv: Path = Path(os.getenv("RAILBOOK_TICKETS_CSV", "tickets.csv"))
    log_level: str = os.getenv("RAILBOOK_LOG_LEVEL", "INFO")
    booking_id_attempts: int = int(os.getenv("RAILBOOK_BOOKING_ID_ATTEMPTS", "1000"))
    show_progress: bool = _env_flag("RAILBOOK_SHOW_PROGRESS")


settings = Settings()
