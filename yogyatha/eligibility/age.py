"""Age calculator — whole years from an ISO birth date.

Never raises: empty or malformed birth dates give age 0. A future birth
date is a real date and yields a negative age, which fails every age range.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

logger = logging.getLogger(__name__)


def parse_birth_date(value: str | None) -> date | None:
    """Parse `YYYY-MM-DD` (or a full ISO datetime). Returns None if unparseable."""
    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        logger.debug("Unparseable date of birth: %r", value)
        return None


def calculate_age(date_of_birth: str | None, today: date | None = None) -> int:
    """Completed years between `date_of_birth` and `today` (default: current date).

    Compares (month, day) pairs so a 29 February birthday is not reached
    until 1 March in common years.
    """
    birth = parse_birth_date(date_of_birth)
    if birth is None:
        return 0

    today = today or date.today()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age
