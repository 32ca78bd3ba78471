"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a booking date.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", "15/01/2024"
    - "today", "yesterday", "tomorrow"
    - "N days ago"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    match = re.fullmatch(r"(\d+) days? ago", text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    # Day-first when the first field cannot be a month
    dayfirst = bool(re.match(r"(1[3-9]|2\d|3[01])[/.-]", text))
    try:
        return date_parser.parse(text, dayfirst=dayfirst).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
