"""
Vote day helpers.

Normalizes the day selections stored alongside vote sessions (disabled
days) into a list of weekday codes.

Dependencies: json, logging (stdlib)
System role: Shared parsing for day-code payloads
"""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DAY_CODES = ("MON", "TUE", "WED", "THU", "FRI")

KOREAN_DAY_MARKERS = {
    "월)": "MON",
    "화)": "TUE",
    "수)": "WED",
    "목)": "THU",
    "금)": "FRI",
}


def parse_vote_days(selected_days: Any) -> list[str]:
    """
    Parse a day selection into a list of strings.

    Accepts None, a list, or a JSON-encoded list. Empty and non-string
    entries are dropped. Malformed JSON yields an empty list.

    Args:
        selected_days: Raw value from a request body or a stored column

    Returns:
        list[str]: Day entries in their original order
    """
    if not selected_days:
        return []

    if isinstance(selected_days, (list, tuple)):
        return [day for day in selected_days if isinstance(day, str) and day]

    if isinstance(selected_days, str):
        try:
            parsed = json.loads(selected_days)
        except json.JSONDecodeError as e:
            logger.warning(
                f"{__name__}:parse_vote_days - Unparseable day selection: {e}",
                extra={"selected_days": selected_days[:200]},
            )
            return []
        if isinstance(parsed, list):
            return [day for day in parsed if isinstance(day, str) and day]
        return []

    return []


def convert_korean_date_to_day_code(label: str) -> str:
    """
    Map a Korean date label such as "11/3(월)" to its day code ("MON").

    Labels without a weekday marker (including codes that are already
    English) are returned unchanged.
    """
    for marker, code in KOREAN_DAY_MARKERS.items():
        if marker in label:
            return code
    return label


def normalize_day_codes(selected_days: Any) -> list[str]:
    """
    Parse, convert Korean labels, upper-case and de-duplicate day codes.

    Raises:
        ValueError: If an entry is not a Monday-to-Friday code
    """
    codes: list[str] = []
    for day in parse_vote_days(selected_days):
        code = convert_korean_date_to_day_code(day.strip()).upper()
        if code not in DAY_CODES:
            raise ValueError(f"Unknown vote day: {day}")
        if code not in codes:
            codes.append(code)
    return codes
