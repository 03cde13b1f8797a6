"""
Small grammar for UTC offsets.

Two spellings are understood:

- offset designators typed by users: ``GMT`` or ``UTC`` (any case), a sign,
  one or two hour digits and an optional minute part written ``:MM`` or
  ``MM`` (``GMT-5``, ``UTC+9``, ``GMT+5:30``, ``utc+0530``)
- base offsets stored in the reference tables: ``+HH:MM`` / ``-HH:MM``
"""

from datetime import timedelta

_PREFIXES = ("GMT", "UTC")


def _is_digits(text: str) -> bool:
    return bool(text) and all(ch in "0123456789" for ch in text)


def _parse_signed_offset(text: str, *, min_hour_digits: int, require_colon: bool) -> timedelta | None:
    """Parse ``<sign><hours>[[:]<minutes>]`` and return the signed offset."""
    if not text or text[0] not in "+-":
        return None
    sign = -1 if text[0] == "-" else 1
    body = text[1:]

    # Two hour digits first, then one, so "+530" still reads as 5:30.
    for hour_digits in (2, 1):
        if hour_digits < min_hour_digits:
            continue
        hours, rest = body[:hour_digits], body[hour_digits:]
        if len(hours) != hour_digits or not _is_digits(hours):
            continue

        if not rest:
            minutes = "00"
        elif rest[0] == ":":
            minutes = rest[1:]
        elif require_colon:
            continue
        else:
            minutes = rest

        if len(minutes) != 2 or not _is_digits(minutes):
            continue
        if int(minutes) > 59:
            return None

        return sign * timedelta(hours=int(hours), minutes=int(minutes))

    return None


def parse_offset_designator(text: str) -> timedelta | None:
    """
    Parse a ``GMT±H[H][[:]MM]`` / ``UTC±H[H][[:]MM]`` designator.

    The sign applies to the whole offset, so ``GMT-3:30`` is minus three and
    a half hours.

    Returns:
        The signed offset, or None when the text is not a designator.
    """
    if text is None:
        return None
    text = text.strip()
    if text[:3].upper() not in _PREFIXES:
        return None
    return _parse_signed_offset(text[3:], min_hour_digits=1, require_colon=False)


def parse_base_offset(text: str) -> timedelta:
    """
    Parse a stored base offset such as ``-05:00`` or ``+05:45``.

    Raises:
        ValueError: If the text is not a well-formed offset
    """
    value = _parse_signed_offset(text.strip(), min_hour_digits=2, require_colon=True)
    if value is None:
        raise ValueError(f"Invalid base offset: {text!r}")
    return value


def format_offset(offset: timedelta) -> str:
    """Format an offset as ``+HH:MM`` / ``-HH:MM``."""
    total_minutes = int(offset.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"
