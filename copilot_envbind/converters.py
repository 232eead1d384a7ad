# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""String-to-value converters for scalar, duration and datetime fields.

All parsers raise ValueError on malformed input. Empty strings convert to
the type's zero value.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .fields import TIME_FORMAT_KEY, TIME_LOCATION_KEY, TIME_UTC_KEY

TRUE_VALUES = frozenset({"1", "t", "T", "true", "TRUE", "True", "YES", "yes", "Y", "y"})
FALSE_VALUES = frozenset({"0", "f", "F", "false", "FALSE", "False", "NO", "no", "N", "n"})

DEFAULT_TIME_FORMAT = "rfc3339"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND

_DURATION_UNITS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,  # micro sign
    "μs": _MICROSECOND,  # greek mu
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": 60 * _SECOND,
    "h": 3600 * _SECOND,
}
_DURATION_PART_RE = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")

_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def parse_bool(value: str) -> bool:
    """Parse a boolean with the extended truthy/falsy vocabulary."""
    if value == "":
        return False
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"invalid syntax for bool: {value!r}")


def parse_int(value: str) -> int:
    if value == "":
        return 0
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid syntax for int: {value!r}")
    return int(value)


def parse_uint(value: str) -> int:
    if value == "":
        return 0
    if not _UINT_RE.fullmatch(value):
        raise ValueError(f"invalid syntax for unsigned int: {value!r}")
    return int(value)


def parse_float(value: str) -> float:
    if value == "":
        return 0.0
    if value.strip() != value:
        raise ValueError(f"invalid syntax for float: {value!r}")
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"invalid syntax for float: {value!r}") from None


def parse_duration(value: str) -> timedelta:
    """Parse a duration literal such as "300ms", "1h30m" or "-1.5h".

    A duration is an optionally signed sequence of decimal numbers, each with
    a unit suffix: ns, us (or µs), ms, s, m, h. A bare "0" is also accepted.
    Precision below one microsecond is truncated.

    Args:
        value: Duration literal

    Returns:
        The duration; an empty string yields timedelta(0)

    Raises:
        ValueError: If the literal is malformed or a number has no unit
    """
    if value == "":
        return timedelta(0)

    text = value
    negative = False
    if text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if match is None or match.group(1) in ("", "."):
            raise ValueError(f"invalid duration {value!r}")
        total += Decimal(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if negative:
        total = -total
    try:
        return timedelta(microseconds=int(total / _MICROSECOND))
    except OverflowError:
        raise ValueError(f"invalid duration {value!r}") from None


@dataclass(frozen=True)
class TimeOptions:
    """Per-field options for datetime parsing.

    Attributes:
        layout: "rfc3339", "unix", "unixnano" or a ``strptime`` format
        utc: Interpret zone-less values as UTC
        location: IANA zone name for zone-less values; overrides ``utc``
    """
    layout: str = DEFAULT_TIME_FORMAT
    utc: bool = False
    location: Optional[str] = None

    @classmethod
    def from_tags(cls, tags: Mapping[str, str]) -> "TimeOptions":
        """Build options from a field's side-channel annotations.

        A missing or unparseable ``time_utc`` annotation is treated as false.
        """
        try:
            utc = parse_bool(tags.get(TIME_UTC_KEY, ""))
        except ValueError:
            utc = False
        return cls(
            layout=tags.get(TIME_FORMAT_KEY) or DEFAULT_TIME_FORMAT,
            utc=utc,
            location=tags.get(TIME_LOCATION_KEY) or None,
        )

    def zone(self) -> Optional[tzinfo]:
        """Zone for zone-less values, or None for naive local time."""
        if self.location:
            try:
                return ZoneInfo(self.location)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"unknown time zone {self.location!r}") from exc
        if self.utc:
            return timezone.utc
        return None


def parse_time(value: str, options: Optional[TimeOptions] = None) -> datetime:
    """Parse a datetime according to the field's time options.

    The "unix" and "unixnano" layouts read an integer epoch in seconds or
    nanoseconds. Values that carry their own UTC offset keep it; zone-less
    values get the zone from the options, or stay naive (local time).

    Args:
        value: Timestamp text
        options: Time options (defaults to RFC 3339)

    Returns:
        Parsed datetime; an empty string yields ``datetime.min``

    Raises:
        ValueError: If the value does not match the layout or the zone is unknown
    """
    if value == "":
        return datetime.min

    options = options or TimeOptions()
    zone = options.zone()
    layout = options.layout.lower()

    if layout in ("unix", "unixnano"):
        stamp = parse_int(value)
        nanos = 0
        if layout == "unixnano":
            stamp, nanos = divmod(stamp, _SECOND)
        try:
            parsed = datetime.fromtimestamp(stamp, zone)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {value!r}") from exc
        return parsed + timedelta(microseconds=nanos // _MICROSECOND)

    if layout == DEFAULT_TIME_FORMAT:
        parsed = _parse_rfc3339(value)
    else:
        parsed = datetime.strptime(value, options.layout)

    if parsed.tzinfo is None and zone is not None:
        parsed = parsed.replace(tzinfo=zone)
    return parsed


def _parse_rfc3339(value: str) -> datetime:
    match = _RFC3339_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    year, month, day, hour, minute, second, fraction, offset = match.groups()
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))

    if offset in ("Z", "z"):
        zone: tzinfo = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        zone = timezone(sign * timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6])))

    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second), microsecond,
        tzinfo=zone,
    )
