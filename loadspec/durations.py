"""Duration strings in the "1h30m" / "1.5s" / "250ms" notation, as integer nanoseconds."""

import re

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

# Longer units first so "ms" is not read as "m" followed by garbage.
_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> int:
    """Parse a duration such as "300ms", "-1.5h" or "2h45m" into nanoseconds.

    Every component needs a unit; the only unitless value accepted is "0".
    Raises ValueError for anything else.
    """
    value = text.strip()
    rest = value
    sign = 1
    if rest[:1] in ("-", "+"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise ValueError(f"invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if not match or not (match.group(1) or match.group(2)):
            raise ValueError(f"invalid duration {text!r}")
        whole, frac, unit = match.groups()
        scale = _UNITS[unit]
        total += int(whole or 0) * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        pos = match.end()
    return sign * total


def _with_fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10 ** precision)
    text = str(whole)
    if frac:
        text += "." + f"{frac:0{precision}d}".rstrip("0")
    return text


def format_duration(nanos: int) -> str:
    """Format nanoseconds the way Go prints a time.Duration.

    >>> format_duration(90 * SECOND)
    '1m30s'
    >>> format_duration(1500 * MICROSECOND)
    '1.5ms'
    """
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    n = abs(nanos)

    if n < MICROSECOND:
        return f"{sign}{n}ns"
    if n < MILLISECOND:
        return f"{sign}{_with_fraction(n, 3)}µs"
    if n < SECOND:
        return f"{sign}{_with_fraction(n, 6)}ms"

    text = _with_fraction(n % MINUTE, 9) + "s"
    minutes = n // MINUTE
    if minutes:
        text = f"{minutes % 60}m" + text
        hours = minutes // 60
        if hours:
            text = f"{hours}h" + text
    return sign + text
