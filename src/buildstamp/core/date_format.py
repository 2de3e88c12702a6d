"""Date formatting for ``${BUILD_DATE_FORMATTED,"pattern"}`` blocks.

Version templates carry date patterns written with the letter vocabulary of
Java's SimpleDateFormat (``yyyy-MM-dd``, ``yyMMddHH`` and so on), so patterns
are tokenised here instead of being passed to ``strftime``. Names are always
English so the output does not depend on the process locale.

Supported letters: G y Y M L d D E u w a H k K h m s S z Z X. Text inside
single quotes is literal and ``''`` is a single quote. Any other letter is
copied to the output unchanged.
"""

from collections.abc import Iterator
from datetime import datetime, timedelta

DEFAULT_DATE_PATTERN = "M/d/yy h:mm a"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def tokenize(pattern: str) -> Iterator[tuple[str, str]]:
    """Split a pattern into (letter, run) fields and ("", text) literals."""
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == "'":
            if i + 1 < length and pattern[i + 1] == "'":
                yield "", "'"
                i += 2
                continue
            # Quoted literal runs to the next lone quote ('' inside is a quote)
            literal = []
            i += 1
            while i < length:
                if pattern[i] == "'":
                    if i + 1 < length and pattern[i + 1] == "'":
                        literal.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                literal.append(pattern[i])
                i += 1
            yield "", "".join(literal)
        elif char.isascii() and char.isalpha():
            end = i
            while end < length and pattern[end] == char:
                end += 1
            yield char, pattern[i:end]
            i = end
        else:
            yield "", char
            i += 1


def _number(value: int, width: int) -> str:
    return str(value).zfill(width)


def _offset(delta: timedelta | None, separator: str) -> str:
    if delta is None:
        return ""
    total = int(delta.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _iso_offset(delta: timedelta | None, count: int) -> str:
    if delta is None:
        return ""
    if delta == timedelta(0):
        return "Z"
    if count == 1:
        return _offset(delta, "")[:3]
    return _offset(delta, ":" if count >= 3 else "")


def _text(names: tuple[str, ...], index: int, count: int) -> str:
    name = names[index]
    return name if count >= 4 else name[:3]


def format_field(letter: str, count: int, moment: datetime) -> str:
    """Render one pattern field for `moment`."""
    if letter == "G":
        return "AD"
    if letter in "yY":
        year = moment.isocalendar()[0] if letter == "Y" else moment.year
        if count == 2:
            return _number(year % 100, 2)
        return _number(year, count)
    if letter in "ML":
        if count >= 3:
            return _text(MONTH_NAMES, moment.month - 1, count)
        return _number(moment.month, count)
    if letter == "d":
        return _number(moment.day, count)
    if letter == "D":
        return _number(moment.timetuple().tm_yday, count)
    if letter == "E":
        return _text(DAY_NAMES, moment.weekday(), count)
    if letter == "u":
        return _number(moment.isoweekday(), count)
    if letter == "w":
        return _number(moment.isocalendar()[1], count)
    if letter == "a":
        return "AM" if moment.hour < 12 else "PM"
    if letter == "H":
        return _number(moment.hour, count)
    if letter == "k":
        return _number(moment.hour or 24, count)
    if letter == "K":
        return _number(moment.hour % 12, count)
    if letter == "h":
        return _number(moment.hour % 12 or 12, count)
    if letter == "m":
        return _number(moment.minute, count)
    if letter == "s":
        return _number(moment.second, count)
    if letter == "S":
        return _number(moment.microsecond // 1000, count)
    if letter == "z":
        return moment.tzname() or ""
    if letter == "Z":
        return _offset(moment.utcoffset(), "")
    if letter == "X":
        return _iso_offset(moment.utcoffset(), count)
    return letter * count


def format_date(pattern: str | None, moment: datetime) -> str:
    """Format `moment` with a SimpleDateFormat-style pattern.

    Args:
        pattern: Date pattern; None or empty uses DEFAULT_DATE_PATTERN.
        moment: Timestamp to format.

    Returns:
        The formatted date.
    """
    parts = []
    for letter, text in tokenize(pattern or DEFAULT_DATE_PATTERN):
        if letter:
            parts.append(format_field(letter, len(text), moment))
        else:
            parts.append(text)
    return "".join(parts)
