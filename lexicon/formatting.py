"""Positional message formatting with locale-aware numbers and dates.

Patterns follow the classic MessageFormat grammar::

    Hello, {0}! You have {1,number,integer} new messages since {2,date,short}.

Placeholders are ``{index}``, ``{index,type}`` or ``{index,type,style}``:

======  ===========================================================
type    styles
======  ===========================================================
number  (none), ``integer``, ``percent``, ``currency``, CLDR pattern
date    (none = medium), ``short``, ``medium``, ``long``, ``full``,
        CLDR pattern
time    same as ``date``
======  ===========================================================

Untyped placeholders format by argument type: numbers use the locale's
decimal format, dates and datetimes its short format, everything else
``str()``.

Quoting: ``''`` is a literal apostrophe and text between single quotes is
copied literally, so ``'{0}'`` renders as ``{0}``.

Number and date rendering is delegated to Babel.
"""

from __future__ import annotations

import contextlib
import datetime
import decimal
import functools
import logging
import numbers
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterator, Sequence, Union

import babel
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from lexicon.errors import MessageFormatError
from lexicon.models import DEFAULT_LOCALE, Locale

logger = logging.getLogger("lexicon.formatting")

FORMAT_TYPES = ("number", "date", "time")
DATE_STYLES = ("short", "medium", "long", "full")
INTEGER_PATTERN = "#,##0"
# extra significant digits for fraction quantization and percent scaling
PRECISION_HEADROOM = 16


@dataclass(frozen=True)
class Placeholder:
    """A parsed ``{index,type,style}`` element."""

    index: int
    type: str = ""
    style: str = ""
    position: int = 0


def parse_pattern(pattern: str) -> list[Union[str, Placeholder]]:
    """Split a pattern into literal text and placeholders.

    Raises:
        MessageFormatError: On unmatched braces, unterminated quotes, bad
            argument indexes, or unknown format types.
    """
    parts: list[Union[str, Placeholder]] = []
    text: list[str] = []
    # index, type, style of the placeholder being read
    segments: list[list[str]] = [[], [], []]
    part = 0
    in_quote = False
    depth = 0
    start = 0

    i = 0
    length = len(pattern)
    while i < length:
        ch = pattern[i]
        if part == 0:
            if ch == "'":
                if i + 1 < length and pattern[i + 1] == "'":
                    text.append("'")
                    i += 1
                else:
                    in_quote = not in_quote
            elif in_quote:
                text.append(ch)
            elif ch == "{":
                part = 1
                start = i
                segments = [[], [], []]
            elif ch == "}":
                raise MessageFormatError("Unmatched '}' in pattern", pattern, i)
            else:
                text.append(ch)
        elif in_quote:
            segments[part - 1].append(ch)
            if ch == "'":
                in_quote = False
        elif ch == ",":
            if part < 3:
                part += 1
            else:
                segments[2].append(ch)
        elif ch == "{":
            depth += 1
            segments[part - 1].append(ch)
        elif ch == "}":
            if depth == 0:
                if text:
                    parts.append("".join(text))
                    text = []
                parts.append(_make_placeholder(segments, pattern, start))
                part = 0
            else:
                depth -= 1
                segments[part - 1].append(ch)
        else:
            if ch == "'":
                in_quote = True
            segments[part - 1].append(ch)
        i += 1

    if part != 0:
        raise MessageFormatError("Unmatched braces in pattern", pattern, start)
    if in_quote:
        raise MessageFormatError("Unterminated quote in pattern", pattern)
    if text:
        parts.append("".join(text))
    return parts


def _make_placeholder(segments: list[list[str]], pattern: str, position: int) -> Placeholder:
    index_text, type_text, style_text = ("".join(s).strip() for s in segments)

    if not (index_text.isascii() and index_text.isdigit()):
        raise MessageFormatError(
            f"Invalid argument index '{index_text}'", pattern, position
        )
    format_type = type_text.lower()
    if format_type and format_type not in FORMAT_TYPES:
        raise MessageFormatError(
            f"Unknown format type '{type_text}'", pattern, position
        )
    if style_text and not format_type:
        raise MessageFormatError(
            "Format style given without a format type", pattern, position
        )
    return Placeholder(int(index_text), format_type, style_text, position)


@functools.lru_cache(maxsize=64)
def get_babel_locale(tag: str) -> babel.Locale:
    """Map a locale tag to a Babel locale.

    Tries the full tag, then the language alone, then ``en_US``.
    """
    language = tag.split("_", 1)[0]
    for candidate in (tag, language):
        if not candidate:
            continue
        try:
            return babel.Locale.parse(candidate)
        except (babel.UnknownLocaleError, ValueError):
            continue
    logger.debug("No formatting data for locale %r, using %s", tag, DEFAULT_LOCALE.tag)
    return babel.Locale.parse(DEFAULT_LOCALE.tag)


class MessageFormatter:
    """Formats patterns for one locale.

    A formatter keeps no state between calls; the registry still builds a
    new one for every formatted lookup.
    """

    def __init__(self, locale: Locale = DEFAULT_LOCALE):
        self.locale = locale
        self._babel = get_babel_locale(locale.tag)

    def format(self, pattern: str, arguments: Sequence[Any] = ()) -> str:
        """Substitute ``arguments`` into ``pattern``.

        Raises:
            MessageFormatError: If the pattern is malformed, references an
                argument index that was not supplied, or an argument cannot
                be rendered with the requested type.
        """
        out = []
        for part in parse_pattern(pattern):
            if isinstance(part, str):
                out.append(part)
                continue
            if part.index >= len(arguments):
                raise MessageFormatError(
                    f"Pattern references argument {{{part.index}}} but only "
                    f"{len(arguments)} argument(s) were supplied",
                    pattern,
                    part.position,
                )
            out.append(self._format_argument(arguments[part.index], part, pattern))
        return "".join(out)

    # ── Argument rendering ─────────────────────────────────────────

    def _format_argument(self, value: Any, placeholder: Placeholder, pattern: str) -> str:
        try:
            with _number_context(value):
                if placeholder.type == "number":
                    return self._format_number(value, placeholder.style)
                if placeholder.type == "date":
                    return self._format_date(value, placeholder.style or "medium")
                if placeholder.type == "time":
                    return self._format_time(value, placeholder.style or "medium")
                return self._format_plain(value)
        except MessageFormatError as e:
            raise MessageFormatError(str(e), pattern, placeholder.position) from e
        except (ValueError, TypeError, KeyError, ArithmeticError) as e:
            # Babel rejects malformed custom patterns with these
            raise MessageFormatError(
                f"Cannot format argument {{{placeholder.index}}}: {e}",
                pattern,
                placeholder.position,
            ) from e

    def _format_plain(self, value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, (bool, str)):
            return str(value)
        if _is_number(value):
            return babel_numbers.format_decimal(_as_decimal_input(value), locale=self._babel)
        if isinstance(value, datetime.datetime):
            return babel_dates.format_datetime(value, "short", locale=self._babel)
        if isinstance(value, datetime.date):
            return babel_dates.format_date(value, "short", locale=self._babel)
        if isinstance(value, datetime.time):
            return babel_dates.format_time(value, "short", locale=self._babel)
        return str(value)

    def _format_number(self, value: Any, style: str) -> str:
        if not _is_number(value):
            raise MessageFormatError(
                f"Cannot format {type(value).__name__} as a number"
            )
        value = _as_decimal_input(value)
        keyword = style.lower()
        if not style:
            return babel_numbers.format_decimal(value, locale=self._babel)
        if keyword == "integer":
            return babel_numbers.format_decimal(value, format=INTEGER_PATTERN, locale=self._babel)
        if keyword == "percent":
            return babel_numbers.format_percent(value, locale=self._babel)
        if keyword == "currency":
            return babel_numbers.format_currency(value, self._currency(), locale=self._babel)
        return babel_numbers.format_decimal(value, format=style, locale=self._babel)

    def _format_date(self, value: Any, style: str) -> str:
        if isinstance(value, datetime.datetime) and not _is_style_keyword(style):
            # custom patterns may carry time fields
            return babel_dates.format_datetime(value, style, locale=self._babel)
        if isinstance(value, datetime.date):
            return babel_dates.format_date(value, _style(style), locale=self._babel)
        raise MessageFormatError(f"Cannot format {type(value).__name__} as a date")

    def _format_time(self, value: Any, style: str) -> str:
        if isinstance(value, (datetime.datetime, datetime.time)):
            return babel_dates.format_time(value, _style(style), locale=self._babel)
        raise MessageFormatError(f"Cannot format {type(value).__name__} as a time")

    def _currency(self) -> str:
        territory = self._babel.territory
        currencies = babel_numbers.get_territory_currencies(territory) if territory else []
        if not currencies:
            raise MessageFormatError(
                f"No currency known for locale {self.locale.tag}"
            )
        return currencies[0]


def format_message(pattern: str, arguments: Sequence[Any] = (), locale: Locale = DEFAULT_LOCALE) -> str:
    """Format ``pattern`` with a fresh MessageFormatter for ``locale``."""
    return MessageFormatter(locale).format(pattern, arguments)


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def _as_decimal_input(value: Any) -> Union[int, float, Decimal]:
    if isinstance(value, (int, float, Decimal)):
        return value
    return float(value)


def _is_style_keyword(style: str) -> bool:
    return style.lower() in DATE_STYLES


def _style(style: str) -> str:
    """Normalize keyword styles; custom patterns are used verbatim."""
    return style.lower() if _is_style_keyword(style) else style


def _significant_digits(value: Any) -> int:
    """Digits in the integer and fraction parts of ``value``."""
    value = _as_decimal_input(value)
    number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not number.is_finite():
        return 0
    _, digits, exponent = number.as_tuple()
    return len(digits) + max(exponent, 0)


@contextlib.contextmanager
def _number_context(value: Any) -> Iterator[None]:
    """Decimal context wide enough for Babel to quantize ``value`` without overflow.

    Babel quantizes with the active context, whose default precision of 28
    digits is too small for large integers such as ``2**100``.
    """
    with decimal.localcontext() as context:
        if _is_number(value):
            context.prec = max(context.prec, _significant_digits(value) + PRECISION_HEADROOM)
        yield
