from __future__ import annotations

import html
import math
import re
from datetime import date, datetime
from enum import Enum

import arrow
import msgspec
import typing as t
from arrow.locales import get_locale
from markupsafe import Markup

from ..logger import logger

DEFAULT_DATE_PATTERN = "DD/MM/YYYY"
FALLBACK_LOCALE = "en_us"

_BETWEEN_TAGS = re.compile(r">\s+<")
_PARAGRAPH_BREAK = re.compile(r"(?:\r?\n){2,}")
_FILE_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


class TruncateSide(str, Enum):
    left = "left"
    right = "right"
    middle = "middle"


def supported_locale(locale: str | None) -> str:
    """Return ``locale`` or the closest locale arrow knows about."""
    candidates = []
    if locale:
        candidates.append(locale)
        language = re.split(r"[-_]", locale, maxsplit=1)[0]
        if language != locale:
            candidates.append(language)

    for candidate in candidates:
        try:
            get_locale(candidate)
        except ValueError:
            continue
        return candidate

    if locale:
        logger.debug(f"Locale '{locale}' not supported, using '{FALLBACK_LOCALE}'")
    return FALLBACK_LOCALE


def date_format(
    value: t.Any,
    pattern: str = DEFAULT_DATE_PATTERN,
    locale: str | None = None,
) -> str:
    """Date formatting filter.

    Accepts ``datetime``/``date`` objects, Unix timestamps and ISO-8601
    strings. Patterns use arrow tokens.

    Example:
        {{ post.created_at|date_format }}                   # "25/01/2025"
        {{ post.created_at|date_format("D MMMM YYYY", "fr") }}
    """
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            moment = arrow.get(value)
        except (arrow.ParserError, ValueError, TypeError):
            return value  # Return as-is if not parseable
    elif isinstance(value, datetime | date | int | float):
        moment = arrow.get(value)
    else:
        return str(value)
    return moment.format(pattern, locale=supported_locale(locale))


def spaceless(value: t.Any) -> str:
    """Remove whitespace between HTML tags.

    Only whitespace strictly between ``>`` and ``<`` is collapsed; the result
    is stripped.

    Example:
        {% filter spaceless %}<ul>
            <li>One</li>
        </ul>{% endfilter %}
    """
    result = _BETWEEN_TAGS.sub("><", str(value)).strip()
    if isinstance(value, Markup):
        return Markup(result)
    return result


def truncate(
    value: t.Any,
    length: int = 128,
    where: TruncateSide | str = TruncateSide.right,
    separator: str = "...",
) -> str:
    """Truncate a string to ``length`` characters.

    HTML entities are decoded first. ``where`` picks the side that is cut:
    ``right`` keeps the start, ``left`` keeps the end, ``middle`` keeps both.
    Unknown sides cut on the right.

    Example:
        {{ article.body|truncate(50) }}
        {{ path|truncate(20, "middle") }}
    """
    text = html.unescape(str(value))
    stripped = text.strip()
    if not stripped or len(stripped) <= length:
        return text

    side = TruncateSide._value2member_map_.get(str(where), TruncateSide.right)
    if side is TruncateSide.left:
        return f"{separator} {text[len(text) - length :].lstrip()}"
    if side is TruncateSide.middle:
        head = text[: math.ceil(length / 2)].rstrip()
        tail = text[len(text) - math.floor(length / 2) :].lstrip()
        return f"{head} {separator} {tail}"
    return f"{text[:length].rstrip()} {separator}"


def nl2p(value: t.Any) -> Markup:
    """Wrap text blocks in paragraphs.

    Blank lines separate paragraphs, single line breaks become ``<br />``.
    Unsafe input is escaped.
    """
    safe = isinstance(value, Markup)
    text = str(value).strip()
    paragraphs = []
    for block in _PARAGRAPH_BREAK.split(text):
        block = block.strip()
        if not block:
            continue
        lines = [Markup(line) if safe else line for line in block.splitlines()]
        paragraphs.append(Markup("<p>{}</p>").format(Markup("<br />").join(lines)))
    return Markup("\n").join(paragraphs)


def human_file_size(value: float, precision: int = 2) -> str:
    """File size formatting filter.

    Args:
        value: Size in bytes
        precision: Maximum number of decimals

    Example:
        {{ file.size|human_file_size }}     # "1.5 KB"
        {{ file.size|human_file_size(0) }}  # "2 KB"
    """

    def _format(size: float, unit: str) -> str:
        text = f"{size:.{precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return f"{text} {unit}"

    size = float(value)
    for unit in _FILE_SIZE_UNITS[:-1]:
        if abs(round(size, precision)) < 1024:
            return _format(size, unit)
        size /= 1024
    return _format(size, _FILE_SIZE_UNITS[-1])


def json_decode(value: t.Any) -> t.Any:
    """Decode a JSON string; invalid input gives ``None``.

    Example:
        {% set options = widget.options|json_decode %}
    """
    if not isinstance(value, str | bytes):
        return None
    try:
        return msgspec.json.decode(value)
    except msgspec.DecodeError:
        return None


def instance_of(value: t.Any, class_name: str | type) -> bool:
    """Test whether ``value`` is an instance, or subclass, of a class.

    The class may be given by object or by name; names are compared without
    case against the class name and its dotted ``module.qualname``.

    Example:
        {% if user is instance_of("AdminUser") %}
    """
    cls = value if isinstance(value, type) else type(value)
    if isinstance(class_name, type):
        return issubclass(cls, class_name)

    wanted = class_name.strip().strip("\\").replace("\\", ".").casefold()
    return any(
        wanted
        in (
            klass.__name__.casefold(),
            f"{klass.__module__}.{klass.__qualname__}".casefold(),
        )
        for klass in cls.__mro__
    )


__all__ = [
    "DEFAULT_DATE_PATTERN",
    "TruncateSide",
    "date_format",
    "human_file_size",
    "instance_of",
    "json_decode",
    "nl2p",
    "spaceless",
    "supported_locale",
    "truncate",
]
