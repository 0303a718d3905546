from __future__ import annotations

import math
import re
from typing import Any, Optional, Union

Number = Union[int, float]

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_DECIMAL = re.compile(r"[^0-9.,]")
_SEPARATORS = ".,"


def _normalize_separators(text: str) -> str:
    """Collapse thousands separators and turn the decimal separator into a dot.

    The right-most separator is the decimal point when the other separator
    kind was already used before it ("1,250.50", "1.250,5"). A lone ``.`` is
    always a decimal point ("12.5", "1234.567"). A lone ``,`` is one unless
    exactly three digits follow it ("45,5" vs "12,500"). Everything else is
    treated as grouping ("1.250.000", "1,250,000").
    """

    last = max(text.rfind("."), text.rfind(","))
    if last < 0:
        return text

    sep = text[last]
    other = "," if sep == "." else "."
    head, tail = text[:last], text[last + 1 :]
    if other in head:
        is_decimal = True
    elif text.count(sep) > 1:
        is_decimal = False
    else:
        is_decimal = sep == "." or len(tail) != 3
    if not is_decimal:
        return text.replace(".", "").replace(",", "")

    integer_part = head.replace(".", "").replace(",", "") or "0"
    return f"{integer_part}.{tail}"


def coerce_number(raw: Any, allow_decimal: bool = True) -> Optional[Number]:
    """Normalize a noisy field value into a number, or ``None`` when absent.

    Numbers pass through untouched. Strings keep ASCII digits (plus ``.``/``,``
    when ``allow_decimal``), so "12 500 ₽" becomes 12500 and "45,5 м²" becomes
    45.5. Never raises.
    """

    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        return raw
    if not isinstance(raw, str):
        return None

    if not allow_decimal:
        digits = _NON_DIGIT.sub("", raw)
        return int(digits) if digits else None

    cleaned = _NON_DECIMAL.sub("", raw).strip(_SEPARATORS)
    if not cleaned:
        return None

    try:
        value = float(_normalize_separators(cleaned))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value
