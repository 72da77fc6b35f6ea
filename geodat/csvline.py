# geodat/csvline.py
"""
CSV line tokenizer and the line-classification predicates used by the encoders.

The tokenizer accepts one line at a time. Fields are separated by commas and
are either bare text (no comma, quote or backslash) or a single- or
double-quoted string in which the delimiter may be escaped with a backslash.
"""

from __future__ import annotations
import re
from typing import Optional

_SQ = r"'[^'\\]*(?:\\[\S\s][^'\\]*)*'"
_DQ = r'"[^"\\]*(?:\\[\S\s][^"\\]*)*"'
_BARE = r"[^,'\"\s\\]*(?:\s+[^,'\"\s\\]+)*"
_FIELD = rf"\s*(?:{_SQ}|{_DQ}|{_BARE})\s*"

_VALID = re.compile(rf"{_FIELD}(?:,{_FIELD})*")
_VALUE = re.compile(
    r"(?!\s*$)\s*"
    r"(?:'([^'\\]*(?:\\[\S\s][^'\\]*)*)'"
    r"|\"([^\"\\]*(?:\\[\S\s][^\"\\]*)*)\""
    r"|([^,'\"\s\\]*(?:\s+[^,'\"\s\\]+)*))"
    r"\s*(?:,|$)"
)
_TRAILING_COMMA = re.compile(r",\s*$")

_COPYRIGHT = re.compile(r"^Copyright")
_DIGIT = re.compile(r"\d")


def csv_to_list(text: str) -> Optional[list[str]]:
    """
    Split one CSV line into its fields.

    Returns None when the line is not well formed (e.g. an unbalanced quote).
    A trailing comma yields an explicit empty last field.
    """
    if _VALID.fullmatch(text) is None:
        return None

    fields: list[str] = []
    for m in _VALUE.finditer(text):
        single, double, bare = m.groups()
        if single is not None:
            fields.append(single.replace("\\'", "'"))
        elif double is not None:
            fields.append(double.replace('\\"', '"'))
        elif bare is not None:
            fields.append(bare)

    if _TRAILING_COMMA.search(text):
        fields.append("")
    return fields


def is_noise_line(line: str) -> bool:
    """Copyright banners and digit-free header/footer lines carry no record."""
    return _COPYRIGHT.match(line) is not None or _DIGIT.search(line) is None


def is_ipv6_text(field: str) -> bool:
    """Address family of a textual IP field: a colon means IPv6."""
    return ":" in field
