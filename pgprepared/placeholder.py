"""Count the positional parameters of a SQL statement.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Functions:
count_placeholders -- Number of distinct $n markers in a statement.
placeholder_names -- The distinct $n markers in order of first appearance.
"""

__all__ = ['count_placeholders', 'placeholder_names']

from typing import Iterator, List, Optional, Union  # pylint: disable=unused-import

SIGIL = '$'
_DIGITS = frozenset('0123456789')


def _as_text(sql):
    # type: (Optional[Union[str, bytes]]) -> str
    if sql is None:
        return ''
    if isinstance(sql, (bytes, bytearray)):
        try:
            return bytes(sql).decode('utf-8')
        except UnicodeDecodeError as e:
            # Scan what could be decoded.
            return bytes(sql[:e.start]).decode('utf-8')
    return sql


def _tokens(text):
    # type: (str) -> Iterator[str]
    """Yield every $n marker in text, repeats included.

    There is no awareness of quoting or comments: a marker inside a string
    literal is still a marker.
    """
    end = len(text)
    pos = text.find(SIGIL)
    while pos >= 0:
        digit = pos + 1
        while digit < end and text[digit] in _DIGITS:
            digit += 1
        if digit > pos + 1:
            yield text[pos:digit]
        pos = text.find(SIGIL, digit)


def placeholder_names(sql):
    # type: (Optional[Union[str, bytes]]) -> List[str]
    """Return the distinct placeholders of sql in order of first appearance.

    Markers are compared as text, so $1 and $01 are different placeholders.
    """
    seen = set()
    names = []  # type: List[str]
    for token in _tokens(_as_text(sql)):
        if token not in seen:
            seen.add(token)
            names.append(token)
    return names


def count_placeholders(sql):
    # type: (Optional[Union[str, bytes]]) -> int
    """Return the number of distinct positional parameters in sql.

    The same placeholder may be used several times in one statement to
    refer to a single bound value, so "$1 AND $2 OR $1" counts 2.

    The scan is lenient: text that cannot be scanned to the end (e.g. bytes
    that are not valid UTF-8) yields the count found up to that point rather
    than an error.
    """
    return len(placeholder_names(sql))
