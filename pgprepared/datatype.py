"""A module for housing the datatype classes.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Binary -- Class for a Binary object

Exported Functions:
to_input_parameter -- Converts a Python value to an InputParameter.

TypeObject Variables:
STRING -- TypeObject(str)
BINARY -- TypeObject(bytes)
NUMBER -- TypeObject(int, float, decimal.Decimal)
DATETIME -- TypeObject(datetime.datetime, datetime.date, datetime.time)
ROWID -- TypeObject()
"""

__all__ = ['Date', 'Time', 'Timestamp', 'Binary', 'STRING', 'BINARY',
           'NUMBER', 'DATETIME', 'ROWID', 'NULL', 'POSTGRESQL_TYPE_STRING',
           'LOCALZONE', 'LOCALZONE_NAME', 'to_input_parameter']

import decimal
from datetime import datetime as Timestamp, date as Date, time as Time

from typing import Any, Union  # pylint: disable=unused-import

import tzlocal

from .statement import InputParameter

# Native type tag of a cell read in text format.  Every cell is read as text;
# mapping the column's type id to a richer tag is left to the caller.
POSTGRESQL_TYPE_STRING = 0

LOCALZONE = tzlocal.get_localzone()
LOCALZONE_NAME = tzlocal.get_localzone_name()


class Binary(bytes):
    """A binary string.

    If passed a string we assume it's encoded as LATIN-1, which ensures that
    the characters 0-255 are considered single-character sequences.
    """

    def __new__(cls, data):
        # type: (Union[str, bytes, bytearray]) -> Binary
        if isinstance(data, str):
            return bytes.__new__(cls, data.encode('latin-1'))  # type: ignore
        return bytes.__new__(cls, data)  # type: ignore

    def __str__(self):
        # type: () -> str
        return repr(self)[2:-1]


class TypeObject(object):
    """A SQL type object."""

    def __init__(self, *values):
        self.values = values

    def __eq__(self, other):
        if isinstance(other, TypeObject):
            return self is other
        return other in self.values

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return id(self)


STRING = TypeObject(str)
BINARY = TypeObject(bytes)
NUMBER = TypeObject(int, float, decimal.Decimal)
DATETIME = TypeObject(Timestamp, Date, Time)
ROWID = TypeObject()
NULL = TypeObject(None)


def to_input_parameter(value):
    # type: (Any) -> InputParameter
    """Return the InputParameter sending value to the server.

    Everything except bytes is sent in text format and left to the server
    to parse against the parameter's type.  Naive datetimes are taken to be
    in the local timezone.
    """
    if isinstance(value, InputParameter):
        return value
    if value is None:
        return InputParameter(None)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return InputParameter(bytes(value), is_binary=True)
    if isinstance(value, bool):
        return InputParameter(b't' if value else b'f')
    if isinstance(value, Timestamp):
        if value.tzinfo is None:
            value = value.replace(tzinfo=LOCALZONE)
        return InputParameter(value.isoformat().encode('ascii'))
    if isinstance(value, (Date, Time)):
        return InputParameter(value.isoformat().encode('ascii'))
    if isinstance(value, decimal.Decimal):
        return InputParameter(str(value).encode('ascii'))
    if isinstance(value, float):
        return InputParameter(repr(value).encode('ascii'))
    return InputParameter(str(value).encode('utf-8'))
