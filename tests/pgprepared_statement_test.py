"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import decimal
import datetime

import pytest

import pgprepared
from pgprepared.statement import State, transition
from pgprepared.statement import MetaColumn, InputParameter, OutputParameter
from pgprepared.datatype import to_input_parameter, Binary, LOCALZONE


class TestState(object):

    def test_prepare_from_inited(self):
        assert transition(State.INITED, 'prepare') is State.COMPILED

    def test_execute(self):
        assert transition(State.COMPILED, 'execute') is State.EXECUTED
        assert transition(State.EXECUTED, 'execute') is State.EXECUTED

    def test_bind_keeps_state(self):
        assert transition(State.COMPILED, 'bind') is State.COMPILED
        assert transition(State.EXECUTED, 'bind') is State.EXECUTED

    def test_rejected(self):
        with pytest.raises(pgprepared.StatementError) as e:
            transition(State.INITED, 'execute')
        assert 'not compiled yet' in e.value.message

        with pytest.raises(pgprepared.StatementError):
            transition(State.INITED, 'bind')

        with pytest.raises(pgprepared.StatementError) as e:
            transition(State.COMPILED, 'fetch')
        assert 'not yet executed' in e.value.message

    def test_unknown_operation(self):
        with pytest.raises(pgprepared.StatementError):
            transition(State.EXECUTED, 'rewind')


class TestValues(object):

    def test_meta_column_description(self):
        col = MetaColumn(0, 'name', pgprepared.STRING, 36, 0, True, 1043)
        assert col.description() == ('name', pgprepared.STRING, None, 36, None, None, True)
        assert col == MetaColumn(0, 'name', pgprepared.STRING, 36, 0, True, 1043)
        assert col != MetaColumn(1, 'name', pgprepared.STRING, 36, 0, True, 1043)

    def test_input_parameter(self):
        p = InputParameter(b'abc')
        assert p.size == 3
        assert p.format == 0
        assert not p.is_null

        null = InputParameter(None)
        assert null.size == 0
        assert null.is_null

        assert InputParameter(b'\x00\x01', is_binary=True).format == 1

    def test_output_parameter(self):
        cell = OutputParameter()
        assert cell.is_null
        cell.set_values(pgprepared.POSTGRESQL_TYPE_STRING, 23, 4, b'17', 2, False)
        assert (cell.type_code, cell.row, cell.value, cell.size, cell.is_null) == \
            (23, 4, b'17', 2, False)


class TestDatatype(object):

    def test_type_objects(self):
        assert pgprepared.STRING == str
        assert pgprepared.NUMBER == decimal.Decimal
        assert pgprepared.STRING != pgprepared.BINARY

    def test_binary(self):
        assert Binary('\xff') == b'\xff'
        assert str(Binary(b'ab')) == 'ab'

    def test_conversions(self):
        assert to_input_parameter(None) == InputParameter(None)
        assert to_input_parameter(42) == InputParameter(b'42')
        assert to_input_parameter(True) == InputParameter(b't')
        assert to_input_parameter(False) == InputParameter(b'f')
        assert to_input_parameter(1.5) == InputParameter(b'1.5')
        assert to_input_parameter(decimal.Decimal('976.20')) == InputParameter(b'976.20')
        assert to_input_parameter(u'café') == InputParameter(u'café'.encode('utf-8'))
        assert to_input_parameter(b'\x00\xff') == InputParameter(b'\x00\xff', is_binary=True)
        assert to_input_parameter(bytearray(b'x')) == InputParameter(b'x', is_binary=True)
        assert to_input_parameter(datetime.date(2024, 2, 29)) == InputParameter(b'2024-02-29')
        assert to_input_parameter(datetime.time(12, 30)) == InputParameter(b'12:30:00')

    def test_parameter_passes_through(self):
        p = InputParameter(b'raw', is_binary=True)
        assert to_input_parameter(p) is p

    def test_aware_timestamp(self):
        utc = datetime.timezone.utc
        ts = datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=utc)
        assert to_input_parameter(ts) == InputParameter(b'2024-01-02T03:04:05+00:00')

    def test_naive_timestamp_is_local(self):
        ts = datetime.datetime(2024, 1, 2, 3, 4, 5)
        expected = ts.replace(tzinfo=LOCALZONE).isoformat().encode('ascii')
        assert to_input_parameter(ts).value == expected
