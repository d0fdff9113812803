
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import numpy as np
import pytest

from motecld.base import Channel, LogFile
from motecld.datatypes import ElementType


def test_channel_defaults_to_float32() -> None:
    ch = Channel(100, 'Ground Speed')
    assert ch.elem_type is ElementType.FLOAT32
    assert ch.values.typecode == 'f'
    assert len(ch) == 0


def test_channel_append() -> None:
    ch = Channel.int16(50, 'Engine RPM', 'RPM', 'rpm', [900])
    ch.append(3500)
    ch.append(-2)
    assert list(ch.values) == [900, 3500, -2]
    assert ch.elem_type is ElementType.INT16


def test_channel_copies_initial_values() -> None:
    src = [1, 2, 3]
    ch = Channel.int32(10, 'Lap Number', values=src)
    ch.append(4)
    assert src == [1, 2, 3]
    assert list(ch.values) == [1, 2, 3, 4]


def test_channel_accepts_numpy_values() -> None:
    ch = Channel.float32(20, 'Throttle', values=np.array([0.0, 0.5, 1.0]))
    assert list(ch.values) == [0.0, 0.5, 1.0]


def test_channel_element_type_by_name() -> None:
    assert Channel(10, 'x', elem_type='int32').elem_type is ElementType.INT32


def test_channel_rejects_unknown_element_type() -> None:
    with pytest.raises(ValueError):
        Channel(10, 'x', elem_type='float64')


def test_channel_frequency_range() -> None:
    Channel(0xFFFF, 'fast')
    with pytest.raises(ValueError):
        Channel(0x10000, 'too fast')
    with pytest.raises(ValueError):
        Channel(-1, 'negative')


def test_channel_integer_overflow_at_append() -> None:
    ch = Channel.int16(10, 'x')
    with pytest.raises(OverflowError):
        ch.append(40000)


def test_add_channels_preserves_order() -> None:
    log = LogFile()
    a = Channel(10, 'a')
    b = Channel(10, 'b')
    c = Channel(10, 'c')
    log.add_channels(a, b)
    log.add_channels(c)
    assert [ch.name for ch in log.channels] == ['a', 'b', 'c']


def test_logfiles_do_not_share_channels() -> None:
    one = LogFile()
    two = LogFile()
    one.add_channels(Channel(10, 'a'))
    assert two.channels == []
