
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

from array import array
from dataclasses import dataclass, field
import datetime
import typing

from . import datatypes
from .datatypes import ElementType

# Samples live in array objects, which only map onto the file's
# element widths if the native sizes match.  The on-disk encoding goes
# through explicit little-endian dtypes, so byte order doesn't matter.
assert array('h').itemsize == 2
assert array('i').itemsize == 4
assert array('f').itemsize == 4

@dataclass(eq=False)
class Channel:
    frequency: int # Hz
    name: str
    short_name: str = ''
    units: str = ''
    values: typing.Iterable = ()
    elem_type: ElementType = ElementType.FLOAT32

    def __post_init__(self):
        self.elem_type = datatypes.element_type(self.elem_type)
        if not 0 <= self.frequency <= 0xFFFF:
            raise ValueError('frequency %r out of range for channel %r' % (self.frequency, self.name))
        self.values = array(self.elem_type.typecode, self.values)

    @classmethod
    def float32(cls, frequency, name, short_name='', units='', values=()):
        return cls(frequency, name, short_name, units, values, ElementType.FLOAT32)

    @classmethod
    def int16(cls, frequency, name, short_name='', units='', values=()):
        return cls(frequency, name, short_name, units, values, ElementType.INT16)

    @classmethod
    def int32(cls, frequency, name, short_name='', units='', values=()):
        return cls(frequency, name, short_name, units, values, ElementType.INT32)

    def append(self, sample):
        self.values.append(sample)

    def __len__(self):
        return len(self.values)

@dataclass(eq=False)
class LogFile:
    time: datetime.datetime = field(default_factory=datetime.datetime.now)
    driver: str = ''
    vehicle: str = ''
    venue: str = ''
    short_comment: str = ''

    event_name: str = ''
    event_session: str = ''
    event_comment: str = ''

    vehicle_id: str = ''
    vehicle_weight: int = 0 # kg
    vehicle_type: str = ''
    vehicle_comment: str = ''

    channels: typing.List[Channel] = field(default_factory=list)

    def add_channels(self, *channels):
        self.channels.extend(channels)
