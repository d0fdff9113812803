
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

from dataclasses import dataclass
from enum import Enum

import numpy as np

@dataclass(frozen=True)
class DataType:
    tag: int  # stored in the channel header
    size: int # bytes per sample

FLOAT16 = DataType(7, 2) # never produced, but i2 will read it
FLOAT32 = DataType(7, 4)
INT16 = DataType(3, 2)
INT32 = DataType(5, 4)

class ElementType(Enum):
    FLOAT32 = 'float32'
    INT16 = 'int16'
    INT32 = 'int32'

    @property
    def typecode(self):
        return _typecodes[self]

    @property
    def dtype(self):
        return _dtypes[self]

_typecodes = {
    ElementType.FLOAT32: 'f',
    ElementType.INT16: 'h',
    ElementType.INT32: 'i',
}

_dtypes = {
    ElementType.FLOAT32: np.dtype('<f4'),
    ElementType.INT16: np.dtype('<i2'),
    ElementType.INT32: np.dtype('<i4'),
}

_registry = {
    ElementType.FLOAT32: FLOAT32,
    ElementType.INT16: INT16,
    ElementType.INT32: INT32,
}

# Every element type needs an on-disk encoding.
assert set(_registry) == set(ElementType)

def lookup(elem_type):
    if not isinstance(elem_type, ElementType):
        raise TypeError('unsupported element type %r' % (elem_type,))
    return _registry[elem_type]

def element_type(value):
    """Resolve an ElementType from a member, its value ('int16') or its name ('INT16')."""
    if isinstance(value, ElementType):
        return value
    if isinstance(value, str):
        try:
            return ElementType(value.lower())
        except ValueError:
            pass
    raise ValueError('unknown element type %r' % (value,))
