"""
Value decoder/encoder.

The group code of a tag implies the type of its value: the ranges below are fixed
by the format and are the same for every record type.
"""
import logging
import struct

from bitstring import BitArray

from .enum import TypeClass
from .exceptions import DecodeException


logger = logging.getLogger(__name__)


CODE_RANGES = (
    (0, 4, TypeClass.STRING),
    (5, 5, TypeClass.HANDLE),
    (6, 9, TypeClass.STRING),
    (10, 59, TypeClass.DOUBLE),
    (60, 79, TypeClass.INT16),
    (90, 99, TypeClass.INT32),
    (100, 100, TypeClass.MARKER),
    (102, 102, TypeClass.STRING),
    (105, 105, TypeClass.HANDLE),
    (110, 149, TypeClass.DOUBLE),
    (160, 169, TypeClass.INT64),
    (170, 179, TypeClass.INT16),
    (210, 239, TypeClass.DOUBLE),
    (270, 289, TypeClass.INT16),
    (290, 299, TypeClass.BOOL),
    (300, 309, TypeClass.STRING),
    (310, 319, TypeClass.BINARY),
    (320, 369, TypeClass.HANDLE),
    (370, 389, TypeClass.INT16),
    (390, 399, TypeClass.HANDLE),
    (400, 409, TypeClass.INT16),
    (410, 419, TypeClass.STRING),
    (420, 429, TypeClass.INT32),
    (430, 439, TypeClass.STRING),
    (440, 459, TypeClass.INT32),
    (460, 469, TypeClass.DOUBLE),
    (470, 479, TypeClass.STRING),
    (480, 481, TypeClass.HANDLE),
    (999, 999, TypeClass.COMMENT),
    (1000, 1009, TypeClass.STRING),
    (1010, 1059, TypeClass.DOUBLE),
    (1060, 1070, TypeClass.INT16),
    (1071, 1071, TypeClass.INT32),
)

# a field can declare a type class different from the one of its
# code range only if it's listed here
COMPATIBLE = {
    TypeClass.STRING: {TypeClass.STRING, TypeClass.COMMENT, TypeClass.MARKER},
    TypeClass.FLOAT: {TypeClass.DOUBLE},
    TypeClass.BOOL: {TypeClass.BOOL, TypeClass.INT16},
    TypeClass.INT16: {TypeClass.INT16, TypeClass.BOOL},
}

STRUCT_FORMATS = {
    TypeClass.INT16: 'h',
    TypeClass.INT32: 'i',
    TypeClass.INT64: 'q',
    TypeClass.FLOAT: 'f',
}


def type_class_for(code):
    for start, end, type_class in CODE_RANGES:
        if start <= code <= end:
            return type_class

    raise ValueError(f'group code {code} is not part of any known range')


def is_compatible(code, type_class):
    '''Check that a field of the given type class can live on this group code.'''
    try:
        range_class = type_class_for(code)
    except ValueError:
        return False

    if type_class == range_class:
        return True

    return range_class in COMPATIBLE.get(type_class, ())


def _unpack_struct(type_class, value):
    fmt = '<%s' % STRUCT_FORMATS[type_class]
    try:
        return struct.unpack(fmt, struct.pack(fmt, value))[0]
    except (struct.error, OverflowError) as e:
        raise DecodeException(f'{value!r} does not fit a {type_class.name}: {e}')


def decode_handle(raw):
    try:
        value = int(raw.strip(), 16)
    except ValueError:
        raise DecodeException(f'{raw!r} is not a valid handle')

    if value < 0:
        raise DecodeException(f'{raw!r} is not a valid handle')

    return value


def decode_integer(raw, type_class):
    try:
        value = int(raw.strip())
    except ValueError:
        raise DecodeException(f'{raw!r} is not a valid integer')

    return _unpack_struct(type_class, value)


def decode_double(raw):
    try:
        return float(raw.strip())
    except ValueError:
        raise DecodeException(f'{raw!r} is not a valid floating point number')


def decode_binary(raw):
    raw = raw.strip()
    if len(raw) % 2:
        raise DecodeException(f'binary chunk of odd length {len(raw)}')
    if not raw:
        return b''

    try:
        return BitArray('0x' + raw).bytes
    except ValueError:
        raise DecodeException(f'{raw!r} is not a valid hexadecimal chunk')


def decode_bool(raw):
    value = decode_integer(raw, TypeClass.INT16)
    if value not in (0, 1):
        raise DecodeException(f'{raw!r} is not a valid boolean flag')

    return bool(value)


def decode(code, raw, type_class=None):
    '''Convert the value line of a tag into a python value.

    It raises DecodeException if the text can't be parsed as the type
    declared (or implied by the group code).'''
    if type_class is None:
        type_class = type_class_for(code)

    if type_class in (TypeClass.STRING, TypeClass.COMMENT, TypeClass.MARKER):
        return raw
    elif type_class == TypeClass.HANDLE:
        return decode_handle(raw)
    elif type_class in (TypeClass.INT16, TypeClass.INT32, TypeClass.INT64):
        return decode_integer(raw, type_class)
    elif type_class == TypeClass.BOOL:
        return decode_bool(raw)
    elif type_class == TypeClass.DOUBLE:
        return decode_double(raw)
    elif type_class == TypeClass.FLOAT:
        return _unpack_struct(type_class, decode_double(raw))
    elif type_class == TypeClass.BINARY:
        return decode_binary(raw)

    raise ValueError(f'type class {type_class!r} not supported')


def encode(code, value, type_class=None):
    '''The inverse of decode(): it returns the text for the value line.'''
    if type_class is None:
        type_class = type_class_for(code)

    if type_class in (TypeClass.STRING, TypeClass.COMMENT, TypeClass.MARKER):
        return str(value)
    elif type_class == TypeClass.HANDLE:
        return '%x' % value
    elif type_class in (TypeClass.INT16, TypeClass.INT32, TypeClass.INT64):
        try:
            return '%d' % _unpack_struct(type_class, int(value))
        except DecodeException as e:
            raise ValueError(e.message)
    elif type_class == TypeClass.BOOL:
        return '%d' % int(bool(value))
    elif type_class in (TypeClass.DOUBLE, TypeClass.FLOAT):
        return repr(float(value))
    elif type_class == TypeClass.BINARY:
        return BitArray(bytes(value)).hex.upper()

    raise ValueError(f'type class {type_class!r} not supported')
