"""
amqtopo.serialization
~~~~~~~~~~~~~~~~~~~~~

Field tables and the wire layout of exchange method arguments.

Only encoding lives here: requests are encoded to prove they are valid
before they leave the process. Reading replies is the channel's job.
"""

import struct
import functools
from calendar import timegm
from datetime import datetime
from decimal import Decimal
from collections.abc import Mapping

__all__ = ['FieldTable', 'freeze', 'encode_table', 'encode_arguments']


class FieldTable(Mapping):
    """A read-only, hashable field table.

    Nested tables are frozen into :class:`FieldTable` too and arrays into
    tuples, so nothing the caller keeps a reference to can change it.
    """

    __slots__ = ('_fields', '_hash')

    def __init__(self, table=()):
        self._fields = {key: freeze(value)
                        for key, value in dict(table).items()}
        self._hash = None

    def __getitem__(self, key):
        return self._fields[key]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(frozenset(self._fields.items()))
        return self._hash

    def __repr__(self):
        return 'FieldTable({!r})'.format(self._fields)


def freeze(value):
    if isinstance(value, FieldTable):
        return value
    if isinstance(value, Mapping):
        return FieldTable(value)
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def encode_table(table) -> bytes:
    """Encode a mapping of strings to field values as a field table."""
    payload = b''.join(
        _short_str(key) + _field_value(value) for key, value in table.items()
    )
    return struct.pack('>L', len(payload)) + payload


def encode_arguments(spec: str, values) -> bytes:
    """Encode method arguments laid out by ``spec``:

        '?' - bit
        'H' - short
        's' - short string
        'T' - field table

    A run of bits shares octets, the first bit being the least
    significant one.
    """
    values = list(values)
    if len(spec) != len(values):
        raise ValueError('{!r} lays out {} arguments, got {}'.format(
            spec, len(spec), len(values)
        ))
    chunks, bits = [], []
    for char, value in zip(spec, values):
        if char == '?':
            bits.append(bool(value))
            continue
        if bits:
            chunks.append(_octets(bits))
            bits = []
        try:
            encoder = _ARGUMENT_ENCODERS[char]
        except KeyError:
            raise ValueError('unknown argument type {!r}'.format(char)) \
                from None
        chunks.append(encoder(value))
    if bits:
        chunks.append(_octets(bits))
    return b''.join(chunks)


def _octets(bits):
    octets = bytearray()
    for idx, bit in enumerate(bits):
        if idx % 8 == 0:
            octets.append(0)
        octets[-1] |= bit << (idx % 8)
    return bytes(octets)


def _short_str(value) -> bytes:
    if not isinstance(value, str):
        raise ValueError('expected a string, got {!r}'.format(value))
    data = value.encode('utf-8', 'surrogatepass')
    if len(data) > 255:
        raise ValueError(
            'short strings are limited to 255 bytes, got {}'.format(len(data))
        )
    return struct.pack('>B', len(data)) + data


def _short(value) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int) \
            or not 0 <= value <= 0xFFFF:
        raise ValueError('expected an unsigned short, got {!r}'.format(value))
    return struct.pack('>H', value)


_ARGUMENT_ENCODERS = {
    'H': _short,
    's': _short_str,
    'T': encode_table,
}

# RabbitMQ reads integers as signed, pick the narrowest signed kind.
_INTEGER_KINDS = [
    (b'b', '>b', 8),
    (b's', '>h', 16),
    (b'I', '>l', 32),
    (b'l', '>q', 64),
]


@functools.singledispatch
def _field_value(value):
    raise ValueError('cannot encode {!r} as a field value'.format(value))


@_field_value.register(type(None))
def _field_none(value):
    return b'V'


@_field_value.register(bool)
def _field_bool(value):
    return b't' + struct.pack('>?', value)


@_field_value.register(int)
def _field_int(value):
    for kind, fmt, width in _INTEGER_KINDS:
        limit = 1 << (width - 1)
        if -limit <= value < limit:
            return kind + struct.pack(fmt, value)
    raise ValueError('{} does not fit in a signed 64-bit integer'.format(
        value
    ))


@_field_value.register(float)
def _field_float(value):
    return b'd' + struct.pack('>d', value)


@_field_value.register(Decimal)
def _field_decimal(value):
    sign, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int) or not -255 <= exponent <= 0:
        raise ValueError('cannot encode decimal {}'.format(value))
    unscaled = int(''.join(map(str, digits)) or '0')
    if sign:
        unscaled = -unscaled
    if not -(1 << 31) <= unscaled < (1 << 31):
        raise ValueError('cannot encode decimal {}'.format(value))
    return b'D' + struct.pack('>Bl', -exponent, unscaled)


@_field_value.register(str)
def _field_str(value):
    data = value.encode('utf-8', 'surrogatepass')
    return b'S' + struct.pack('>L', len(data)) + data


@_field_value.register(bytes)
@_field_value.register(bytearray)
def _field_bytes(value):
    return b'x' + struct.pack('>L', len(value)) + bytes(value)


@_field_value.register(datetime)
def _field_timestamp(value):
    timestamp = timegm(value.utctimetuple())
    if timestamp < 0:
        raise ValueError('cannot encode timestamp {}'.format(value))
    return b'T' + struct.pack('>Q', timestamp)


@_field_value.register(list)
@_field_value.register(tuple)
def _field_array(value):
    payload = b''.join(_field_value(item) for item in value)
    return b'A' + struct.pack('>L', len(payload)) + payload


@_field_value.register(Mapping)
def _field_table(value):
    return b'F' + encode_table(value)
