"""
amqtopo.options
~~~~~~~~~~~~~~~

Exchange types and the options accepted by exchange methods.
"""

# Pylint can't handle attrs magic.
# pylint: disable=no-member

import enum
import struct
from collections.abc import Mapping

import attr

from .exceptions import InvalidOptionError
from .serialization import FieldTable, freeze, encode_table

__all__ = ['ExchangeType', 'DeclareOptions', 'DeleteOptions', 'BindOptions',
           'check_short_str']


class ExchangeType(enum.Enum):
    """Exchange types every AMQP 0-9-1 broker implements.

    Brokers may implement more (``x-delayed-message``,
    ``x-consistent-hash`` and so on); those are passed around as plain
    strings.
    """

    DIRECT = 'direct'
    FANOUT = 'fanout'
    TOPIC = 'topic'
    HEADERS = 'headers'

    @classmethod
    def coerce(cls, value):
        """Return the matching member, or ``value`` itself if it names
        a broker-specific type.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value:
            raise InvalidOptionError(
                'type', value, 'must be an ExchangeType or a non-empty string'
            )
        try:
            return cls(value)
        except ValueError:
            return value

    @classmethod
    def wire_name(cls, value):
        value = cls.coerce(value)
        if isinstance(value, cls):
            return value.value
        return value


def check_short_str(name, value):
    if not isinstance(value, str):
        raise InvalidOptionError(name, value, 'must be a string')
    if len(value.encode('utf-8', 'surrogatepass')) > 255:
        raise InvalidOptionError(name, value, 'must fit in 255 bytes')
    return value


def _flag(instance, attribute, value):
    # pylint: disable=unused-argument
    if not isinstance(value, bool):
        raise InvalidOptionError(attribute.name, value, 'must be a bool')


def _short_str(instance, attribute, value):
    # pylint: disable=unused-argument
    check_short_str(attribute.name, value)


def _field_table(value):
    if value is None:
        return FieldTable()
    if not isinstance(value, Mapping):
        raise InvalidOptionError('arguments', value, 'must be a mapping')
    for key in value:
        if not isinstance(key, str):
            raise InvalidOptionError(
                'arguments', value, 'keys must be strings, got {!r}'.format(key)
            )
    # Check the copy that is kept, not the caller's mapping.
    table = freeze(value)
    try:
        encode_table(table)
    except (ValueError, OverflowError, struct.error) as exc:
        raise InvalidOptionError(
            'arguments', value, 'not an AMQP field table ({})'.format(exc)
        ) from exc
    return table


class _Options:
    """Shared construction logic of the options classes below."""

    __slots__ = ()

    @classmethod
    def _check_keys(cls, mapping):
        known = [field.name for field in attr.fields(cls)]
        for key in mapping:
            if key not in known:
                raise InvalidOptionError(
                    key, mapping[key], 'unknown option for {}, expected one '
                    'of {}'.format(cls.__name__, ', '.join(known))
                )

    @classmethod
    def from_mapping(cls, mapping):
        if mapping is None:
            return cls()
        if isinstance(mapping, cls):
            return mapping
        if not isinstance(mapping, Mapping):
            raise InvalidOptionError(
                'options', mapping,
                'must be a mapping or {}'.format(cls.__name__)
            )
        cls._check_keys(mapping)
        return cls(**mapping)

    @classmethod
    def resolve(cls, options=None, **overrides):
        """Build options from ``options`` (an instance, a mapping or None)
        with keyword ``overrides`` taking precedence.
        """
        options = cls.from_mapping(options)
        if overrides:
            cls._check_keys(overrides)
            options = attr.evolve(options, **overrides)
        return options


@attr.s(slots=True, frozen=True)
class DeclareOptions(_Options):
    """Options of the exchange declaration.

    :param durable: keep the exchange between restarts of the broker.
    :param auto_delete: delete the exchange once all queues and exchanges
        unbind from it.
    :param passive: do not create anything, fail unless the exchange
        already exists.
    :param internal: the exchange may not be published to directly,
        only through exchange-to-exchange bindings.
    :param no_wait: the broker will not confirm the declaration.
    :param arguments: broker-specific declaration arguments
        (e.g. ``alternate-exchange``).
    """

    durable: bool = attr.ib(default=False, validator=_flag)
    auto_delete: bool = attr.ib(default=False, validator=_flag)
    passive: bool = attr.ib(default=False, validator=_flag)
    internal: bool = attr.ib(default=False, validator=_flag)
    no_wait: bool = attr.ib(default=False, validator=_flag)
    arguments: Mapping = attr.ib(default=None, converter=_field_table)


@attr.s(slots=True, frozen=True)
class DeleteOptions(_Options):
    """Options of the exchange deletion.

    :param if_unused: only delete the exchange if it has no bindings.
    :param no_wait: the broker will not confirm the deletion.
    """

    if_unused: bool = attr.ib(default=False, validator=_flag)
    no_wait: bool = attr.ib(default=False, validator=_flag)


@attr.s(slots=True, frozen=True)
class BindOptions(_Options):
    """Options of exchange-to-exchange (un)binding.

    :param routing_key: the binding key, how it is matched depends
        on the source exchange type.
    :param no_wait: the broker will not confirm the (un)binding.
    :param arguments: binding arguments, e.g. ``x-match``
        for headers exchanges.
    """

    routing_key: str = attr.ib(default='', validator=_short_str)
    no_wait: bool = attr.ib(default=False, validator=_flag)
    arguments: Mapping = attr.ib(default=None, converter=_field_table)
