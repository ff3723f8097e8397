"""
amqtopo.methods
~~~~~~~~~~~~~~~

AMQP methods of the exchange class, plus the close methods a broker
answers with when it refuses one of them.
"""

import struct

import attr

from .exceptions import InvalidOptionError
from .serialization import freeze, encode_arguments

__all__ = [
    'Method',
    'ConnectionClose', 'ChannelClose',
    'ExchangeDeclare', 'ExchangeDeclareOK',
    'ExchangeDelete', 'ExchangeDeleteOK',
    'ExchangeBind', 'ExchangeBindOK',
    'ExchangeUnbind', 'ExchangeUnbindOK',
]


def _table(value):
    """Field tables are frozen all the way down once a method is built."""
    return freeze({} if value is None else value)


def _non_empty(instance, attribute, value):
    # pylint: disable=unused-argument
    if not isinstance(value, str) or not value:
        raise InvalidOptionError(
            attribute.name, value, 'must be a non-empty string'
        )


@attr.s(slots=True, frozen=True)
class Method:
    """Describes an AMQP method."""

    response = None

    @classmethod
    def register(cls, spec, class_id, method_id, name,
                 response_to=None, closing=False):
        def decorator(method):
            method.spec = spec
            method.name = name
            method.closing = closing
            method.response = None
            method.response_to = response_to
            if response_to is not None:
                response_to.response = method

            method.class_id = class_id
            method.method_id = method_id

            return method
        return decorator

    def has_response(self):
        """Tells if this method has a response that needs to be awaited."""
        return self.response is not None and not getattr(self, 'no_wait',
                                                         False)

    def dump(self):
        """Encode the method payload: class id, method id, arguments."""
        arguments = [getattr(self, field.name)
                     for field in attr.fields(type(self))]
        return struct.pack('>HH', self.class_id, self.method_id) + \
            encode_arguments(self.spec, arguments)


@Method.register(spec='HsHH', class_id=10, method_id=50,
                 name='connection.close', closing=True)
@attr.s(slots=True, frozen=True)
class ConnectionClose(Method):
    reply_code = attr.ib()
    reply_text = attr.ib()
    reply_class_id = attr.ib(default=0)
    reply_method_id = attr.ib(default=0)


@Method.register(spec='HsHH', class_id=20, method_id=40,
                 name='channel.close', closing=True)
@attr.s(slots=True, frozen=True)
class ChannelClose(Method):
    reply_code = attr.ib()
    reply_text = attr.ib()
    reply_class_id = attr.ib(default=0)
    reply_method_id = attr.ib(default=0)


@Method.register(spec='Hss?????T', class_id=40, method_id=10,
                 name='exchange.declare')
@attr.s(slots=True, frozen=True)
class ExchangeDeclare(Method):
    # Deprecated
    ticket = attr.ib(default=0, repr=False)
    exchange = attr.ib(default='')
    type = attr.ib(default='direct', validator=_non_empty)
    passive = attr.ib(default=False)
    durable = attr.ib(default=False)
    auto_delete = attr.ib(default=False)
    internal = attr.ib(default=False)
    no_wait = attr.ib(default=False)
    arguments = attr.ib(default=None, converter=_table)


@Method.register(spec='', class_id=40, method_id=11,
                 name='exchange.declare-ok', response_to=ExchangeDeclare)
@attr.s(slots=True, frozen=True)
class ExchangeDeclareOK(Method):
    pass


@Method.register(spec='Hs??', class_id=40, method_id=20,
                 name='exchange.delete')
@attr.s(slots=True, frozen=True)
class ExchangeDelete(Method):
    # Deprecated
    ticket = attr.ib(default=0, repr=False)
    exchange = attr.ib(default='')
    if_unused = attr.ib(default=False)
    no_wait = attr.ib(default=False)


@Method.register(spec='', class_id=40, method_id=21,
                 name='exchange.delete-ok', response_to=ExchangeDelete)
@attr.s(slots=True, frozen=True)
class ExchangeDeleteOK(Method):
    pass


@Method.register(spec='Hsss?T', class_id=40, method_id=30,
                 name='exchange.bind')
@attr.s(slots=True, frozen=True)
class ExchangeBind(Method):
    # Deprecated
    ticket = attr.ib(default=0, repr=False)
    destination = attr.ib(default='')
    source = attr.ib(default='')
    routing_key = attr.ib(default='')
    no_wait = attr.ib(default=False)
    arguments = attr.ib(default=None, converter=_table)


@Method.register(spec='', class_id=40, method_id=31,
                 name='exchange.bind-ok', response_to=ExchangeBind)
@attr.s(slots=True, frozen=True)
class ExchangeBindOK(Method):
    pass


@Method.register(spec='Hsss?T', class_id=40, method_id=40,
                 name='exchange.unbind')
@attr.s(slots=True, frozen=True)
class ExchangeUnbind(Method):
    # Deprecated
    ticket = attr.ib(default=0, repr=False)
    destination = attr.ib(default='')
    source = attr.ib(default='')
    routing_key = attr.ib(default='')
    no_wait = attr.ib(default=False)
    arguments = attr.ib(default=None, converter=_table)


# Unbind-ok is 51, not 41, in the exchange-to-exchange bindings extension.
@Method.register(spec='', class_id=40, method_id=51,
                 name='exchange.unbind-ok', response_to=ExchangeUnbind)
@attr.s(slots=True, frozen=True)
class ExchangeUnbindOK(Method):
    pass
