"""
amqtopo.exchange
~~~~~~~~~~~~~~~~

Functions to operate on exchanges.

AMQP 0-9-1 brokers provide four pre-declared exchanges:

* Direct exchange: (empty string) or ``amq.direct``
* Fanout exchange: ``amq.fanout``
* Topic exchange: ``amq.topic``
* Headers exchange: ``amq.match`` (and ``amq.headers`` in RabbitMQ)
"""

# pylint: disable=redefined-builtin

from . import dispatcher
from .builder import build, Operation
from .options import ExchangeType, DeclareOptions

__all__ = ['declare', 'delete', 'bind', 'unbind',
           'direct', 'fanout', 'topic', 'Exchange']


def declare(channel, exchange, type=ExchangeType.DIRECT, options=None,
            **overrides):
    """Declare an exchange. The default exchange type is ``direct``.

    :param channel: the channel to send the method over.
    :param exchange: the name of the exchange. Names starting with
        ``amq.`` are reserved for pre-declared exchanges.
    :param type: an :class:`ExchangeType` or the name of
        a broker-specific type.
    :param options: :class:`DeclareOptions` or a mapping of its fields:
        ``durable``, ``auto_delete``, ``passive``, ``internal``,
        ``no_wait`` and ``arguments``. Keyword arguments override it.
    """
    request = build(Operation.DECLARE, exchange, type,
                    options=options, **overrides)
    dispatcher.call(channel, request)


def delete(channel, exchange, options=None, **overrides):
    """Delete an exchange by name. All bindings to it are deleted too.

    :param options: :class:`DeleteOptions` or a mapping of its fields:
        ``if_unused`` (only delete an exchange without bindings)
        and ``no_wait``.
    """
    request = build(Operation.DELETE, exchange, options=options, **overrides)
    dispatcher.call(channel, request)


def bind(channel, destination, source, options=None, **overrides):
    """Bind the ``destination`` exchange to the ``source`` exchange
    (exchange-to-exchange bindings are a RabbitMQ extension).

    :param options: :class:`BindOptions` or a mapping of its fields:
        ``routing_key``, ``no_wait`` and ``arguments``.
    """
    request = build(Operation.BIND, destination, source,
                    options=options, **overrides)
    dispatcher.call(channel, request)


def unbind(channel, destination, source, options=None, **overrides):
    """Remove a binding made with :func:`bind`. ``routing_key`` and
    ``arguments`` must match the ones of the binding.
    """
    request = build(Operation.UNBIND, destination, source,
                    options=options, **overrides)
    dispatcher.call(channel, request)


def direct(channel, exchange, options=None, **overrides):
    """Declare an exchange of type ``direct``."""
    return declare(channel, exchange, ExchangeType.DIRECT, options,
                   **overrides)


def fanout(channel, exchange, options=None, **overrides):
    """Declare an exchange of type ``fanout``."""
    return declare(channel, exchange, ExchangeType.FANOUT, options,
                   **overrides)


def topic(channel, exchange, options=None, **overrides):
    """Declare an exchange of type ``topic``."""
    return declare(channel, exchange, ExchangeType.TOPIC, options,
                   **overrides)


class Exchange:

    def __init__(self, channel, name, type=ExchangeType.DIRECT,
                 options=None):
        self._channel = channel
        self.name = name
        self.type = ExchangeType.coerce(type)
        self.options = DeclareOptions.from_mapping(options)

    def declare(self, **overrides):
        return declare(self._channel, self.name, self.type, self.options,
                       **overrides)

    def delete(self, if_unused=False, no_wait=False):
        return delete(self._channel, self.name,
                      if_unused=if_unused, no_wait=no_wait)

    def bind(self, source, routing_key='', no_wait=False, arguments=None):
        return bind(self._channel, self.name, _name_of(source),
                    routing_key=routing_key, no_wait=no_wait,
                    arguments=arguments)

    def unbind(self, source, routing_key='', no_wait=False, arguments=None):
        return unbind(self._channel, self.name, _name_of(source),
                      routing_key=routing_key, no_wait=no_wait,
                      arguments=arguments)


def _name_of(exchange):
    if isinstance(exchange, Exchange):
        return exchange.name
    return exchange
