"""
amqtopo.builder
~~~~~~~~~~~~~~~

Turn an operation name, its identifiers and its options into a fully
populated exchange method.
"""

import enum
import struct

from . import methods
from .exceptions import InvalidOptionError
from .options import (
    ExchangeType, DeclareOptions, DeleteOptions, BindOptions, check_short_str,
)

__all__ = ['Operation', 'build']


class Operation(enum.Enum):
    DECLARE = 'declare'
    DELETE = 'delete'
    BIND = 'bind'
    UNBIND = 'unbind'


def build(operation, *inputs, options=None, **overrides):
    """Build the method for ``operation``.

    ``inputs`` are the positional identifiers of the operation:
    ``(exchange, type='direct')`` to declare, ``(exchange,)`` to delete,
    ``(destination, source)`` to bind or unbind.

    ``options`` is an options instance, a mapping, or None; keyword
    ``overrides`` are applied on top of it. Every omitted option takes its
    documented default.

    Raises :class:`InvalidOptionError` before anything is sent.
    """
    try:
        operation = Operation(operation)
    except ValueError:
        raise InvalidOptionError(
            'operation', operation,
            'expected one of {}'.format(', '.join(op.value for op in Operation))
        ) from None
    builder = _BUILDERS[operation]
    request = builder(*inputs, options=options, **overrides)
    # Everything built must go on the wire as is.
    try:
        request.dump()
    except (ValueError, OverflowError, struct.error) as exc:
        raise InvalidOptionError(
            operation.value, request, 'cannot be encoded ({})'.format(exc)
        ) from exc
    return request


def _arity(operation, inputs, names, required=None):
    required = len(names) if required is None else required
    if not required <= len(inputs) <= len(names):
        raise InvalidOptionError(
            'inputs', inputs, '{} takes {}'.format(
                operation.value, ', '.join(names)
            )
        )


def _build_declare(*inputs, options=None, **overrides):
    _arity(Operation.DECLARE, inputs, ('exchange', 'type'), required=1)
    exchange = check_short_str('exchange', inputs[0])
    type_ = ExchangeType.wire_name(
        inputs[1] if len(inputs) > 1 else ExchangeType.DIRECT
    )
    opts = DeclareOptions.resolve(options, **overrides)
    return methods.ExchangeDeclare(
        exchange=exchange,
        type=type_,
        passive=opts.passive,
        durable=opts.durable,
        auto_delete=opts.auto_delete,
        internal=opts.internal,
        no_wait=opts.no_wait,
        arguments=opts.arguments,
    )


def _build_delete(*inputs, options=None, **overrides):
    _arity(Operation.DELETE, inputs, ('exchange',))
    exchange = check_short_str('exchange', inputs[0])
    opts = DeleteOptions.resolve(options, **overrides)
    return methods.ExchangeDelete(
        exchange=exchange,
        if_unused=opts.if_unused,
        no_wait=opts.no_wait,
    )


def _binding_builder(operation, method_cls):
    def builder(*inputs, options=None, **overrides):
        _arity(operation, inputs, ('destination', 'source'))
        destination = check_short_str('destination', inputs[0])
        source = check_short_str('source', inputs[1])
        opts = BindOptions.resolve(options, **overrides)
        return method_cls(
            destination=destination,
            source=source,
            routing_key=opts.routing_key,
            no_wait=opts.no_wait,
            arguments=opts.arguments,
        )
    return builder


_BUILDERS = {
    Operation.DECLARE: _build_declare,
    Operation.DELETE: _build_delete,
    Operation.BIND: _binding_builder(Operation.BIND, methods.ExchangeBind),
    Operation.UNBIND: _binding_builder(Operation.UNBIND,
                                       methods.ExchangeUnbind),
}
