"""
amqtopo.dispatcher
~~~~~~~~~~~~~~~~~~

Synchronous exchange method calls over a caller-supplied channel.
"""

import logging

from . import methods
from . import replies
from .fsm import Call
from .exceptions import ProtocolFault, UnexpectedResponseError

__all__ = ['call']


def call(channel, request):
    """Send ``request`` over ``channel`` and check the broker's answer.

    The channel is anything with a blocking ``call(method)`` that
    returns the broker's response (or None for ``no_wait`` methods) and
    raises on transport failures.

    Returns the finished :class:`~amqtopo.fsm.Call`: ``CONFIRMED`` once
    the expected confirmation is received, ``ACCEPTED`` as soon as the
    channel took a ``no_wait`` request. Raises :class:`ProtocolFault`
    otherwise, with the ``FAULTED`` call attached.
    """
    state = Call(request)
    operation = request.name
    logging.info('[%s] sending %s', operation, request)
    state.send()
    try:
        response = channel.call(request)
    except Exception as exc:
        _finish(state, state.fault)
        logging.warning('[%s] channel failed: %r', operation, exc)
        reply = exc if isinstance(exc, replies.Reply) else None
        raise ProtocolFault(
            operation, repr(exc), cause=exc, reply=reply, call=state,
        ) from exc
    state.response = response

    if not request.has_response():
        # Whatever the channel returned, the broker sends nothing back.
        return _finish(state, state.accept)

    logging.info('[%s] receiving %s', operation, response)
    expected = request.response
    if isinstance(response, expected):
        return _finish(state, state.confirm)

    _finish(state, state.fault)
    if isinstance(response, (methods.ChannelClose, methods.ConnectionClose)):
        reply = replies.Reply.from_close_method(response)
        logging.warning('[%s] refused by the broker: %s', operation, reply)
        raise ProtocolFault(
            operation, '{} ({})'.format(response.reply_text,
                                        response.reply_code),
            response=response, reply=reply, call=state,
        )
    if isinstance(response, methods.Method):
        logging.warning('[%s] unexpected response %s', operation, response)
        raise UnexpectedResponseError(operation, expected, response,
                                      call=state)
    logging.warning('[%s] malformed response %r', operation, response)
    raise ProtocolFault(
        operation, 'malformed response {!r}'.format(response),
        response=response, call=state,
    )


def _finish(state, trigger):
    trigger()
    logging.info('[%s] %s', state.method.name, state.state)
    return state
