"""
amqtopo.replies
~~~~~~~~~~~~~~~

Broker replies: channel and connection exceptions a broker answers with
instead of confirming a method.
"""

# pylint: disable=redefined-builtin

import attr

from . import methods


@attr.s(str=True, auto_exc=True)
class Reply(Exception):
    """Generic reply, used as is for reply codes this module doesn't know."""

    reply_text = attr.ib()
    class_id = attr.ib(default=0)
    method_id = attr.ib(default=0)
    reply_code = attr.ib(default=0)
    soft = attr.ib(default=False)

    BY_ID = {}

    @classmethod
    def from_close_method(cls, method):
        """Instantiate the appropriate reply from
        ConnectionClose or ChannelClose methods.
        """
        if not isinstance(method,
                          (methods.ConnectionClose, methods.ChannelClose)):
            raise TypeError('expected a close method, got {!r}'.format(method))
        reply_cls = cls.BY_ID.get(method.reply_code)
        if reply_cls is None:
            # A channel exception is soft, a connection one is hard.
            return Reply(
                reply_text=method.reply_text,
                class_id=method.reply_class_id,
                method_id=method.reply_method_id,
                reply_code=method.reply_code,
                soft=isinstance(method, methods.ChannelClose),
            )
        return reply_cls(
            reply_text=method.reply_text,
            class_id=method.reply_class_id,
            method_id=method.reply_method_id,
        )

    def __init_subclass__(cls, soft, reply_code, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.soft = attr.ib(default=soft, init=False)
        cls.reply_code = attr.ib(default=reply_code, init=False)
        cls.BY_ID[reply_code] = cls


@attr.s(str=True, auto_exc=True)
class ConnectionForced(Reply, soft=False, reply_code=320):
    """An operator closed the connection."""


@attr.s(str=True, auto_exc=True)
class InvalidPath(Reply, soft=False, reply_code=402):
    """Unknown virtual host."""


@attr.s(str=True, auto_exc=True)
class AccessRefused(Reply, soft=True, reply_code=403):
    """The user has no configure permission on the exchange, or tried to
    declare or delete a reserved ``amq.*`` exchange.
    """


@attr.s(str=True, auto_exc=True)
class NotFound(Reply, soft=True, reply_code=404):
    """The exchange does not exist: a passive declare, a delete, or a bind
    referring to a missing source or destination.
    """


@attr.s(str=True, auto_exc=True)
class ResourceLocked(Reply, soft=True, reply_code=405):
    """Another connection holds an exclusive lock on the entity."""


@attr.s(str=True, auto_exc=True)
class PreconditionFailed(Reply, soft=True, reply_code=406):
    """The exchange exists with a different type or flags, or a delete
    with ``if_unused`` hit an exchange that still has bindings.
    """


@attr.s(str=True, auto_exc=True)
class FrameError(Reply, soft=False, reply_code=501):
    """The broker could not decode a frame."""


@attr.s(str=True, auto_exc=True)
class SyntaxError(Reply, soft=False, reply_code=502):
    """A method carried illegal field values."""


@attr.s(str=True, auto_exc=True)
class CommandInvalid(Reply, soft=False, reply_code=503):
    """The method was sent in a context where it is not allowed, e.g.
    declaring an exchange of a type the broker does not know.
    """


@attr.s(str=True, auto_exc=True)
class ChannelError(Reply, soft=False, reply_code=504):
    """The channel was not opened correctly."""


@attr.s(str=True, auto_exc=True)
class UnexpectedFrame(Reply, soft=False, reply_code=505):
    """The broker received a frame it did not expect."""


@attr.s(str=True, auto_exc=True)
class ResourceError(Reply, soft=False, reply_code=506):
    """The broker lacks resources to complete the method."""


@attr.s(str=True, auto_exc=True)
class NotAllowed(Reply, soft=False, reply_code=530):
    """The broker prohibits the operation."""


@attr.s(str=True, auto_exc=True)
class NotImplemented(Reply, soft=False, reply_code=540):
    """The broker does not implement the method, e.g. exchange-to-exchange
    bindings on a broker without that extension.
    """


@attr.s(str=True, auto_exc=True)
class InternalError(Reply, soft=False, reply_code=541):
    """The broker failed internally."""
