__all__ = ['AbstractChannel', 'FutureChannel']


class AbstractChannel:
    """What the dispatcher needs from a channel: a blocking call that sends
    a method and returns the broker's response to it.

    Implementations decide how ``no_wait`` methods are handled; the
    dispatcher ignores whatever they return for them.
    """

    def call(self, method):
        raise NotImplementedError


class FutureChannel(AbstractChannel):
    """Adapts a sender that returns a :class:`concurrent.futures.Future`
    (or None when no reply is expected) into a blocking channel.

    :param send: a callable taking a method, transmitting it and returning
        a future resolved with the broker's response.
    :param timeout: how long to wait for the response, in seconds.
        None waits forever.
    """

    def __init__(self, send, timeout=None):
        self._send = send
        self.timeout = timeout

    def call(self, method):
        fut = self._send(method)
        if fut is not None:
            return fut.result(self.timeout)
        return None
