import pytest

from amqtopo import methods
from amqtopo.abstract_channel import AbstractChannel


class StubChannel(AbstractChannel):
    """Records every method sent and answers with ``reply(method)``."""

    def __init__(self, reply):
        self.sent = []
        self._reply = reply

    def call(self, method):
        self.sent.append(method)
        return self._reply(method)


def confirm(method):
    if method.response is None or method.no_wait:
        return None
    return method.response()


@pytest.fixture
def channel():
    return StubChannel(confirm)


@pytest.fixture
def stub_channel():
    """Build a channel answering with a fixed response."""
    def factory(response):
        return StubChannel(lambda method: response)
    return factory


@pytest.fixture
def broken_channel():
    def reply(method):
        raise ConnectionResetError('connection reset by peer')
    return StubChannel(reply)


@pytest.fixture
def closing_channel():
    """Build a channel on which the broker refuses every method."""
    def factory(reply_code, reply_text='', close_cls=methods.ChannelClose):
        return StubChannel(lambda method: close_cls(
            reply_code=reply_code,
            reply_text=reply_text,
            reply_class_id=method.class_id,
            reply_method_id=method.method_id,
        ))
    return factory
