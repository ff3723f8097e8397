class TopologyError(Exception):
    pass


class InvalidOptionError(TopologyError, ValueError):

    def __init__(self, option, value, reason):
        super().__init__('invalid {} {!r}: {}'.format(option, value, reason))
        self.option = option
        self.value = value
        self.reason = reason


class ProtocolFault(TopologyError):
    """The broker (or the channel carrying the method) did not confirm
    an operation.

    ``reply`` is set when the broker closed the channel or the connection
    instead of confirming; ``cause`` is set when the channel itself raised.
    ``call`` is the finished call, left in its ``FAULTED`` state.
    """

    def __init__(self, operation, detail, response=None, cause=None,
                 reply=None, call=None):
        super().__init__('{} failed: {}'.format(operation, detail))
        self.operation = operation
        self.detail = detail
        self.response = response
        self.cause = cause
        self.reply = reply
        self.call = call


class UnexpectedResponseError(ProtocolFault):

    def __init__(self, operation, expected, response, call=None):
        super().__init__(
            operation,
            'expected {}, got {}'.format(
                expected.__name__, type(response).__name__
            ),
            response=response, call=call,
        )
        self.expected = expected
