from transitions import Machine


class Call(Machine):
    """Lifecycle of a single synchronous exchange method call.

    Every state but ``SENT`` is terminal for the purpose of a call;
    ``BUILT`` is only left by sending.
    """

    initial = 'BUILT'
    states = [
        'BUILT',
        'SENT',
        'CONFIRMED',
        'FAULTED',
        'ACCEPTED',
    ]
    transitions = [
        {'trigger': 'send', 'source': 'BUILT', 'dest': 'SENT'},
        {'trigger': 'confirm', 'source': 'SENT', 'dest': 'CONFIRMED'},
        {'trigger': 'fault', 'source': 'SENT', 'dest': 'FAULTED'},
        # no_wait methods: the broker never replies.
        {'trigger': 'accept', 'source': 'SENT', 'dest': 'ACCEPTED'},
    ]

    def __init__(self, method):
        self.method = method
        self.response = None
        super().__init__(
            initial=self.initial, states=self.states,
            transitions=self.transitions,
        )
