"""
amqtopo
~~~~~~~

AMQP 0-9-1 exchange topology: declare, delete, bind and unbind exchanges
over a channel you already have.
"""

from .exchange import (  # noqa
    declare, delete, bind, unbind, direct, fanout, topic, Exchange,
)
from .options import (  # noqa
    ExchangeType, DeclareOptions, DeleteOptions, BindOptions,
)
from .builder import build, Operation  # noqa
from .dispatcher import call  # noqa
from .abstract_channel import AbstractChannel, FutureChannel  # noqa
from .exceptions import (  # noqa
    TopologyError, InvalidOptionError, ProtocolFault, UnexpectedResponseError,
)

__version__ = '0.1.0'
