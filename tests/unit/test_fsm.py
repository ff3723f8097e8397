import pytest
from transitions import MachineError

from amqtopo import methods
from amqtopo.fsm import Call


@pytest.fixture
def call():
    return Call(methods.ExchangeDelete(exchange='logs'))


def test_initial_state(call):
    assert call.state == 'BUILT'
    assert call.method == methods.ExchangeDelete(exchange='logs')


@pytest.mark.parametrize('trigger,state', [
    ('confirm', 'CONFIRMED'),
    ('fault', 'FAULTED'),
    ('accept', 'ACCEPTED'),
])
def test_sent_calls_terminate(trigger, state, call):
    call.send()
    getattr(call, trigger)()
    assert call.state == state


@pytest.mark.parametrize('trigger', ['confirm', 'fault', 'accept'])
def test_nothing_happens_before_sending(trigger, call):
    with pytest.raises(MachineError):
        getattr(call, trigger)()


@pytest.mark.parametrize('trigger', ['send', 'confirm', 'fault', 'accept'])
def test_terminal_states(trigger, call):
    call.send()
    call.confirm()
    with pytest.raises(MachineError):
        getattr(call, trigger)()
