from collections.abc import Mapping

import attr
import pytest
import hypothesis as h

from amqtopo.exceptions import InvalidOptionError
from amqtopo.options import (
    ExchangeType, DeclareOptions, DeleteOptions, BindOptions,
)
from amqtopo.serialization import FieldTable, freeze

from .strategies import declare_options, delete_options, bind_options


def test_declare_defaults():
    opts = DeclareOptions()
    assert opts.durable is False
    assert opts.auto_delete is False
    assert opts.passive is False
    assert opts.internal is False
    assert opts.no_wait is False
    assert opts.arguments == {}


def test_delete_defaults():
    opts = DeleteOptions()
    assert opts.if_unused is False
    assert opts.no_wait is False


def test_bind_defaults():
    opts = BindOptions()
    assert opts.routing_key == ''
    assert opts.no_wait is False
    assert opts.arguments == {}


@h.given(declare_options)
def test_declare_omitted_keys_take_defaults(mapping):
    opts = DeclareOptions.from_mapping(mapping)
    defaults = DeclareOptions()
    for field in attr.fields(DeclareOptions):
        expected = mapping.get(field.name, getattr(defaults, field.name))
        assert getattr(opts, field.name) == freeze(expected)


@h.given(delete_options)
def test_delete_omitted_keys_take_defaults(mapping):
    opts = DeleteOptions.from_mapping(mapping)
    assert opts.if_unused is mapping.get('if_unused', False)
    assert opts.no_wait is mapping.get('no_wait', False)


@h.given(bind_options)
def test_bind_omitted_keys_take_defaults(mapping):
    opts = BindOptions.from_mapping(mapping)
    assert opts.routing_key == mapping.get('routing_key', '')
    assert opts.no_wait is mapping.get('no_wait', False)
    assert opts.arguments == freeze(mapping.get('arguments', {}))


@pytest.mark.parametrize('cls,mapping', [
    (DeclareOptions, {'durabel': True}),
    (DeclareOptions, {'if_unused': True}),
    (DeleteOptions, {'durable': True}),
    (BindOptions, {'routing-key': 'a.b'}),
    (BindOptions, {1: 'a.b'}),
])
def test_unknown_keys_are_rejected(cls, mapping):
    with pytest.raises(InvalidOptionError) as exc:
        cls.from_mapping(mapping)
    assert exc.value.option == list(mapping)[0]
    assert 'unknown option' in str(exc.value)


@pytest.mark.parametrize('cls,mapping', [
    (DeclareOptions, {'durable': 1}),
    (DeclareOptions, {'no_wait': 'yes'}),
    (DeclareOptions, {'arguments': [('alternate-exchange', 'ae')]}),
    (DeclareOptions, {'arguments': 'x-match=all'}),
    (DeclareOptions, {'arguments': {1: 'one'}}),
    (DeclareOptions, {'arguments': {'x-thing': object()}}),
    (DeclareOptions, {'arguments': {'x-big': 2 ** 64}}),
    (DeclareOptions, {'arguments': {'k' * 256: 1}}),
    (DeleteOptions, {'if_unused': None}),
    (BindOptions, {'routing_key': None}),
    (BindOptions, {'routing_key': 'k' * 256}),
    (BindOptions, {'arguments': {'x-match': set()}}),
])
def test_malformed_values_are_rejected(cls, mapping):
    with pytest.raises(InvalidOptionError) as exc:
        cls.from_mapping(mapping)
    assert exc.value.option == list(mapping)[0]


def test_options_must_be_a_mapping():
    with pytest.raises(InvalidOptionError):
        DeclareOptions.from_mapping([('durable', True)])


def test_none_options_are_defaults():
    assert DeclareOptions.from_mapping(None) == DeclareOptions()


def test_instances_pass_through():
    opts = BindOptions(routing_key='a.*')
    assert BindOptions.from_mapping(opts) is opts


def test_overrides_take_precedence():
    opts = DeclareOptions.resolve({'durable': True, 'internal': True},
                                  internal=False, no_wait=True)
    assert opts == DeclareOptions(durable=True, internal=False, no_wait=True)


def test_overrides_are_checked():
    with pytest.raises(InvalidOptionError):
        DeclareOptions.resolve(durable=True, exclusive=True)


def test_options_are_frozen():
    opts = DeclareOptions(arguments={'alternate-exchange': 'ae'})
    with pytest.raises(attr.exceptions.FrozenInstanceError):
        opts.durable = True
    with pytest.raises(TypeError):
        opts.arguments['alternate-exchange'] = 'other'


def test_arguments_are_copied():
    arguments = {'alternate-exchange': 'ae'}
    opts = DeclareOptions(arguments=arguments)
    arguments['alternate-exchange'] = 'other'
    assert opts.arguments == {'alternate-exchange': 'ae'}


class Headers(Mapping):

    def __init__(self, **headers):
        self._headers = headers

    def __getitem__(self, key):
        return self._headers[key]

    def __iter__(self):
        return iter(self._headers)

    def __len__(self):
        return len(self._headers)


@pytest.mark.parametrize('arguments', [
    Headers(**{'x-match': 'all'}),
    {'x-nested': Headers(a=1)},
    Headers(nested=Headers(a=Headers(b=[1, {'c': 2}]))),
])
def test_mappings_are_accepted_at_every_level(arguments):
    opts = BindOptions(arguments=arguments)
    assert isinstance(opts.arguments, FieldTable)
    assert opts.arguments == freeze(arguments)


def test_nested_keys_must_be_strings():
    with pytest.raises(InvalidOptionError) as exc:
        BindOptions(arguments={'x-nested': {1: 'one'}})
    assert exc.value.option == 'arguments'


def test_options_are_hashable():
    opts = DeclareOptions(arguments={'x-nested': {'k': ['v']}})
    same = DeclareOptions(arguments={'x-nested': {'k': ('v',)}})
    assert hash(opts) == hash(same)


@pytest.mark.parametrize('value,expected', [
    ('direct', ExchangeType.DIRECT),
    ('fanout', ExchangeType.FANOUT),
    ('topic', ExchangeType.TOPIC),
    ('headers', ExchangeType.HEADERS),
    (ExchangeType.TOPIC, ExchangeType.TOPIC),
    ('x-consistent-hash', 'x-consistent-hash'),
])
def test_exchange_type_coercion(value, expected):
    assert ExchangeType.coerce(value) == expected


@pytest.mark.parametrize('value', ['', None, 42, b'direct'])
def test_invalid_exchange_types(value):
    with pytest.raises(InvalidOptionError):
        ExchangeType.coerce(value)


def test_exchange_type_wire_name():
    assert ExchangeType.wire_name(ExchangeType.FANOUT) == 'fanout'
    assert ExchangeType.wire_name('x-delayed-message') == 'x-delayed-message'
