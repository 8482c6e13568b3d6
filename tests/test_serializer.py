from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from searchparams.conf.settings import CodecSettings
from searchparams.exceptions import PreconditionError
from searchparams.kinds import ArrayKind, ScalarKind
from searchparams.params import SearchParams
from searchparams.serializer import Serializer, decode, encode, try_decode
from searchparams.utils.result import Err, Ok


class Pair(BaseModel):
    a: str
    b: str


class Person(BaseModel):
    name: str
    age: float
    is_student: bool


class Counter(BaseModel):
    count: float
    is_active: bool


def test_encode_basic_object() -> None:
    assert str(encode(Pair, Pair(a='one', b='two'))) == 'a=one&b=two'


def test_decode_basic_object() -> None:
    assert decode(Pair, 'a=one&b=two') == Pair(a='one', b='two')


def test_numbers_and_booleans() -> None:
    assert str(encode(Counter, Counter(count=42, is_active=True))) == 'count=42&is_active=t'
    assert decode(Counter, 'count=42&is_active=true') == Counter(count=42, is_active=True)


@pytest.mark.parametrize(
    ['raw', 'expected'],
    [
        ('t', True),
        ('true', True),
        ('f', False),
        ('false', False),
        ('anything', False),
        ('', False),
    ]
)
def test_boolean_wire_form(raw: str, expected: bool) -> None:
    assert decode(Counter, {'count': '1', 'is_active': raw}).is_active is expected


class Tagged(BaseModel):
    tags: list[str]


class Scored(BaseModel):
    tags: list[str]
    scores: list[float]


def test_array_order_is_kept() -> None:
    params = encode(Tagged, Tagged(tags=['a', 'b', 'c']))
    assert str(params) == 'tags=a&tags=b&tags=c'
    assert decode(Tagged, params) == Tagged(tags=['a', 'b', 'c'])


def test_decode_arrays_of_strings_and_numbers() -> None:
    params = 'tags=tag1&tags=tag2&tags=tag3&scores=10&scores=20&scores=30'
    assert decode(Scored, params) == Scored(tags=['tag1', 'tag2', 'tag3'], scores=[10, 20, 30])


def test_duplicate_key_takes_last_occurrence() -> None:
    assert decode(Pair, 'a=1&b=2&a=3') == Pair(a='3', b='2')


def test_decode_with_defaults_for_omitted_fields() -> None:
    defaults = {'name': 'John Doe', 'age': 30, 'is_student': False}
    person = decode(Person, 'name=Jane+Doe', defaults)
    assert person == Person(name='Jane Doe', age=30, is_student=False)


def test_encode_omits_fields_equal_to_defaults() -> None:
    defaults = {'name': 'John Doe', 'age': 30, 'is_student': False}
    params = encode(Person, Person(name='Jane Doe', age=30, is_student=True), defaults)
    assert str(params) == 'name=Jane+Doe&is_student=t'
    assert not params.has('age')
    assert decode(Person, params, defaults) == Person(name='Jane Doe', age=30, is_student=True)


def test_encode_against_itself_is_empty() -> None:
    person = Person(name='Jane Doe', age=30, is_student=True)
    assert len(encode(Person, person, person)) == 0


def test_missing_field_without_default_is_reported() -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode(Person, 'name=Jane')
    errors = exc_info.value.errors()
    assert {(error['loc'], error['type']) for error in errors} == {(('age',), 'missing'), (('is_student',), 'missing')}


class Ident(BaseModel):
    id: int
    name: str


def test_big_integer_keeps_precision() -> None:
    record = Ident(id=9007199254740993, name='Large Number')
    params = encode(Ident, record)
    assert params.get('id') == '9007199254740993'
    decoded = decode(Ident, params)
    assert decoded == record
    assert type(decoded.id) is int
    assert decoded.id != float(decoded.id)


class Event(BaseModel):
    created_at: datetime
    name: str


def test_date_round_trip() -> None:
    record = Event(created_at=datetime(2023, 6, 15, 12, tzinfo=timezone.utc), name='Test Date')
    params = encode(Event, record)
    assert params.get('created_at') == '2023-06-15T12:00:00Z'
    decoded = decode(Event, params)
    assert decoded == record
    assert decoded.created_at.tzinfo is not None


def test_date_from_javascript_form() -> None:
    decoded = decode(Event, 'created_at=2023-06-15T12:00:00.000Z&name=x')
    assert decoded.created_at == datetime(2023, 6, 15, 12, tzinfo=timezone.utc)


class Text(BaseModel):
    c: str


class Wrapper(BaseModel):
    p: Text


class Name(BaseModel):
    name: str


class Account(BaseModel):
    user: Name


def test_nested_object_with_emoji() -> None:
    record = Wrapper(p=Text(c='Hello, 🌍!'))
    decoded = decode(Wrapper, encode(Wrapper, record))
    assert decoded == record
    assert decoded.p.c == 'Hello, 🌍!'


def test_nested_object_wire_form() -> None:
    assert str(encode(Account, Account(user=Name(name='John Doe')))) == 'user=eyJuYW1lIjoiSm9obiBEb2UifQ'
    assert decode(Account, 'user=eyJuYW1lIjoiSm9obiBEb2UifQ').user.name == 'John Doe'


def test_nested_object_with_invalid_payload() -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode(Account, 'user=nope')
    [error] = exc_info.value.errors()
    assert error['type'] == 'invalid_opaque'
    assert error['loc'] == ('user',)
    assert error['input'] == 'nope'


class Labels(BaseModel):
    statuses: list[Text]


def test_array_of_objects_round_trip() -> None:
    record = Labels(statuses=[Text(c='a'), Text(c='b')])
    params = encode(Labels, record)
    assert len(params.get_all('statuses')) == 2
    assert decode(Labels, params) == record


class Color(Enum):
    RED = 'RED'
    GREEN = 'GREEN'
    BLUE = 'BLUE'


class Paint(BaseModel):
    color: Color


def test_native_enum() -> None:
    params = encode(Paint, Paint(color=Color.GREEN))
    assert params.get('color') == 'GREEN'
    decoded = decode(Paint, params)
    assert decoded.color is Color.GREEN


class Published(BaseModel):
    statuses: list[Literal['PUBLISHED', 'UNPUBLISHED']]


def test_array_of_enums() -> None:
    params = encode(Published, Published(statuses=['PUBLISHED', 'UNPUBLISHED']))
    assert str(params) == 'statuses=PUBLISHED&statuses=UNPUBLISHED'


class Membership(BaseModel):
    status: Literal['active']
    role: Literal['admin'] | Literal['user'] | Literal['guest']


@pytest.mark.parametrize('role', ['admin', 'user', 'guest'])
def test_literals(role: str) -> None:
    record = Membership(status='active', role=role)
    params = encode(Membership, record)
    assert params.get('status') == 'active'
    assert params.get('role') == role
    assert decode(Membership, params) == record


def test_literal_rejects_other_values() -> None:
    with pytest.raises(ValidationError):
        decode(Membership, 'status=active&role=root')


class WithDefaults(BaseModel):
    a: str = 'hi'
    b: float = 1


class WithOptionals(BaseModel):
    a: Optional[str] = None
    b: Optional[float] = None


class WithMinimums(BaseModel):
    a: str = Field(min_length=1)
    b: float = Field(ge=1)


def test_schema_defaults() -> None:
    assert decode(WithDefaults, '') == WithDefaults(a='hi', b=1)


def test_optional_fields() -> None:
    decoded = decode(WithOptionals, '')
    assert decoded == WithOptionals()
    assert len(encode(WithOptionals, decoded)) == 0


class WithOptionalNote(BaseModel):
    note: Optional[str] = 'hello'


def test_none_that_would_decode_to_a_default_is_rejected() -> None:
    with pytest.raises(PreconditionError):
        encode(WithOptionalNote, WithOptionalNote(note=None))
    # the default data decides what an omitted key decodes to
    params = encode(WithOptionalNote, WithOptionalNote(note=None), {'note': None})
    assert len(params) == 0
    assert decode(WithOptionalNote, params, {'note': None}) == WithOptionalNote(note=None)
    assert decode(WithOptionalNote, encode(WithOptionalNote, WithOptionalNote())) == WithOptionalNote()


class Tags(BaseModel):
    tags: list[str]


def test_required_empty_array_does_not_round_trip() -> None:
    params = encode(Tags, Tags(tags=[]))
    assert len(params) == 0
    with pytest.raises(ValidationError) as exc_info:
        decode(Tags, params)
    assert [(e['loc'], e['type']) for e in exc_info.value.errors()] == [(('tags',), 'missing')]
    # with the empty list as default data both sides agree
    assert decode(Tags, encode(Tags, Tags(tags=[]), {'tags': []}), {'tags': []}) == Tags(tags=[])


def test_constraints() -> None:
    assert decode(WithMinimums, 'a=hi&b=1') == WithMinimums(a='hi', b=1)
    with pytest.raises(ValidationError) as exc_info:
        decode(WithMinimums, 'a=&b=0')
    assert {error['type'] for error in exc_info.value.errors()} == {'string_too_short', 'greater_than_equal'}


def test_codec_failures_are_reported_with_schema_errors() -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode(Person, 'age=not+a+number&is_student=t')
    errors = exc_info.value.errors()
    assert [(error['loc'], error['type']) for error in errors] == [
        (('age',), 'invalid_number'),
        (('name',), 'missing'),
    ]


def test_try_decode() -> None:
    valid = try_decode(Person, 'name=John&age=30&is_student=f')
    assert valid == Ok(Person(name='John', age=30, is_student=False))

    invalid = try_decode(Person, 'name=John&age=not+a+number&is_student=f')
    assert isinstance(invalid, Err)
    error = invalid.unwrap_err()
    assert isinstance(error, ValidationError)
    assert error.errors()[0]['loc'] == ('age',)
    assert error.errors()[0]['type'] == 'invalid_number'


def test_try_decode_schema_error() -> None:
    result = try_decode(Person, 'name=John&is_student=f')
    assert result.is_err()
    assert result.unwrap_err().errors()[0]['type'] == 'missing'


class Flag(BaseModel):
    on: bool


def test_settings_are_used_both_ways() -> None:
    settings = CodecSettings(true_token='1', false_token='0', truthy_tokens=('1',))
    params = encode(Flag, Flag(on=True), settings=settings)
    assert str(params) == 'on=1'
    assert decode(Flag, params, settings=settings) == Flag(on=True)
    assert decode(Flag, 'on=t', settings=settings) == Flag(on=False)


def test_serializer_round_trip() -> None:
    serializer = Serializer(Person)
    record = Person(name='John Doe', age=30, is_student=False)
    params = serializer.encode(record)
    assert str(params) == 'name=John+Doe&age=30&is_student=f'
    assert serializer.decode(params) == record
    assert serializer.try_decode(params) == Ok(record)


def test_serializer_binds_default_data() -> None:
    defaults = {'name': 'John Doe', 'age': 30, 'is_student': False}
    serializer = Serializer(Person, defaults)
    record = Person(name='John Doe', age=31, is_student=False)
    params = serializer.encode(record)
    assert str(params) == 'age=31'
    assert serializer.decode(params) == record
    # given default data replaces the bound one
    assert str(serializer.encode(record, {'age': 31})) == 'name=John+Doe&is_student=f'


def test_serializer_field_kinds() -> None:
    assert Serializer(Scored).field_kinds == {
        'tags': ArrayKind(ScalarKind.STRING),
        'scores': ArrayKind(ScalarKind.NUMBER),
    }


def test_serializer_lenient_decode_needs_defaults() -> None:
    with pytest.raises(PreconditionError):
        Serializer(Person).lenient_decode('name=x')


def test_serializer_accepts_search_params() -> None:
    params = SearchParams([('a', 'x'), ('b', 'y')])
    assert Serializer(Pair).decode(params) == Pair(a='x', b='y')
