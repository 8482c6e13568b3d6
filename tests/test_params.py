import pytest

from searchparams.params import SearchParams, as_search_params


def test_append_keeps_order_and_duplicates() -> None:
    params = SearchParams()
    params.append('tags', 'a')
    params.append('name', 'x')
    params.append('tags', 'b')
    assert params.items() == [('tags', 'a'), ('name', 'x'), ('tags', 'b')]
    assert params.get_all('tags') == ['a', 'b']
    assert params.get('tags') == 'a'
    assert params.keys() == ['tags', 'name']
    assert len(params) == 3


def test_missing_key() -> None:
    params = SearchParams([('a', '1')])
    assert params.get('b') is None
    assert params.get_all('b') == []
    assert not params.has('b')
    assert 'b' not in params
    assert 'a' in params


def test_set_and_delete() -> None:
    params = SearchParams([('a', '1'), ('b', '2'), ('a', '3')])
    params.set('a', '4')
    assert params.items() == [('a', '4'), ('b', '2')]
    params.set('c', '5')
    assert params.items() == [('a', '4'), ('b', '2'), ('c', '5')]
    params.delete('b')
    assert params.items() == [('a', '4'), ('c', '5')]


@pytest.mark.parametrize(
    ['query', 'expected'],
    [
        ('', []),
        ('?', []),
        ('a=1', [('a', '1')]),
        ('?a=1&b=2', [('a', '1'), ('b', '2')]),
        ('tags=x&tags=y', [('tags', 'x'), ('tags', 'y')]),
        ('name=John+Doe', [('name', 'John Doe')]),
        ('name=John%20Doe', [('name', 'John Doe')]),
        ('a=&b', [('a', ''), ('b', '')]),
        ('emoji=%F0%9F%8C%8D', [('emoji', '🌍')]),
        ('k%26=v%3D', [('k&', 'v=')]),
    ]
)
def test_from_query_string(query: str, expected: list[tuple[str, str]]) -> None:
    assert SearchParams.from_query_string(query).items() == expected


def test_to_query_string() -> None:
    params = SearchParams([('name', 'John Doe'), ('q', 'a&b=c'), ('tags', 'x'), ('tags', 'y')])
    assert params.to_query_string() == 'name=John+Doe&q=a%26b%3Dc&tags=x&tags=y'
    assert str(params) == params.to_query_string()
    assert SearchParams.from_query_string(str(params)) == params


def test_equality() -> None:
    assert SearchParams([('a', '1')]) == SearchParams.from_query_string('a=1')
    assert SearchParams([('a', '1'), ('b', '2')]) != SearchParams([('b', '2'), ('a', '1')])
    assert SearchParams() != 'a=1'
    assert not SearchParams()


def test_as_search_params() -> None:
    expected = SearchParams([('a', '1'), ('tags', 'x'), ('tags', 'y')])
    assert as_search_params('a=1&tags=x&tags=y') == expected
    assert as_search_params({'a': '1', 'tags': ['x', 'y']}) == expected
    assert as_search_params([('a', '1'), ('tags', 'x'), ('tags', 'y')]) == expected
    assert as_search_params(expected) is expected
