#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""
An ordered multi-map of query parameters, the in-memory model of a URL query string.

>>> params = SearchParams.from_query_string('?tags=a&tags=b&name=John+Doe')
>>> params.get_all('tags')
['a', 'b']
>>> params.get('name')
'John Doe'
>>> params.append('page', '2')
>>> params.to_query_string()
'tags=a&tags=b&name=John+Doe&page=2'
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Union
from urllib.parse import parse_qsl, urlencode


class SearchParams:
    """Ordered (key, value) pairs where a key may occur zero, one or many times."""

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._items: list[tuple[str, str]] = []
        for key, value in items:
            self.append(key, value)

    @classmethod
    def from_query_string(cls, query: str) -> 'SearchParams':
        """Parse an `application/x-www-form-urlencoded` string, blank values are kept."""
        return cls(parse_qsl(query.removeprefix('?'), keep_blank_values=True))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Union[str, Iterable[str]]]) -> 'SearchParams':
        """Build from a mapping where each value is either a single string or a sequence of strings."""
        params = cls()
        for key, value in mapping.items():
            if isinstance(value, str):
                params.append(key, value)
            else:
                for item in value:
                    params.append(key, item)
        return params

    def append(self, key: str, value: str) -> None:
        assert isinstance(key, str) and isinstance(value, str)
        self._items.append((key, value))

    def set(self, key: str, value: str) -> None:
        """Replace every occurrence of key with a single value, kept at the position of the first occurrence."""
        position = next((i for i, (k, _) in enumerate(self._items) if k == key), len(self._items))
        self.delete(key)
        self._items.insert(position, (key, value))

    def delete(self, key: str) -> None:
        self._items = [(k, v) for k, v in self._items if k != key]

    def get(self, key: str) -> str | None:
        """First value for key, or `None`."""
        return next((v for k, v in self._items if k == key), None)

    def get_all(self, key: str) -> list[str]:
        """All values for key, in order."""
        return [v for k, v in self._items if k == key]

    def has(self, key: str) -> bool:
        return any(k == key for k, _ in self._items)

    def keys(self) -> list[str]:
        """Distinct keys, in order of first occurrence."""
        return list(dict.fromkeys(k for k, _ in self._items))

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def to_query_string(self) -> str:
        return urlencode(self._items)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SearchParams):
            return self._items == other._items
        return NotImplemented

    def __str__(self) -> str:
        return self.to_query_string()

    def __repr__(self) -> str:
        return f'SearchParams({self._items!r})'


ParamsLike = Union[SearchParams, str, Mapping[str, Union[str, Iterable[str]]], Iterable[tuple[str, str]]]


def as_search_params(params: ParamsLike) -> SearchParams:
    """Accept a `SearchParams`, a query string, a mapping or an iterable of pairs."""
    if isinstance(params, SearchParams):
        return params
    if isinstance(params, str):
        return SearchParams.from_query_string(params)
    if isinstance(params, Mapping):
        return SearchParams.from_mapping(params)
    return SearchParams(params)
