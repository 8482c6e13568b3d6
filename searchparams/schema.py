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
The schema side of the codec: what kind each field of a pydantic model has, and how records are validated.

Kinds are inferred from the field annotations:

>>> from datetime import datetime
>>> from typing import Literal, Optional
>>> from pydantic import BaseModel
>>> class Search(BaseModel):
...     q: str
...     page: int = 1
...     score: float = 0.0
...     exact: bool = False
...     since: Optional[datetime] = None
...     order: Literal['asc', 'desc'] = 'asc'
...     tags: list[str] = []
...     extra: dict[str, int] = {}
>>> for name, kind in field_kinds(Search).items():
...     print(name, kind)
q ScalarKind.STRING
page ScalarKind.BIG_INTEGER
score ScalarKind.NUMBER
exact ScalarKind.BOOLEAN
since ScalarKind.DATE
order ScalarKind.ENUM
tags ArrayKind(ScalarKind.STRING)
extra ScalarKind.OPAQUE
"""

import functools
import types
from collections.abc import Mapping, MutableSequence, MutableSet, Sequence, Set
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, NamedTuple, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from searchparams.kinds import ArrayKind, FieldKind, ScalarKind
from searchparams.utils.result import Result, as_result

M = TypeVar('M', bound=BaseModel)

_ARRAY_ORIGINS = (list, set, frozenset, Sequence, MutableSequence, Set, MutableSet)
_NONE_TYPE = type(None)


class SchemaField(NamedTuple):
    # attribute name on the model
    name: str
    # query-string key, the alias when there is one
    key: str
    kind: FieldKind


def _is_string_literal(annotation: Any) -> bool:
    return get_origin(annotation) is Literal and all(isinstance(arg, str) for arg in get_args(annotation))


def _is_string_enum(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, Enum) and all(
        isinstance(member.value, str) for member in annotation
    )


def kind_for_annotation(annotation: Any, *, allow_array: bool = True) -> FieldKind:
    """Infer the field kind of a type annotation.

    `Optional[X]` and `Annotated[X, ...]` have the kind of `X`. Element kinds of arrays are inferred with
    `allow_array=False`, so a nested sequence becomes an opaque element.
    """
    origin = get_origin(annotation)

    if origin is Annotated:
        return kind_for_annotation(get_args(annotation)[0], allow_array=allow_array)

    if origin is Literal:
        return ScalarKind.ENUM if _is_string_literal(annotation) else ScalarKind.OPAQUE

    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
        if len(args) == 1:
            return kind_for_annotation(args[0], allow_array=allow_array)
        if all(_is_string_literal(arg) or _is_string_enum(arg) for arg in args):
            return ScalarKind.ENUM
        return ScalarKind.OPAQUE

    if origin in _ARRAY_ORIGINS or annotation in (list, set, frozenset):
        if not allow_array:
            return ScalarKind.OPAQUE
        args = get_args(annotation)
        element = kind_for_annotation(args[0], allow_array=False) if args else ScalarKind.OPAQUE
        assert isinstance(element, ScalarKind)
        return ArrayKind(element)

    if origin is not None or not isinstance(annotation, type):
        return ScalarKind.OPAQUE

    # order matters: str-based enums are also str, bool is also int
    if issubclass(annotation, Enum):
        return ScalarKind.ENUM if _is_string_enum(annotation) else ScalarKind.OPAQUE
    if issubclass(annotation, bool):
        return ScalarKind.BOOLEAN
    if issubclass(annotation, int):
        return ScalarKind.BIG_INTEGER
    if issubclass(annotation, float):
        return ScalarKind.NUMBER
    if issubclass(annotation, str):
        return ScalarKind.STRING
    if issubclass(annotation, datetime):
        return ScalarKind.DATE
    return ScalarKind.OPAQUE


@functools.lru_cache(maxsize=None)
def schema_fields(schema: type[BaseModel]) -> tuple[SchemaField, ...]:
    """The fields of a schema in declaration order, which is also the order used when encoding."""
    fields = []
    for name, info in schema.model_fields.items():
        key = info.alias if isinstance(info.alias, str) else name
        fields.append(SchemaField(name, key, kind_for_annotation(info.annotation)))
    return tuple(fields)


def field_kinds(schema: type[BaseModel]) -> dict[str, FieldKind]:
    """Mapping of field name to its kind, in declaration order."""
    return {field.name: field.kind for field in schema_fields(schema)}


def find_field(schema: type[BaseModel], name: str) -> SchemaField | None:
    """Look a field up by its name or by its query key."""
    for field in schema_fields(schema):
        if name == field.name or name == field.key:
            return field
    return None


def record_items(record: BaseModel | Mapping[str, Any]) -> list[tuple[str, Any]]:
    """The (name, value) pairs of a record, either a model instance or a plain mapping."""
    if isinstance(record, BaseModel):
        return [(name, getattr(record, name)) for name in type(record).model_fields]
    return list(record.items())


def validate(schema: type[M], data: Mapping[str, Any]) -> M:
    """Validate a loosely-typed mapping, raises `pydantic.ValidationError`."""
    return schema.model_validate(data)


def try_validate(schema: type[M], data: Mapping[str, Any]) -> Result[M, ValidationError]:
    """Same as `validate` but returns `Err(error)` instead of raising."""
    return as_result(ValidationError)(validate)(schema, data)
