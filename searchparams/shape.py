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
Walks a schema's fields to go between query parameters and a loosely-typed mapping.

The mapping built here has the schema's shape but is not validated yet, that is done by `searchparams.serializer`.
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel

from searchparams.codec import decode_value, encode_value
from searchparams.conf.settings import CodecSettings
from searchparams.exceptions import CodecError, PreconditionError
from searchparams.kinds import ArrayKind, ScalarKind
from searchparams.params import SearchParams
from searchparams.schema import SchemaField, find_field, record_items, schema_fields
from searchparams.utils.json import canonical_json

DefaultData = Mapping[str, Any] | BaseModel

_SCALAR_TYPES = (str, int, float, datetime, Enum, type(None))


class ShapeBuild(NamedTuple):
    # default values, by query key
    defaults: dict[str, Any]
    # values decoded from the query parameters, by query key
    values: dict[str, Any]
    # fields whose value could not be decoded, by query key
    errors: dict[str, CodecError]

    @property
    def shape(self) -> dict[str, Any]:
        """Decoded values on top of the defaults."""
        return {**self.defaults, **self.values}


def defaults_by_key(fields: tuple[SchemaField, ...], default_data: Optional[DefaultData]) -> dict[str, Any]:
    """Translate default data, given by field name (or query key), to a mapping by query key."""
    if default_data is None:
        return {}
    defaults = {}
    by_name = {field.name: field for field in fields}
    for name, value in record_items(default_data):
        field = by_name.get(name)
        defaults[field.key if field is not None else name] = value
    return defaults


def _decode_field(field: SchemaField, raw_values: list[str], settings: CodecSettings | None) -> Any:
    if isinstance(field.kind, ArrayKind):
        element = field.kind.element
        return [
            decode_value(element, raw, field=field.key, index=i, settings=settings) for i, raw in enumerate(raw_values)
        ]
    # a repeated key for a single-valued field: the last occurrence wins
    return decode_value(field.kind, raw_values[-1], field=field.key, settings=settings)


def build_shape(
    schema: type[BaseModel],
    params: SearchParams,
    default_data: Optional[DefaultData] = None,
    *,
    settings: CodecSettings | None = None,
) -> ShapeBuild:
    """Decode every schema field present in `params`, keeping track of the ones that fail instead of raising.

    Only the keys declared by the schema are looked up, an array field is assigned as soon as its key is present.
    """
    fields = schema_fields(schema)
    values: dict[str, Any] = {}
    errors: dict[str, CodecError] = {}
    for field in fields:
        raw_values = params.get_all(field.key)
        if not raw_values:
            continue
        try:
            values[field.key] = _decode_field(field, raw_values, settings)
        except CodecError as e:
            errors[field.key] = e
    return ShapeBuild(defaults_by_key(fields, default_data), values, errors)


def build(
    schema: type[BaseModel],
    params: SearchParams,
    default_data: Optional[DefaultData] = None,
    *,
    settings: CodecSettings | None = None,
) -> dict[str, Any]:
    """The loosely-typed mapping for `params`, seeded with `default_data`. Raises the first `CodecError`."""
    result = build_shape(schema, params, default_data, settings=settings)
    if result.errors:
        raise next(iter(result.errors.values()))
    return result.shape


def values_equal(a: Any, b: Any) -> bool:
    """Deep equality used to find values that don't differ from their default.

    Scalars compare by value (enum members by their value), anything else compares by its canonical JSON form so two
    equal but distinct objects are equal.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, _SCALAR_TYPES) or isinstance(b, _SCALAR_TYPES):
        if isinstance(a, Enum):
            a = a.value
        if isinstance(b, Enum):
            b = b.value
        return bool(a == b)
    json_a = canonical_json(a)
    if json_a is None:
        return bool(a == b)
    return json_a == canonical_json(b)


def _omitted_is_none(schema: type[BaseModel], field: SchemaField, defaults: Mapping[str, Any]) -> bool:
    # what decode yields for a field left out: the default data first, then the schema default
    if field.name in defaults:
        return defaults[field.name] is None
    info = schema.model_fields[field.name]
    return not info.is_required() and info.get_default(call_default_factory=True) is None


def flatten(
    schema: type[BaseModel],
    record: BaseModel | Mapping[str, Any],
    default_data: Optional[DefaultData] = None,
    *,
    settings: CodecSettings | None = None,
) -> SearchParams:
    """Render a record to query parameters, skipping the values equal to their default.

    `None` values are skipped too, so they are only accepted where the omitted field decodes back to `None`, raises
    `PreconditionError` otherwise. Keys unknown to the schema are encoded as opaque values.
    """
    defaults = dict(record_items(default_data)) if default_data is not None else {}
    params = SearchParams()
    for name, value in record_items(record):
        if name in defaults and values_equal(value, defaults[name]):
            continue
        field = find_field(schema, name)
        if value is None:
            if field is not None and not _omitted_is_none(schema, field, defaults):
                raise PreconditionError(f'{field.key!r} is None but would decode to its default, None cannot be encoded')
            continue
        if field is None:
            params.append(name, encode_value(ScalarKind.OPAQUE, value, settings=settings))
        elif isinstance(field.kind, ArrayKind):
            for item in value:
                params.append(field.key, encode_value(field.kind.element, item, settings=settings))
        else:
            params.append(field.key, encode_value(field.kind, value, settings=settings))
    return params
