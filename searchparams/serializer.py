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
Public operations: decode query parameters into a validated pydantic model and encode a model back.

>>> from pydantic import BaseModel
>>> class Person(BaseModel):
...     name: str
...     age: float
...     hobbies: list[str]
>>> params = encode(Person, Person(name='John Doe', age=30, hobbies=['reading', 'cycling']))
>>> str(params)
'name=John+Doe&age=30&hobbies=reading&hobbies=cycling'
>>> decode(Person, params)
Person(name='John Doe', age=30.0, hobbies=['reading', 'cycling'])
"""

from collections.abc import Mapping
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import InitErrorDetails, PydanticCustomError
from structlog import get_logger

from searchparams.conf.settings import DEFAULT_SETTINGS, CodecSettings
from searchparams.exceptions import CodecError, PreconditionError
from searchparams.kinds import FieldKind
from searchparams.params import ParamsLike, SearchParams, as_search_params
from searchparams.schema import field_kinds, schema_fields, try_validate, validate
from searchparams.shape import DefaultData, ShapeBuild, build_shape, defaults_by_key, flatten
from searchparams.utils.result import Result, as_result, is_ok

logger = get_logger()

M = TypeVar('M', bound=BaseModel)


def _merge_errors(
    schema: type[BaseModel],
    codec_errors: dict[str, CodecError],
    validation_error: Optional[ValidationError],
) -> ValidationError:
    """A single `ValidationError` with the codec failures first, then the schema errors of the other fields."""
    line_errors: list[InitErrorDetails] = [error.to_error_details() for error in codec_errors.values()]
    if validation_error is not None:
        for detail in validation_error.errors():
            loc = detail['loc']
            if loc and loc[0] in codec_errors:
                continue
            line_errors.append(InitErrorDetails(
                type=PydanticCustomError(detail['type'], detail['msg']),
                loc=loc,
                input=detail.get('input'),
            ))
    return ValidationError.from_exception_data(schema.__name__, line_errors)


def _validate_build(schema: type[M], result: ShapeBuild) -> M:
    try:
        record = validate(schema, result.shape)
    except ValidationError as e:
        if not result.errors:
            raise
        raise _merge_errors(schema, result.errors, e) from e
    if result.errors:
        raise _merge_errors(schema, result.errors, None)
    return record


def decode(
    schema: type[M],
    params: ParamsLike,
    default_data: Optional[DefaultData] = None,
    *,
    settings: CodecSettings | None = None,
) -> M:
    """Decode query parameters into a validated instance of `schema`.

    `default_data` fills the fields absent from `params` before validation. Raises `pydantic.ValidationError`, values
    that cannot be parsed at all (a bad number, a bad opaque payload) are reported in it with a `invalid_<kind>` type.
    """
    result = build_shape(schema, as_search_params(params), default_data, settings=settings)
    return _validate_build(schema, result)


def try_decode(
    schema: type[M],
    params: ParamsLike,
    default_data: Optional[DefaultData] = None,
    *,
    settings: CodecSettings | None = None,
) -> Result[M, ValidationError]:
    """Same as `decode` but returns `Ok(record)` or `Err(validation_error)` instead of raising."""
    return as_result(ValidationError)(decode)(schema, params, default_data, settings=settings)


def _has_error_at(error: ValidationError, key: str) -> bool:
    return any(detail['loc'] and detail['loc'][0] == key for detail in error.errors())


def lenient_decode(
    schema: type[M],
    params: ParamsLike,
    default_data: DefaultData,
    *,
    settings: CodecSettings | None = None,
) -> M:
    """Decode query parameters, replacing each field that fails by its value in `default_data`.

    The whole input is tried first. If it fails, each decoded field is checked on its own on top of the defaults and
    kept only when it brings no error at its own location. If the kept fields still fail together, the defaults are
    used for every field. This can only raise if `default_data` itself is not valid for `schema`.
    """
    result = build_shape(schema, as_search_params(params), default_data, settings=settings)
    if not result.errors:
        fast = try_validate(schema, result.shape)
        if is_ok(fast):
            return fast.unwrap()

    log = logger.new(schema=schema.__name__)
    defaults = defaults_by_key(schema_fields(schema), default_data)
    shape = dict(defaults)
    rejected: list[str] = list(result.errors)
    for key, value in result.values.items():
        check = try_validate(schema, {**defaults, key: value})
        if check.is_err() and _has_error_at(check.unwrap_err(), key):
            rejected.append(key)
            continue
        shape[key] = value

    recovered = try_validate(schema, shape)
    if is_ok(recovered):
        log.debug('lenient decode fell back to defaults', fields=rejected)
        return recovered.unwrap()

    # the kept fields are not valid together (model-level validation), only the defaults are left
    log.debug('lenient decode fell back to defaults', fields=[*result.errors, *result.values])
    return validate(schema, defaults)


def encode(
    schema: type[M],
    record: M | Mapping[str, Any],
    default_data: Optional[DefaultData] = None,
    *,
    settings: CodecSettings | None = None,
) -> SearchParams:
    """Encode a record into query parameters, omitting the fields equal to their value in `default_data`.

    The record must be valid for `schema` (an instance of it, or a mapping validated beforehand). This is not
    checked, encoding anything else has undefined results.
    Raises `PreconditionError` for a `None` that would not decode back to `None` once omitted.
    """
    return flatten(schema, record, default_data, settings=settings)


class Serializer(Generic[M]):
    """Convenience wrapper binding one schema, and optionally default data and settings, to the operations above.

    The `default_data` given to each method, when not `None`, replaces the bound one.
    """

    def __init__(
        self,
        schema: type[M],
        default_data: Optional[DefaultData] = None,
        *,
        settings: CodecSettings | None = None,
    ) -> None:
        self.schema = schema
        self.default_data = default_data
        self.settings = settings or DEFAULT_SETTINGS

    @property
    def field_kinds(self) -> dict[str, FieldKind]:
        return field_kinds(self.schema)

    def _defaults(self, default_data: Optional[DefaultData]) -> Optional[DefaultData]:
        return default_data if default_data is not None else self.default_data

    def decode(self, params: ParamsLike, default_data: Optional[DefaultData] = None) -> M:
        return decode(self.schema, params, self._defaults(default_data), settings=self.settings)

    def try_decode(self, params: ParamsLike, default_data: Optional[DefaultData] = None) -> Result[M, ValidationError]:
        return try_decode(self.schema, params, self._defaults(default_data), settings=self.settings)

    def lenient_decode(self, params: ParamsLike, default_data: Optional[DefaultData] = None) -> M:
        defaults = self._defaults(default_data)
        if defaults is None:
            raise PreconditionError('lenient_decode needs default data, none was given or bound')
        return lenient_decode(self.schema, params, defaults, settings=self.settings)

    def encode(self, record: M | Mapping[str, Any], default_data: Optional[DefaultData] = None) -> SearchParams:
        return encode(self.schema, record, self._defaults(default_data), settings=self.settings)
