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
Kind-directed dispatch between a single native value and its query-string form.

The choice of encoding only depends on the `ScalarKind`, arrays are handled one level up (see `searchparams.shape`).
"""

from typing import Any

from typing_extensions import assert_never

from searchparams.conf.settings import DEFAULT_SETTINGS, CodecSettings
from searchparams.encoding.big_integer import decode_big_integer, encode_big_integer
from searchparams.encoding.bool import decode_bool, encode_bool
from searchparams.encoding.date import decode_date, encode_date
from searchparams.encoding.number import decode_number, encode_number
from searchparams.encoding.opaque import decode_opaque, encode_opaque
from searchparams.encoding.string import decode_enum, decode_string, encode_enum, encode_string
from searchparams.exceptions import CodecError
from searchparams.kinds import ScalarKind


def encode_value(kind: ScalarKind, value: Any, *, settings: CodecSettings | None = None) -> str:
    """Render one value using the encoding of the given kind.

    The value must already be valid for its kind, this is not checked beyond the encoders' assertions.
    """
    settings = settings or DEFAULT_SETTINGS
    match kind:
        case ScalarKind.STRING:
            return encode_string(value)
        case ScalarKind.ENUM:
            return encode_enum(value)
        case ScalarKind.NUMBER:
            return encode_number(value)
        case ScalarKind.BOOLEAN:
            return encode_bool(value, true_token=settings.true_token, false_token=settings.false_token)
        case ScalarKind.DATE:
            return encode_date(value, timespec=settings.date_timespec)
        case ScalarKind.BIG_INTEGER:
            return encode_big_integer(value)
        case ScalarKind.OPAQUE:
            return encode_opaque(value)
        case _:
            assert_never(kind)


def _decode(kind: ScalarKind, raw: str, settings: CodecSettings) -> Any:
    match kind:
        case ScalarKind.STRING:
            return decode_string(raw)
        case ScalarKind.ENUM:
            return decode_enum(raw)
        case ScalarKind.NUMBER:
            return decode_number(raw)
        case ScalarKind.BOOLEAN:
            return decode_bool(raw, truthy_tokens=settings.truthy_tokens)
        case ScalarKind.DATE:
            return decode_date(raw)
        case ScalarKind.BIG_INTEGER:
            return decode_big_integer(raw)
        case ScalarKind.OPAQUE:
            return decode_opaque(raw)
        case _:
            assert_never(kind)


def decode_value(
    kind: ScalarKind,
    raw: str,
    *,
    field: str,
    index: int | None = None,
    settings: CodecSettings | None = None,
) -> Any:
    """Parse one query value using the decoding of the given kind.

    Raises `CodecError` naming the field (and the array index, if any) when the value cannot be parsed.
    """
    try:
        return _decode(kind, raw, settings or DEFAULT_SETTINGS)
    except ValueError as e:
        raise CodecError(field=field, raw=raw, kind=kind, index=index) from e
