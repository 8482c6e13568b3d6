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

import json
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python


def json_dumps(obj: object, *, sort_keys: bool = False) -> str:
    """Compact formating obj as JSON to a string, non-ASCII characters are kept as they are."""
    return json.dumps(obj, separators=(',', ':'), ensure_ascii=False, sort_keys=sort_keys)


def json_dumpb(obj: object, *, sort_keys: bool = False) -> bytes:
    """Compact formating obj as JSON to UTF-8 encoded bytes."""
    return json_dumps(obj, sort_keys=sort_keys).encode('utf-8')


def json_loadb(raw: bytes) -> Any:
    """Load UTF-8 encoded JSON bytes to a Python object.

    Raises `ValueError` (either `UnicodeDecodeError` or `json.JSONDecodeError`) on bad input.
    """
    return json.loads(raw.decode('utf-8'))


def jsonable(value: Any) -> Any:
    """Convert any value pydantic knows how to serialize (models, enums, datetimes, ...) to plain JSON types."""
    return to_jsonable_python(value)


def canonical_json(value: Any) -> str | None:
    """JSON text with sorted keys, used for structural comparison. Returns `None` if the value is not jsonable."""
    try:
        return json_dumps(jsonable(value), sort_keys=True)
    except PydanticSerializationError:
        return None
