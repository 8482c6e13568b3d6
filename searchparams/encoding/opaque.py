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

r"""
Values without a dedicated encoding (nested models, mappings, tuples, ...) are carried as JSON encoded with base64url.

The JSON is compact and UTF-8 encoded before base64, the padding is stripped:

>>> encode_opaque({'name': 'John Doe'})
'eyJuYW1lIjoiSm9obiBEb2UifQ'
>>> decode_opaque('eyJuYW1lIjoiSm9obiBEb2UifQ')
{'name': 'John Doe'}

Non-ASCII text goes through its UTF-8 bytes, so it comes back exactly:

>>> decode_opaque(encode_opaque({'c': 'Hello, 🌍!'}))
{'c': 'Hello, 🌍!'}

Both the base64 and the JSON steps must succeed:

>>> decode_opaque('nope')
Traceback (most recent call last):
...
ValueError: 'nope' is not a valid opaque value
>>> decode_opaque('a$b')
Traceback (most recent call last):
...
ValueError: 'a$b' is not valid base64url
"""

import base64
import binascii
from typing import Any

from searchparams.utils.json import json_dumpb, json_loadb, jsonable


def encode_opaque(value: Any) -> str:
    """ Encodes any jsonable value, pydantic models included.
    """
    data = json_dumpb(jsonable(value))
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def decode_opaque(raw: str) -> Any:
    """ Decodes the base64url JSON payload to plain Python objects, validation is left to the schema.
    """
    padded = raw + '=' * (-len(raw) % 4)
    try:
        data = base64.b64decode(padded, altchars=b'-_', validate=True)
    except (binascii.Error, ValueError):
        raise ValueError(f'{raw!r} is not valid base64url') from None
    try:
        return json_loadb(data)
    except ValueError:
        raise ValueError(f'{raw!r} is not a valid opaque value') from None
