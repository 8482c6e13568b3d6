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
This module implements encoding a boolean value using a single character.

- `True` maps to `'t'`
- `False` maps to `'f'`

Decoding is forgiving: `'t'` and `'true'` are true, anything else is false. It never fails.

>>> encode_bool(True)
't'
>>> encode_bool(False)
'f'
>>> decode_bool('t'), decode_bool('true'), decode_bool('f'), decode_bool('yes'), decode_bool('')
(True, True, False, False, False)

The tokens can be changed, which is how `CodecSettings` configures them:

>>> encode_bool(True, true_token='1', false_token='0')
'1'
>>> decode_bool('1', truthy_tokens=('1',))
True
"""

from collections.abc import Collection

DEFAULT_TRUE_TOKEN = 't'
DEFAULT_FALSE_TOKEN = 'f'
DEFAULT_TRUTHY_TOKENS = ('t', 'true')


def encode_bool(value: bool, *, true_token: str = DEFAULT_TRUE_TOKEN, false_token: str = DEFAULT_FALSE_TOKEN) -> str:
    assert isinstance(value, bool)
    return true_token if value else false_token


def decode_bool(raw: str, *, truthy_tokens: Collection[str] = DEFAULT_TRUTHY_TOKENS) -> bool:
    return raw in truthy_tokens
