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
Arbitrary precision integers, written in base 10 without any loss.

>>> encode_big_integer(9007199254740993)
'9007199254740993'
>>> decode_big_integer('9007199254740993')
9007199254740993
>>> decode_big_integer('-12')
-12

Only an optional sign followed by decimal digits is accepted:

>>> decode_big_integer('1.5')
Traceback (most recent call last):
...
ValueError: '1.5' is not a valid integer
"""

import re

_INTEGER_RE = re.compile(r'[+-]?[0-9]+')


def encode_big_integer(value: int) -> str:
    assert isinstance(value, int) and not isinstance(value, bool)
    return str(value)


def decode_big_integer(raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueError(f'{raw!r} is not a valid integer')
    # int() can still refuse very long inputs, see sys.set_int_max_str_digits
    return int(raw)
