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
Numbers are written in their shortest decimal form and read back as `float`.

Integral values don't carry a fractional part, so `30.0` is written the same as `30`:

>>> encode_number(30.0)
'30'
>>> encode_number(42)
'42'
>>> encode_number(0.1)
'0.1'
>>> encode_number(1e20)
'1e+20'
>>> decode_number('30')
30.0
>>> decode_number('-2.5e3')
-2500.0

Unparseable and non-finite values are rejected instead of becoming zero or NaN:

>>> decode_number('not a number')
Traceback (most recent call last):
...
ValueError: 'not a number' is not a valid number
>>> decode_number('nan')
Traceback (most recent call last):
...
ValueError: 'nan' is not a finite number
"""

import math

# integral floats up to this magnitude are exact, past it the float repr is the shortest form
_MAX_EXACT_INTEGRAL_FLOAT = 2 ** 53


def encode_number(value: float) -> str:
    assert isinstance(value, (int, float)) and not isinstance(value, bool)
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise ValueError(f'{value!r} is not a finite number')
    if value.is_integer() and abs(value) <= _MAX_EXACT_INTEGRAL_FLOAT:
        return str(int(value))
    return repr(value)


def decode_number(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f'{raw!r} is not a valid number') from None
    if not math.isfinite(value):
        raise ValueError(f'{raw!r} is not a finite number')
    return value
