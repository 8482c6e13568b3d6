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
Strings, enumerations and literals travel as they are.

>>> from enum import Enum
>>> class Color(Enum):
...     RED = 'RED'
>>> encode_string('John Doe')
'John Doe'
>>> encode_enum(Color.RED)
'RED'
>>> encode_enum('active')
'active'
>>> decode_string('RED')
'RED'

Decoding an enumeration gives back the plain string, turning it into a member is left to the schema validation.
"""

from enum import Enum


def encode_string(value: str) -> str:
    assert isinstance(value, str)
    return value


def decode_string(raw: str) -> str:
    return raw


def encode_enum(value: Enum | str) -> str:
    """ Encodes an enum member by its value, literal strings are kept as they are.
    """
    if isinstance(value, Enum):
        value = value.value
    assert isinstance(value, str), f'{value!r} is not a string enumeration value'
    return value


decode_enum = decode_string
