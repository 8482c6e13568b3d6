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
Field kinds drive which value codec is used for each schema field.

A kind is either a `ScalarKind` or an `ArrayKind` wrapping a scalar element kind. Only one level of array flattens to
repeated query keys, nested sequences are carried as `ScalarKind.OPAQUE` elements.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class ScalarKind(Enum):
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    DATE = 'date'
    BIG_INTEGER = 'big_integer'
    ENUM = 'enum'
    # any value without a dedicated codec, carried as base64url encoded JSON
    OPAQUE = 'opaque'

    def __repr__(self) -> str:
        return f'ScalarKind.{self.name}'


@dataclass(frozen=True, slots=True)
class ArrayKind:
    """A field that maps to a repeated query key, one value per element."""
    element: ScalarKind

    def __repr__(self) -> str:
        return f'ArrayKind({self.element!r})'


FieldKind: TypeAlias = ScalarKind | ArrayKind
