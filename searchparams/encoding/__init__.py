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
This module holds the value encodings, one submodule per field kind.

Each encoding converts a single native value to its query-string form and back. Percent-encoding is not a concern
here, the values produced and consumed are already decoded strings.

The general organization is that each submodule `x` deals with a single kind and looks like this:

    def encode_x(value: ValueType, ...config params...) -> str:
        ...

    def decode_x(raw: str, ...config params...) -> ValueType:
        ...

Decoders raise `ValueError` on invalid input. Submodules should not have to take into consideration how schema fields
are mapped to encodings, that is done by `searchparams.codec`.
"""
