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
Schema-directed codec between pydantic models and URL query-string parameters.

The main entry points live in `searchparams.serializer`:

    from searchparams.serializer import Serializer, decode, encode, lenient_decode, try_decode
"""

from searchparams.version import __version__

__all__ = [
    '__version__',
]
