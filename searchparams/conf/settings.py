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

from typing import Literal

from pydantic import model_validator

from searchparams.encoding.bool import DEFAULT_FALSE_TOKEN, DEFAULT_TRUE_TOKEN, DEFAULT_TRUTHY_TOKENS
from searchparams.encoding.date import DEFAULT_TIMESPEC
from searchparams.utils.pydantic import BaseModel

DateTimespec = Literal['auto', 'seconds', 'milliseconds', 'microseconds']


class CodecSettings(BaseModel):
    """Knobs of the value encodings, the defaults give the standard wire format."""

    # Token written for `True`.
    true_token: str = DEFAULT_TRUE_TOKEN

    # Token written for `False`.
    false_token: str = DEFAULT_FALSE_TOKEN

    # Tokens read as `True`, every other value is read as `False`.
    truthy_tokens: tuple[str, ...] = DEFAULT_TRUTHY_TOKENS

    # Precision of written timestamps, as accepted by `datetime.isoformat`.
    date_timespec: DateTimespec = DEFAULT_TIMESPEC  # type: ignore[assignment]

    @model_validator(mode='after')
    def check_bool_tokens(self) -> 'CodecSettings':
        if self.true_token not in self.truthy_tokens:
            raise ValueError(f'true_token {self.true_token!r} must be one of truthy_tokens')
        if self.false_token in self.truthy_tokens:
            raise ValueError(f'false_token {self.false_token!r} cannot be one of truthy_tokens')
        return self


DEFAULT_SETTINGS = CodecSettings()
