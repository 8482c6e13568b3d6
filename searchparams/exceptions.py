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

from pydantic_core import InitErrorDetails, PydanticCustomError

from searchparams.kinds import ScalarKind


class SearchParamsError(Exception):
    """Base class for exceptions in searchparams."""
    pass


class CodecError(SearchParamsError, ValueError):
    """Raised when a single query value cannot be converted to its native form.

    The `code` is derived from the field kind (`invalid_number`, `invalid_date`, ...) and is also used as the error
    type when the failure is reported inside a `pydantic.ValidationError`.
    """

    def __init__(self, *, field: str, raw: str, kind: ScalarKind, index: int | None = None) -> None:
        self.field = field
        self.raw = raw
        self.kind = kind
        self.index = index
        super().__init__(f'invalid {kind.value.replace("_", " ")} value for {self.loc_str}: {raw!r}')

    @property
    def code(self) -> str:
        return f'invalid_{self.kind.value}'

    @property
    def loc(self) -> tuple[str | int, ...]:
        if self.index is None:
            return (self.field,)
        return (self.field, self.index)

    @property
    def loc_str(self) -> str:
        return '.'.join(str(part) for part in self.loc)

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def to_error_details(self) -> InitErrorDetails:
        """Describe this failure as a line error of a `pydantic.ValidationError`."""
        message = str(self)
        if self.__cause__ is not None:
            message = f'{message} ({self.__cause__})'
        return InitErrorDetails(
            type=PydanticCustomError(self.code, message),
            loc=self.loc,
            input=self.raw,
        )


class PreconditionError(SearchParamsError):
    """Raised when an operation is called without what it needs to do its work, or with a value it cannot represent.

    Encoding a record that was not validated against its schema is also a precondition violation, but it is not
    checked: the result in that case is undefined.
    """
    pass
