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
Dates are written as ISO-8601 timestamps, timezone-aware values are converted to UTC and use the `Z` suffix.

>>> from datetime import datetime, timedelta, timezone
>>> encode_date(datetime(2023, 6, 15, 12, 0, tzinfo=timezone.utc))
'2023-06-15T12:00:00Z'
>>> encode_date(datetime(2023, 6, 15, 14, 30, tzinfo=timezone(timedelta(hours=2))))
'2023-06-15T12:30:00Z'
>>> encode_date(datetime(2023, 6, 15, 12, 0, 0, 250000, tzinfo=timezone.utc), timespec='milliseconds')
'2023-06-15T12:00:00.250Z'
>>> decode_date('2023-06-15T12:00:00.000Z') == datetime(2023, 6, 15, 12, 0, tzinfo=timezone.utc)
True

Naive datetimes carry no offset, they are written as they are and read back naive:

>>> encode_date(datetime(2023, 6, 15, 12, 0))
'2023-06-15T12:00:00'
>>> decode_date('2023-06-15T12:00:00')
datetime.datetime(2023, 6, 15, 12, 0)
>>> decode_date('yesterday')
Traceback (most recent call last):
...
ValueError: 'yesterday' is not a valid ISO-8601 date
"""

from datetime import datetime, timezone

DEFAULT_TIMESPEC = 'auto'


def encode_date(value: datetime, *, timespec: str = DEFAULT_TIMESPEC) -> str:
    assert isinstance(value, datetime)
    if value.tzinfo is None:
        return value.isoformat(timespec=timespec)
    value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None).isoformat(timespec=timespec) + 'Z'


def decode_date(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f'{raw!r} is not a valid ISO-8601 date') from None
