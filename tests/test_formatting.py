from datetime import datetime

import pytest
import pytz

from file_api.utils.formatting import bytes_to_human, day_date_time, resolve_timezone


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (None, "0 B"),
        (512, "512 B"),
        (1023, "1023 B"),
        (1024, "1 KiB"),
        (1536, "1.5 KiB"),
        (1000000, "976.56 KiB"),
        (1048576, "1 MiB"),
        (1073741824, "1 GiB"),
        (5 * 1024 ** 4, "5 TiB"),
        (3 * 1024 ** 6, "3072 PiB"),
    ],
)
def test_bytes_to_human(size, expected):
    assert bytes_to_human(size) == expected


def test_day_date_time_matches_long_format():
    assert day_date_time(datetime(2024, 1, 1, 15, 4)) == "Mon, Jan 1, 2024 3:04 PM"
    assert day_date_time(datetime(2024, 3, 9, 0, 30)) == "Sat, Mar 9, 2024 12:30 AM"
    assert day_date_time(datetime(2024, 3, 9, 12, 5)) == "Sat, Mar 9, 2024 12:05 PM"


def test_day_date_time_converts_to_timezone():
    tz = resolve_timezone("America/Monterrey")
    # 2024-01-01 15:04 UTC is 09:04 in Monterrey (UTC-6, no DST)
    assert day_date_time(datetime(2024, 1, 1, 15, 4), tz) == "Mon, Jan 1, 2024 9:04 AM"


def test_day_date_time_handles_none_and_aware_values():
    assert day_date_time(None) is None
    aware = pytz.utc.localize(datetime(2024, 1, 1, 23, 59))
    assert day_date_time(aware) == "Mon, Jan 1, 2024 11:59 PM"


def test_unknown_timezone_raises():
    with pytest.raises(pytz.UnknownTimeZoneError):
        resolve_timezone("Mars/Olympus")
