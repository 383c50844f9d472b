import pytest

from nutriplan.services.clock import InvalidClockTime, active_minutes, format_clock, parse_clock


def test_parse_and_format():
    assert parse_clock("07:30") == 450
    assert parse_clock("0:05") == 5
    assert parse_clock(" 23:59 ") == 1439
    assert format_clock(450) == "07:30"
    assert format_clock(0) == "00:00"


def test_format_wraps_around_midnight():
    assert format_clock(1500) == "01:00"
    assert format_clock(-120) == "22:00"


@pytest.mark.parametrize("bad", ["24:00", "07:60", "7.30", "7am", "", "07:5", None, 730])
def test_parse_rejects_malformed(bad):
    with pytest.raises(InvalidClockTime):
        parse_clock(bad)


def test_active_minutes_same_day_and_overnight():
    assert active_minutes(parse_clock("07:00"), parse_clock("23:00")) == 960
    # sleep after midnight rolls into the next day
    assert active_minutes(parse_clock("07:00"), parse_clock("01:00")) == 1080
