"""
Tests for the weekly schedule aggregation.

These run against plain objects; no database is involved.
"""
from datetime import date, datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from clinic.appointments.models import AppointmentStatus
from clinic.schedule.aggregator import (
    DAY_OFF,
    build_weekly_schedule,
    clinic_zone,
    count_new,
    format_time,
    window_bounds,
)

UTC = timezone.utc
# 2030-01-07 is a Monday
MONDAY = date(2030, 1, 7)
WEDNESDAY = date(2030, 1, 9)


def appointment(id, when, status=AppointmentStatus.NEW, **extra):
    fields = dict(
        id=id,
        patient_id=1,
        date_time=when,
        patient=SimpleNamespace(name="Pat", age=41, gender="female"),
        condition=None,
        description=None,
        status=status,
        comments=None,
        prescriptions=[],
        tests=[],
    )
    fields.update(extra)
    return SimpleNamespace(**fields)


def test_days_follow_the_window_order():
    schedule = build_weekly_schedule([], WEDNESDAY, UTC)

    assert list(schedule) == ["Wednesday", "Thursday", "Friday", "Saturday", "Sunday", "Monday", "Tuesday"]
    assert schedule["Wednesday"].date == WEDNESDAY
    assert schedule["Tuesday"].date == date(2030, 1, 15)


def test_working_hours_template():
    schedule = build_weekly_schedule([], MONDAY, UTC)

    assert schedule["Monday"].working_hours == "2:00 PM - 4:00 PM"
    assert schedule["Thursday"].working_hours == "7:00 PM - 9:00 PM"
    assert schedule["Saturday"].working_hours == DAY_OFF
    assert schedule["Sunday"].working_hours == DAY_OFF


def test_next_monday_lands_only_in_this_window():
    this_monday = appointment(1, datetime(2030, 1, 7, 14, 0, tzinfo=UTC))
    next_monday = appointment(2, datetime(2030, 1, 14, 14, 0, tzinfo=UTC))

    from_monday = build_weekly_schedule([this_monday, next_monday], MONDAY, UTC)
    assert [v.id for v in from_monday["Monday"].appointments] == [1]

    from_wednesday = build_weekly_schedule([this_monday, next_monday], WEDNESDAY, UTC)
    assert [v.id for v in from_wednesday["Monday"].appointments] == [2]


def test_unscheduled_and_day_off_appointments_are_left_out():
    saturday = appointment(1, datetime(2030, 1, 12, 10, 0, tzinfo=UTC))
    undated = appointment(2, None)

    schedule = build_weekly_schedule([saturday, undated], MONDAY, UTC)

    assert all(day.appointments == [] for day in schedule.values())


def test_appointments_sorted_by_time_then_id():
    late = appointment(1, datetime(2030, 1, 8, 15, 30, tzinfo=UTC))
    early_b = appointment(3, datetime(2030, 1, 8, 14, 0, tzinfo=UTC))
    early_a = appointment(2, datetime(2030, 1, 8, 14, 0, tzinfo=UTC))

    schedule = build_weekly_schedule([late, early_b, early_a], MONDAY, UTC)

    assert [v.id for v in schedule["Tuesday"].appointments] == [2, 3, 1]


def test_new_count_and_visit_fields():
    fresh = appointment(
        1,
        datetime(2030, 1, 10, 19, 15, tzinfo=UTC),
        prescriptions=[SimpleNamespace(medication="Ibuprofen")],
        tests=[SimpleNamespace(test_type="Blood panel")],
    )
    seen = appointment(2, datetime(2030, 1, 10, 20, 0, tzinfo=UTC), status=AppointmentStatus.PENDING,
                       condition="Migraine", comments="Dark room")

    schedule = build_weekly_schedule([fresh, seen], MONDAY, UTC)
    thursday = schedule["Thursday"]

    assert thursday.new_count == 1
    assert count_new(schedule, "Thursday") == 1
    assert count_new(schedule, "Monday") == 0
    first, second = thursday.appointments
    assert first.appointment_time == "7:15 PM"
    assert first.condition == "General Checkup"
    assert first.description == ""
    assert first.is_new is True
    assert first.patient_name == "Pat"
    assert first.prescriptions == ["Ibuprofen"]
    assert first.tests == ["Blood panel"]
    assert second.condition == "Migraine"
    assert second.comments == "Dark room"
    assert second.is_new is False


def test_naive_timestamps_are_read_as_utc():
    stored = appointment(1, datetime(2030, 1, 7, 14, 45))

    schedule = build_weekly_schedule([stored], MONDAY, UTC)

    assert schedule["Monday"].appointments[0].appointment_time == "2:45 PM"


def test_local_timezone_decides_the_day():
    berlin = ZoneInfo("Europe/Berlin")
    # 23:30 UTC on Monday is 00:30 on Tuesday in Berlin (UTC+1 in January)
    late_monday_utc = appointment(1, datetime(2030, 1, 7, 23, 30, tzinfo=UTC))

    schedule = build_weekly_schedule([late_monday_utc], MONDAY, berlin)

    assert schedule["Monday"].appointments == []
    assert schedule["Tuesday"].appointments[0].appointment_time == "12:30 AM"


def test_custom_working_hours():
    hours = {"Monday": DAY_OFF, "Saturday": "9:00 AM - 1:00 PM"}
    monday = appointment(1, datetime(2030, 1, 7, 9, 0, tzinfo=UTC))
    saturday = appointment(2, datetime(2030, 1, 12, 9, 0, tzinfo=UTC))

    schedule = build_weekly_schedule([monday, saturday], MONDAY, UTC, working_hours=hours)

    assert schedule["Monday"].appointments == []
    assert [v.id for v in schedule["Saturday"].appointments] == [2]
    assert schedule["Tuesday"].working_hours == DAY_OFF


def test_window_bounds():
    start, end = window_bounds(MONDAY, UTC)
    assert start == datetime(2030, 1, 7, tzinfo=UTC)
    assert end == datetime(2030, 1, 14, tzinfo=UTC)

    berlin_start, _ = window_bounds(MONDAY, ZoneInfo("Europe/Berlin"))
    assert berlin_start == datetime(2030, 1, 6, 23, 0, tzinfo=UTC)


def test_format_time():
    assert format_time(datetime(2030, 1, 7, 9, 5)) == "9:05 AM"
    assert format_time(datetime(2030, 1, 7, 15, 15)) == "3:15 PM"
    assert format_time(datetime(2030, 1, 7, 12, 0)) == "12:00 PM"


def test_unknown_zone_falls_back_to_utc():
    assert clinic_zone("Not/AZone") is timezone.utc
    assert clinic_zone("UTC") == ZoneInfo("UTC")
