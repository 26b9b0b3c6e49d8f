"""
Weekly schedule aggregation.

Turns a flat list of a doctor's appointments into the seven days starting
today, each annotated with the static working-hours template. Appointments
are placed through a date -> weekday map built for the current window, so a
Monday two weeks out never lands in this week's Monday.
"""
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from ..core.schemas import ensure_utc
from ..appointments.models import AppointmentStatus
from .schemas import DaySchedule, ScheduledVisit

# Set up logging
logger = logging.getLogger(__name__)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DAY_OFF = "Day off"
DEFAULT_CONDITION = "General Checkup"

# Display only; nothing is rejected for falling outside these hours
DEFAULT_WORKING_HOURS: Dict[str, str] = {
    "Monday": "2:00 PM - 4:00 PM",
    "Tuesday": "2:00 PM - 4:00 PM",
    "Wednesday": "2:00 PM - 4:00 PM",
    "Thursday": "7:00 PM - 9:00 PM",
    "Friday": "7:00 PM - 9:00 PM",
    "Saturday": DAY_OFF,
    "Sunday": DAY_OFF,
}

def clinic_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', using UTC")
        return timezone.utc

def week_dates(today: date) -> List[date]:
    """The seven calendar dates starting with ``today``."""
    return [today + timedelta(days=offset) for offset in range(7)]

def window_bounds(today: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """
    UTC bounds of the seven local days starting ``today``.

    Returns:
        (start, end): start inclusive, end exclusive
    """
    start = datetime.combine(today, time.min, tzinfo=tz)
    end = datetime.combine(today + timedelta(days=7), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

def format_time(moment: datetime) -> str:
    """12-hour clock without a leading zero, e.g. ``3:15 PM``."""
    return moment.strftime("%I:%M %p").lstrip("0")

def _visit(appointment, local: datetime) -> ScheduledVisit:
    patient = getattr(appointment, "patient", None)
    return ScheduledVisit(
        id=appointment.id,
        patient_id=appointment.patient_id,
        appointment_time=format_time(local),
        patient_name=getattr(patient, "name", None),
        age=getattr(patient, "age", None),
        gender=getattr(patient, "gender", None),
        condition=appointment.condition or DEFAULT_CONDITION,
        description=appointment.description or "",
        status=appointment.status,
        comments=appointment.comments or "",
        is_new=appointment.status == AppointmentStatus.NEW,
        prescriptions=[p.medication for p in getattr(appointment, "prescriptions", None) or []],
        tests=[t.test_type for t in getattr(appointment, "tests", None) or []],
    )

def build_weekly_schedule(
    appointments: Iterable,
    today: date,
    tz: tzinfo,
    working_hours: Optional[Mapping[str, str]] = None
) -> Dict[str, DaySchedule]:
    """
    Bucket appointments into the seven days starting ``today``.

    Args:
        appointments: Objects exposing the Appointment attributes
            (``date_time`` in UTC, ``patient``, ``status``, ...)
        today: First day of the window, in the clinic's local calendar
        tz: Zone used to turn UTC timestamps into local dates and times
        working_hours: Weekday name -> hours text; defaults to the clinic template

    Returns:
        Dict[str, DaySchedule]: Weekday name -> day, in window order.
        Appointments without a date, outside the window, or on a day off
        are left out.
    """
    working_hours = working_hours or DEFAULT_WORKING_HOURS

    schedule: Dict[str, DaySchedule] = {}
    date_to_day: Dict[str, str] = {}
    for day in week_dates(today):
        name = WEEKDAYS[day.weekday()]
        date_to_day[day.isoformat()] = name
        schedule[name] = DaySchedule(date=day, working_hours=working_hours.get(name, DAY_OFF))

    placed: Dict[str, List[Tuple[datetime, int, ScheduledVisit]]] = {name: [] for name in schedule}
    for appointment in appointments:
        if appointment.date_time is None:
            continue
        local = ensure_utc(appointment.date_time).astimezone(tz)
        name = date_to_day.get(local.date().isoformat())
        if name is None or schedule[name].working_hours == DAY_OFF:
            continue
        placed[name].append((local, appointment.id, _visit(appointment, local)))

    for name, day in schedule.items():
        day.appointments = [visit for _, _, visit in sorted(placed[name], key=lambda item: item[:2])]
        day.new_count = sum(1 for visit in day.appointments if visit.is_new)

    return schedule

def count_new(schedule: Mapping[str, DaySchedule], day: str) -> int:
    """New-appointment badge count for one weekday (0 if outside the window)."""
    entry = schedule.get(day)
    return entry.new_count if entry else 0
