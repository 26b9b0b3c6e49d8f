"""
Schedule Schemas - the doctor's 7-day view.
"""
from typing import Dict, List, Optional
from datetime import date
from ..core.schemas import CamelModel
from ..appointments.models import AppointmentStatus

class ScheduledVisit(CamelModel):
    """
    One appointment as shown in a day of the weekly view
    
    Fields:
    - appointment_time: Local time such as "3:15 PM"
    - is_new: True while the appointment is still NEW
    - prescriptions / tests: Medication names and test types on record
    """
    id: int
    patient_id: int
    appointment_time: str
    patient_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    condition: str
    description: str = ""
    status: AppointmentStatus
    comments: str = ""
    is_new: bool
    prescriptions: List[str] = []
    tests: List[str] = []

class DaySchedule(CamelModel):
    date: date
    working_hours: str
    appointments: List[ScheduledVisit] = []
    new_count: int = 0

class WeeklyScheduleResponse(CamelModel):
    """Seven consecutive days keyed by weekday name, starting today"""
    doctor_id: int
    timezone: str
    start_date: date
    end_date: date
    days: Dict[str, DaySchedule]
