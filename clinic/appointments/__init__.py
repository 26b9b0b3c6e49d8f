"""
Appointment lifecycle: creation, status transitions, follow-up links and
transactional removal of appointments with their dependent records.
"""
