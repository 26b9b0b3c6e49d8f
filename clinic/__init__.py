"""
Clinic booking core.

Appointment lifecycle, relationship integrity and weekly schedule views for
the clinic-booking platform, exposed as a FastAPI application.
"""

__version__ = "1.0.0"
