"""
Prescriptions and medical tests attached to appointments.
"""
