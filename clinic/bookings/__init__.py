"""
One-step patient registration with a first appointment.
"""
