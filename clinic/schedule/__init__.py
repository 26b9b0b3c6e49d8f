"""
Weekly schedule view for doctors.
"""
