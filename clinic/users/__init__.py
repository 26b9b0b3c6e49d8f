"""
User accounts owned by patients, doctors and ambulances.
"""
