"""
Ambulance profiles and the guarded ambulance removal flow.
"""
