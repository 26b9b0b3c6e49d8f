"""
Patient profiles and their appointment history.
"""
