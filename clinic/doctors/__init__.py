"""
Doctor profiles, their appointments and weekly schedule view.
"""
