"""
Star ratings left for doctors and ambulances.
"""
