"""
Chirper - short posts ("chirps") with new-chirp notifications.
"""

__version__ = "0.1.0"
