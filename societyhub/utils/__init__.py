# ================================
# UTILS PACKAGE INITIALIZATION (utils/__init__.py)
# ================================

"""
Utils Package

- Time slot arithmetic for amenity bookings
- Local disk storage for uploaded documents
"""

from societyhub.utils.timeslots import generate_available_slots, intervals_overlap
from societyhub.utils.storage import LocalStorage

__all__ = ["generate_available_slots", "intervals_overlap", "LocalStorage"]
