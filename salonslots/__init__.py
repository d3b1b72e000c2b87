"""
salonslots - staff availability and slot allocation for salon branches.
"""

__version__ = "0.1.0"
