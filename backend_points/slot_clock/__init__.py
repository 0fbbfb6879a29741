"""
Slot timing: average seconds per slot (SlotClock) and the current slot feed (SlotPoller).
"""

from backend_points.slot_clock.clock import SlotClock, clamp_slot_time
from backend_points.slot_clock.poller import SlotPoller

__all__ = ["SlotClock", "SlotPoller", "clamp_slot_time"]
