"""
Trailwalk - walk famous trails one day of steps at a time.

Turns a user's daily step/distance history into progress along a trail
route, and derives goal calendars, streaks and badges from it.
"""

__version__ = "0.1.0"
