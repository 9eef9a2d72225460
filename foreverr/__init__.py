"""
Foreverr API

Memorial, living tribute and legacy service
- memorial pages, tributes and followers
- legacy letters and time capsules with scheduled delivery
- AI obituary / biography / tribute writing, photo restore, voice
- legacy points and badges
"""

__version__ = "1.0.0"
__author__ = "Foreverr Team"
