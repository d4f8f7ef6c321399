"""
Application-wide constants.
Centralizes magic numbers and fixed values.
"""

# Weekday names in Python weekday() order (Monday == 0)
WEEKDAY_NAMES = (
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
)

# Weekday numbering used by the stored fixtures (Sunday == 0)
SUNDAY_FIRST_DAY_NUMBERS = {
    "SUNDAY": 0,
    "MONDAY": 1,
    "TUESDAY": 2,
    "WEDNESDAY": 3,
    "THURSDAY": 4,
    "FRIDAY": 5,
    "SATURDAY": 6,
}

# Date picker
WORKWEEK_DAYS = 5  # Dates shown in the booking date picker
DAYS_IN_WEEK = 7

# User-facing messages
BOOKING_CONFLICT_MESSAGE = (
    "This time slot conflicts with an existing booking. "
    "Please select a different time."
)
MENTOR_UNAVAILABLE_MESSAGE = (
    "Mentor is unavailable for this time slot. Please select a different time."
)
