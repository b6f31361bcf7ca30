# fitlab/settings.py

# ──────────────────────────────────────────────────────────────
# Central roster & capacity settings
# Update these values when the team or studio capacity changes
# ──────────────────────────────────────────────────────────────

# Weekdays use 0=Sunday .. 6=Saturday
PILATES_SCHEDULE = {
    "Chiara": {"days": (3, 4, 5, 6, 0), "start_time": "10:00", "end_time": "20:00"},  # Wed–Sun
    "Anna":   {"days": (3, 4, 5, 6, 0), "start_time": "10:00", "end_time": "20:00"},  # Wed–Sun
    "Emma":   {"days": (1, 2, 3, 4, 5), "start_time": "10:00", "end_time": "20:00"},  # Mon–Fri
}
PILATES_INSTRUCTORS = tuple(PILATES_SCHEDULE)

# Order matters: first = even weekdays, second = odd weekdays
PT_INSTRUCTORS = ("Antonio", "Vittorio")

# Max number of people in one Personal Training slot
# (shared equipment, independent of which trainer runs it)
PT_MAX_CAPACITY = 3

DEFAULT_MAX_CAPACITY = 3

# Class types created by seed_db
CLASS_TYPES = (
    "Reformer Flow",
    "Mat Pilates",
    "Pilates Tower",
    "Personal Training 1:1",
    "Small Group Training",
)
