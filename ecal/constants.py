from types import MappingProxyType

COMMENT_MARKER = "#"

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBR = tuple(name[:3] for name in MONTH_NAMES)

# Indexed by 0=Sunday .. 6=Saturday, the numbering used in rule files
WEEKDAY_ABBR = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
WEEKDAY_SHORT = tuple(name[:2] for name in WEEKDAY_ABBR)

# Days per month for a common year; February is patched for leap years
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

FG_CODES = MappingProxyType({name: f"\x1b[{30 + i}m" for i, name in enumerate(COLOR_NAMES)})
BG_CODES = MappingProxyType({name: f"\x1b[{40 + i}m" for i, name in enumerate(COLOR_NAMES)})

BOLD = "\x1b[1m"
REVERSE = "\x1b[7m"
RESET = "\x1b[0m"

# Categories whose full-date rules recur yearly from their own year
ANNIVERSARY_LABELS = MappingProxyType({
    "bday": "Birthday",
    "anni": "Anniversary",
})

EVENTS_RULE_WIDTH = 80
MONTH_SEPARATOR = "    "
