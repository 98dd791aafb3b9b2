"""Shared defaults for the alignment services"""

# Unchanged lines kept visible around each change when collapsing
CONTEXT_LINES = 3

# Extra unchanged lines (beyond the context on both ends) needed before a gap collapses
MINIMUM_COLLAPSE_THRESHOLD = 4

# Rows closer than this are treated as the same scroll position
EPSILON = 1e-6

# Fallback measurements until the host reports real ones
DEFAULT_LINE_HEIGHT = 22.0
DEFAULT_VIEWPORT_HEIGHT = 600.0
