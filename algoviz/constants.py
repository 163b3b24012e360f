"""Named constants: eliminates magic numbers and strings across the codebase."""

from __future__ import annotations

NO_ACTIVE_LINE = 0

READY_DESCRIPTION = "Ready"

DEFAULT_SPEED_MS = 800

MAX_TRACE_ENTRIES = 1_000_000

LISTING_LANGUAGE = "python"

DEFAULT_CATEGORY_ID = "arrays"

WIRE_ID = "id"
WIRE_LINE_NUMBER = "lineNumber"
WIRE_DESCRIPTION = "description"
WIRE_VARIABLES = "variables"
WIRE_HIGHLIGHTS = "highlights"
