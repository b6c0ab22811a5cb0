"""Deployment settings read from the environment.

Calendar options describe a single calendar; these describe the site the
calendars are embedded in.
"""

from __future__ import annotations

import os
from pathlib import Path


# Snippets are keyed by revision id, so a stale entry can only waste space.
SNIPPET_CACHE_DIR = Path(os.getenv("EVENT_CALENDAR_SNIPPET_CACHE_DIR", ".snippet-cache"))
SNIPPET_TTL_SECONDS = int(os.getenv("EVENT_CALENDAR_SNIPPET_TTL", str(7 * 24 * 60 * 60)))

# Major version of the JavaScript calendar library bundled with the site.
RENDERER_VERSION = int(os.getenv("EVENT_CALENDAR_RENDERER_VERSION", "5"))
