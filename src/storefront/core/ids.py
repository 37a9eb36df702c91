"""Id and timestamp factories for bus envelopes and notifications.

Event ids and notification ids are UUID v4 strings.  Envelope timestamps
are timezone-aware UTC datetimes; analytics payloads carry epoch
milliseconds from the injected clock instead.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Return a fresh UUID v4 string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
