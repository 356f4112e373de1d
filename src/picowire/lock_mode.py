from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for first-time resolution.

    Use ``THREAD`` when the injector may be shared across threads before every
    dependency has been built. ``NONE`` is only safe when the first resolution
    of each identity happens on a single thread, for example during start-up.
    """

    THREAD = "thread"
    """Guard check-construct-cache with a re-entrant ``threading.RLock``."""

    NONE = "none"
    """Disable locking around cache reads/writes."""
