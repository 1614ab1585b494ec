# Rev 0.1.0
# diy_projects – domain errors

from __future__ import annotations


class DbError(RuntimeError):
    """Single unchecked error surfaced by the data layer and the shell.

    Carries the original failure as ``__cause__`` when one exists.
    """
