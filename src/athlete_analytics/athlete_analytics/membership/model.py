from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MembershipPeriod:
    """A contiguous stretch of team membership; `left_at=None` means still active."""

    joined_at: datetime
    left_at: Optional[datetime] = None
