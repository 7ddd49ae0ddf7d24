"""Value objects exposed by the picker."""
from .time_set import PendingCorrection, TimeSet

__all__ = ["PendingCorrection", "TimeSet"]
