import math
import re
from dataclasses import dataclass, field
from typing import List


# ------------------------
# Gradebook entities
# ------------------------

@dataclass
class Assignment:
    id: int
    name: str
    points_earned: float = 0.0
    points_possible: float = 0.0


@dataclass
class Category:
    """
    A weighted group of assignments.

    weight is in percentage points (30 means "worth 30% of the course") and
    is stored as entered, without clamping to 0-100.
    """
    id: int
    name: str
    weight: float = 0.0
    assignments: List[Assignment] = field(default_factory=list)


class IdGenerator:
    """Monotonic id counter. Ids handed out are never handed out again."""

    def __init__(self, start: int = 1):
        self._next = start

    @property
    def peek(self) -> int:
        return self._next

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value


# ------------------------
# Numeric input coercion
# ------------------------

# Leading number of a string, the way a browser number field reads it
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))")


def coerce_number(value) -> float:
    """
    Turn user input into a float, falling back to 0.0.

    "50 pts" -> 50.0, " 7.5" -> 7.5, "abc" -> 0.0, None -> 0.0, nan -> 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1).replace("Infinity", "inf"))

    if math.isnan(number):
        return 0.0
    return number
