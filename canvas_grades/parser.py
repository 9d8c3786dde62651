"""
Gradebook text parser.

Turns text pasted from a course's assignments page into categories and
assignments. Lines are classified one at a time by an ordered chain of rules;
the first rule that matches decides what the line is:

- "Exams (30%)"        -> weighted category header
- "Participation"      -> category header with weight 0 (no slash anywhere)
- "Quiz 1 8/10"        -> scored assignment
- "Project /50"        -> assignment with only points possible
- anything else        -> dropped
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .model import Assignment, Category, IdGenerator, coerce_number

logger = logging.getLogger(__name__)

UNGROUPED_CATEGORY = "Ungrouped"
UNNAMED_ASSIGNMENT = "Unnamed assignment"

WEIGHTED_HEADER_PATTERN = re.compile(r"^(.+?)\s*\(([0-9]+(?:\.[0-9]+)?)%\)")
SCORED_ASSIGNMENT_PATTERN = re.compile(r"^(.*?)([0-9]+(?:\.[0-9]+)?)\s*/\s*([0-9]+(?:\.[0-9]+)?)")
# Any non-digit followed by a number, e.g. "Project /50". Digits are ASCII only.
POSSIBLE_ONLY_PATTERN = re.compile(r"^(.*?)[^0-9]([0-9]+(?:\.[0-9]+)?)")

_LINE_SPLIT = re.compile(r"\n+")


@dataclass
class ParsedLine:
    """One classified line of pasted text."""
    kind: str  # "weighted_category", "category", "scored_assignment", "possible_only_assignment"
    name: str
    weight: float = 0.0
    points_earned: float = 0.0
    points_possible: float = 0.0

    @property
    def is_category(self) -> bool:
        return self.kind in ("weighted_category", "category")


# ------------------------
# Line rules
# ------------------------

def match_weighted_header(line: str) -> Optional[ParsedLine]:
    match = WEIGHTED_HEADER_PATTERN.match(line)
    if not match:
        return None
    return ParsedLine(
        kind="weighted_category",
        name=match.group(1).strip(),
        weight=coerce_number(match.group(2)),
    )


def match_unweighted_header(line: str) -> Optional[ParsedLine]:
    # Any slash-free line counts, even prose like "Random notes here"
    if "/" in line:
        return None
    return ParsedLine(kind="category", name=line)


def match_scored_assignment(line: str) -> Optional[ParsedLine]:
    match = SCORED_ASSIGNMENT_PATTERN.match(line)
    if not match:
        return None
    return ParsedLine(
        kind="scored_assignment",
        name=match.group(1).strip() or UNNAMED_ASSIGNMENT,
        points_earned=coerce_number(match.group(2)),
        points_possible=coerce_number(match.group(3)),
    )


def match_possible_only_assignment(line: str) -> Optional[ParsedLine]:
    if "/" not in line or not POSSIBLE_ONLY_PATTERN.match(line):
        return None
    parts = line.split("/")
    return ParsedLine(
        kind="possible_only_assignment",
        name=parts[0].strip() or UNNAMED_ASSIGNMENT,
        points_earned=0.0,
        points_possible=coerce_number(parts[1]),
    )


# First match wins
LINE_RULES: List[Tuple[str, Callable[[str], Optional[ParsedLine]]]] = [
    ("weighted_category", match_weighted_header),
    ("category", match_unweighted_header),
    ("scored_assignment", match_scored_assignment),
    ("possible_only_assignment", match_possible_only_assignment),
]


def classify_line(line: str) -> Optional[ParsedLine]:
    """Run a single (already stripped) line through the rule chain."""
    for _, rule in LINE_RULES:
        parsed = rule(line)
        if parsed is not None:
            return parsed
    return None


def split_lines(text: str) -> List[str]:
    lines = (line.strip() for line in _LINE_SPLIT.split(text or ""))
    return [line for line in lines if line]


# ------------------------
# Parser
# ------------------------

def parse_assignments(
    assignments_text: str,
    grades_text: str = "",
    category_ids: Optional[IdGenerator] = None,
    assignment_ids: Optional[IdGenerator] = None,
) -> List[Category]:
    """
    Parse pasted assignments text into an ordered list of categories.

    grades_text is accepted alongside the assignments text but is not read.
    Assignments that appear before any header go into an implicit
    "Ungrouped" category. Returns an empty list when nothing is recognised;
    callers decide what to show instead.
    """
    category_ids = category_ids or IdGenerator()
    assignment_ids = assignment_ids or IdGenerator()

    categories: List[Category] = []
    current: Optional[Category] = None

    for line in split_lines(assignments_text):
        parsed = classify_line(line)
        if parsed is None:
            logger.debug("Dropping unrecognised line: %r", line)
            continue

        if parsed.is_category:
            current = Category(id=category_ids.next(), name=parsed.name, weight=parsed.weight)
            categories.append(current)
            continue

        if current is None:
            current = Category(id=category_ids.next(), name=UNGROUPED_CATEGORY, weight=0.0)
            categories.append(current)
            logger.debug("Assignment %r found before any header, using %r", parsed.name, UNGROUPED_CATEGORY)

        current.assignments.append(
            Assignment(
                id=assignment_ids.next(),
                name=parsed.name,
                points_earned=parsed.points_earned,
                points_possible=parsed.points_possible,
            )
        )

    logger.debug(
        "Parsed %d categories, %d assignments",
        len(categories),
        sum(len(c.assignments) for c in categories),
    )
    return categories
