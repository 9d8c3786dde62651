import logging
from typing import List, Optional

from .backend_logic import GoalOutcome, overall_grade, solve_required_points, total_weight
from .model import Assignment, Category, IdGenerator, coerce_number
from .parser import parse_assignments

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Category 1"


class GradebookSession:
    """
    The editable gradebook of one user.

    Every change to categories and assignments goes through the methods
    below. Each session owns its id counters, so two sessions (or two tests)
    never share an id sequence. Lookups of ids that no longer exist are not
    errors: the method returns None / False and leaves the gradebook as is.
    """

    def __init__(self):
        self.categories: List[Category] = []
        self.category_ids = IdGenerator()
        self.assignment_ids = IdGenerator()

    # ------------------------
    # Loading / resetting
    # ------------------------

    def load_text(self, assignments_text: str, grades_text: str = "") -> List[Category]:
        """
        Replace the gradebook with the categories parsed from pasted text.
        Falls back to a single empty category when nothing is recognised.
        """
        categories = parse_assignments(
            assignments_text,
            grades_text,
            category_ids=self.category_ids,
            assignment_ids=self.assignment_ids,
        )
        if not categories:
            categories = [Category(id=self.category_ids.next(), name=DEFAULT_CATEGORY, weight=0.0)]
        self.categories = categories
        return self.categories

    def reset(self) -> None:
        """Drop everything. Id counters keep counting."""
        self.categories = []

    # ------------------------
    # Categories
    # ------------------------

    def find_category(self, category_id: int) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def add_category(self, name: Optional[str] = None, weight=0.0) -> Category:
        category_id = self.category_ids.next()
        category = Category(
            id=category_id,
            name=f"Category {category_id}" if name is None else name,
            weight=coerce_number(weight),
        )
        self.categories.append(category)
        return category

    def remove_category(self, category_id: int) -> bool:
        remaining = [c for c in self.categories if c.id != category_id]
        removed = len(remaining) != len(self.categories)
        self.categories = remaining
        if not removed:
            logger.debug("remove_category: no category with id %s", category_id)
        return removed

    def update_category(self, category_id: int, name: Optional[str] = None, weight=None) -> Optional[Category]:
        category = self.find_category(category_id)
        if category is None:
            logger.debug("update_category: no category with id %s", category_id)
            return None
        if name is not None:
            category.name = name
        if weight is not None:
            category.weight = coerce_number(weight)
        return category

    # ------------------------
    # Assignments
    # ------------------------

    def find_assignment(self, category_id: int, assignment_id: int) -> Optional[Assignment]:
        category = self.find_category(category_id)
        if category is None:
            return None
        for assignment in category.assignments:
            if assignment.id == assignment_id:
                return assignment
        return None

    def add_assignment(self, category_id: int, name: Optional[str] = None, points_earned=0.0,
                       points_possible=0.0) -> Optional[Assignment]:
        category = self.find_category(category_id)
        if category is None:
            logger.debug("add_assignment: no category with id %s", category_id)
            return None

        assignment_id = self.assignment_ids.next()
        assignment = Assignment(
            id=assignment_id,
            name=f"Assignment {assignment_id}" if name is None else name,
            points_earned=coerce_number(points_earned),
            points_possible=coerce_number(points_possible),
        )
        category.assignments.append(assignment)
        return assignment

    def remove_assignment(self, category_id: int, assignment_id: int) -> bool:
        category = self.find_category(category_id)
        if category is None:
            logger.debug("remove_assignment: no category with id %s", category_id)
            return False
        remaining = [a for a in category.assignments if a.id != assignment_id]
        removed = len(remaining) != len(category.assignments)
        category.assignments = remaining
        return removed

    def update_assignment(self, category_id: int, assignment_id: int, name: Optional[str] = None,
                          points_earned=None, points_possible=None) -> Optional[Assignment]:
        assignment = self.find_assignment(category_id, assignment_id)
        if assignment is None:
            logger.debug("update_assignment: no assignment %s in category %s", assignment_id, category_id)
            return None
        if name is not None:
            assignment.name = name
        if points_earned is not None:
            assignment.points_earned = coerce_number(points_earned)
        if points_possible is not None:
            assignment.points_possible = coerce_number(points_possible)
        return assignment

    # ------------------------
    # Derived values
    # ------------------------

    def overall_grade(self) -> float:
        return overall_grade(self.categories)

    def total_weight(self) -> float:
        return total_weight(self.categories)

    def solve(self, target_percent, category_id, hypothetical_max_points) -> GoalOutcome:
        outcome = solve_required_points(self.categories, target_percent, category_id, hypothetical_max_points)
        logger.debug("Goal outcome: %s", outcome.kind)
        return outcome
