# -*- coding: utf-8 -*-
"""Tests for the editable gradebook session."""
import pytest

from canvas_grades.session import GradebookSession

SAMPLE = "Exams (50%)\nMidterm 45/50\nFinal 90/100\nHomework (50%)\nHW1 8/10"


@pytest.fixture
def session():
    gradebook = GradebookSession()
    gradebook.load_text(SAMPLE)
    return gradebook


def test_load_text(session):
    assert [c.name for c in session.categories] == ["Exams", "Homework"]
    assert [c.id for c in session.categories] == [1, 2]
    assert [a.id for c in session.categories for a in c.assignments] == [1, 2, 3]


def test_load_text_with_nothing_recognised_gives_default_category():
    gradebook = GradebookSession()
    categories = gradebook.load_text("   \n\n")
    assert len(categories) == 1
    assert categories[0].name == "Category 1"
    assert categories[0].weight == 0.0
    assert categories[0].assignments == []


def test_default_category_name_does_not_follow_id(session):
    session.reset()
    categories = session.load_text("and/or")
    assert categories[0].id == 3
    assert categories[0].name == "Category 1"


def test_load_text_replaces_previous_gradebook(session):
    session.load_text("Labs (100%)\nLab 1 9/10")
    assert [c.name for c in session.categories] == ["Labs"]
    assert session.categories[0].id == 3
    assert session.categories[0].assignments[0].id == 4


def test_overall_grade_and_total_weight(session):
    assert session.overall_grade() == pytest.approx(85.0)
    assert session.total_weight() == 100.0


def test_sessions_do_not_share_ids():
    first, second = GradebookSession(), GradebookSession()
    first.load_text(SAMPLE)
    second.load_text(SAMPLE)
    assert [c.id for c in first.categories] == [c.id for c in second.categories]


# ------------------------
# Categories
# ------------------------

def test_add_category_uses_default_name(session):
    category = session.add_category()
    assert category.id == 3
    assert category.name == "Category 3"
    assert category.weight == 0.0
    assert session.categories[-1] is category


def test_add_category_with_name_and_weight(session):
    category = session.add_category("Labs", "15.5")
    assert (category.name, category.weight) == ("Labs", 15.5)


def test_remove_category_cascades(session):
    assert session.remove_category(1) is True
    assert [c.name for c in session.categories] == ["Homework"]
    assert session.find_assignment(1, 1) is None
    assert session.remove_category(1) is False


def test_update_category(session):
    category = session.update_category(2, name="HW", weight="abc")
    assert category.name == "HW"
    assert category.weight == 0.0

    session.update_category(2, weight=25)
    assert category.weight == 25.0
    assert category.name == "HW"


def test_update_missing_category(session):
    assert session.update_category(42, name="x") is None


def test_category_ids_not_reused_after_delete(session):
    session.remove_category(2)
    assert session.add_category().id == 3


# ------------------------
# Assignments
# ------------------------

def test_add_assignment(session):
    assignment = session.add_assignment(2)
    assert assignment.id == 4
    assert assignment.name == "Assignment 4"
    assert (assignment.points_earned, assignment.points_possible) == (0.0, 0.0)
    assert session.find_category(2).assignments[-1] is assignment


def test_add_assignment_to_missing_category_consumes_no_id(session):
    assert session.add_assignment(99) is None
    assert session.add_assignment(1).id == 4


def test_remove_assignment(session):
    assert session.remove_assignment(1, 2) is True
    assert [a.name for a in session.find_category(1).assignments] == ["Midterm"]
    assert session.remove_assignment(1, 2) is False
    assert session.remove_assignment(99, 1) is False


def test_update_assignment_coerces_points(session):
    assignment = session.update_assignment(2, 3, points_earned="9.5", points_possible="")
    assert assignment.points_earned == 9.5
    assert assignment.points_possible == 0.0
    assert assignment.name == "HW1"


def test_update_assignment_in_wrong_category(session):
    assert session.update_assignment(1, 3, name="x") is None


def test_edits_change_derived_grade(session):
    session.update_assignment(2, 3, points_earned=10)
    assert session.overall_grade() == pytest.approx(95.0)


# ------------------------
# Reset / solve
# ------------------------

def test_reset_keeps_counters(session):
    session.reset()
    assert session.categories == []
    session.load_text(SAMPLE)
    assert [c.id for c in session.categories] == [3, 4]
    assert session.categories[0].assignments[0].id == 4


def test_solve_delegates(session):
    session.add_category("Project", 20)
    session.update_category(1, weight=40)
    session.update_category(2, weight=40)
    # 0.9 * 0.4 + 0.8 * 0.4 = 0.68; (0.8 - 0.68) / 0.2 = 0.6 of 50 points
    outcome = session.solve(80, 3, 50)
    assert outcome.kind == "required"
    assert outcome.points == pytest.approx(30.0)


def test_solve_after_category_removed(session):
    session.remove_category(2)
    assert session.solve(80, 2, 10).kind == "no_category_selected"
