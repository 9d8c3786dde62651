# -*- coding: utf-8 -*-
"""Tests for the DataFrame views used by the app."""
import pytest

from canvas_grades.io_frames import (
    SUMMARY_COLUMNS,
    category_options,
    summary_frame,
)
from canvas_grades.parser import parse_assignments

SAMPLE = "Exams (50%)\nMidterm 45/50\nFinal 90/100\nHomework (50%)\nHW1 8/10\nParticipation"


def test_summary_frame():
    df = summary_frame(parse_assignments(SAMPLE))
    assert list(df.columns) == SUMMARY_COLUMNS
    assert list(df["Category"]) == ["Exams", "Homework", "Participation"]
    assert list(df["Earned"]) == [135.0, 8.0, 0.0]
    assert list(df["Possible"]) == [150.0, 10.0, 0.0]
    assert df["Average %"].tolist() == pytest.approx([90.0, 80.0, 0.0])


def test_summary_frame_empty():
    df = summary_frame([])
    assert df.empty
    assert list(df.columns) == SUMMARY_COLUMNS


def test_category_options_keep_order():
    options = category_options(parse_assignments(SAMPLE))
    assert list(options.items()) == [(1, "Exams"), (2, "Homework"), (3, "Participation")]


def test_every_view_is_rendered_by_the_app():
    """Each public frame helper is called from app.py."""
    import inspect
    from pathlib import Path

    from canvas_grades import io_frames

    app_source = (Path(__file__).resolve().parents[1] / "app.py").read_text(encoding="utf-8")
    helpers = [
        name
        for name, obj in inspect.getmembers(io_frames, inspect.isfunction)
        if obj.__module__ == io_frames.__name__ and not name.startswith("_")
    ]
    assert sorted(helpers) == ["category_options", "summary_frame"]
    for name in helpers:
        assert f"{name}(" in app_source
