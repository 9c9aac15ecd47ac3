"""Tests for pmtrack.lib.report module."""

import io

import pytest
from rich.console import Console

from pmtrack.core import Project
from pmtrack.lib.report import (
    format_incomplete_activities,
    format_money,
    format_variance,
    project_summary_lines,
    render_report,
    variance,
)


@pytest.fixture
def project():
    project = Project.create("Website Launch", 800, 3)
    design = project.add_milestone(1, "Design")
    project.add_activity(design, 10, "Wireframes", 500, 16)
    project.add_activity(design, 11, "Mockups", 300, 8)
    project.recompute_all()
    return project


def render_to_text(snapshot, **kwargs) -> str:
    buf = io.StringIO()
    console = Console(file=buf, width=200, color_system=None)
    render_report(snapshot, console, **kwargs)
    return buf.getvalue()


class TestFormatting:
    """Tests for the small formatting helpers."""

    def test_variance_is_actual_minus_planned(self):
        assert variance(520, 500) == 20
        assert variance(280, 300) == -20

    def test_format_money(self):
        assert format_money(1234.5) == "$1,234.50"
        assert format_money(0, "EUR ") == "EUR 0.00"

    def test_format_variance_sign(self):
        assert format_variance(20) == "+$20.00"
        assert format_variance(-20) == "-$20.00"
        assert format_variance(0) == "+$0.00"


class TestIncompleteActivities:
    """Tests for format_incomplete_activities()."""

    def test_lists_open_activities(self, project):
        lines = format_incomplete_activities(project)
        assert lines == [
            "ID: 10 | Wireframes (in milestone: Design)",
            "ID: 11 | Mockups (in milestone: Design)",
        ]

    def test_all_done(self, project):
        project.record_progress(10, 1, 1, True)
        project.record_progress(11, 1, 1, True)
        assert format_incomplete_activities(project) == ["All activities are completed!"]


class TestProjectSummary:
    """Tests for project_summary_lines()."""

    def test_in_progress_has_no_variance(self, project):
        lines = "\n".join(project_summary_lines(project.snapshot()))
        assert "in progress" in lines
        assert "0/1 complete" in lines
        assert "variance" not in lines

    def test_complete_shows_variance(self, project):
        project.record_progress(10, 520, 20, True)
        project.record_progress(11, 300, 12, True)
        lines = "\n".join(project_summary_lines(project.snapshot()))
        assert "COMPLETE" in lines
        assert "Actual cost:      $820.00" in lines
        assert "Cost variance:    +$20.00" in lines
        # 32h -> 4 days against 3 planned
        assert "Schedule variance: +1 day(s)" in lines


class TestRenderReport:
    """Tests for render_report()."""

    def test_contains_all_levels(self, project):
        project.record_progress(10, 520, 20, True)
        text = render_to_text(project.snapshot())
        assert "PROJECT STATISTICS" in text
        assert "Website Launch" in text
        assert "Design" in text
        assert "Wireframes" in text
        assert "Mockups" in text
        assert "1/2" in text
        assert "+$20.00" in text

    def test_summary_only(self, project):
        text = render_to_text(project.snapshot(), show_activities=False)
        assert "Milestones" in text
        assert "Activities in Design" not in text

    def test_currency(self, project):
        text = render_to_text(project.snapshot(), currency="€")
        assert "€800.00" in text

    def test_markup_in_names_is_literal(self):
        project = Project.create("P", 0, 0)
        milestone = project.add_milestone(1, "[bold]Phase[/bold]")
        project.add_activity(milestone, 10, "[red]x", 0, 0)
        project.recompute_all()
        text = render_to_text(project.snapshot())
        assert "[bold]Phase[/bold]" in text
        assert "[red]x" in text
