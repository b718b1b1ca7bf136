"""Tests for view specification building."""
from template_deployer.catalog.tiers import ViewDeclaration, resolve
from template_deployer.generators.template_gen.views import build_view, build_views, infer_view_kind, resolve_view_kind
from template_deployer.schemas.build import ViewKind


def test_infer_view_kind_rules():
    assert infer_view_kind("task-kanban") == ViewKind.BOARD
    assert infer_view_kind("project-timeline") == ViewKind.TIMELINE
    assert infer_view_kind("crew-schedule") == ViewKind.TIMELINE
    assert infer_view_kind("analytics-dashboard") == ViewKind.TABLE
    assert infer_view_kind("portfolio-overview") == ViewKind.TABLE
    assert infer_view_kind("inspection-calendar") == ViewKind.CALENDAR
    assert infer_view_kind("anything-else") == ViewKind.TABLE


def test_infer_view_kind_is_deterministic():
    names = ["", "KANBAN", "schedule-calendar", "x" * 200]
    assert [infer_view_kind(n) for n in names] == [infer_view_kind(n) for n in names]
    assert all(isinstance(infer_view_kind(n), ViewKind) for n in names)


def test_explicit_tag_wins_over_inference():
    # "pending-tasks" has no keyword but is declared as a board.
    assert resolve_view_kind(ViewDeclaration("pending-tasks", ViewKind.BOARD)) == ViewKind.BOARD
    assert resolve_view_kind(ViewDeclaration("task-kanban", ViewKind.TABLE)) == ViewKind.TABLE


def test_untagged_views_fall_back_to_inference():
    assert resolve_view_kind(ViewDeclaration("integration-hub")) == ViewKind.TABLE
    assert resolve_view_kind(ViewDeclaration("site-calendar")) == ViewKind.CALENDAR


def test_unknown_view_uses_default_databases():
    view = build_view(ViewDeclaration("status-board"))
    assert view.databases == ["projects"]
    assert view.configuration.group_by == "Status"


def test_professional_views():
    views = build_views(resolve("professional"))
    by_name = {v.name: v for v in views}

    assert len(views) == 8
    assert by_name["task-kanban"].kind == ViewKind.BOARD
    assert by_name["project-timeline"].kind == ViewKind.TIMELINE
    assert by_name["project-timeline"].databases == ["projects", "schedules"]
    assert by_name["vendor-directory"].configuration.sorts[0].direction == "ascending"
