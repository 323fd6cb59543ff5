"""Tests for the list, detail, dashboard and search controllers."""

import pytest

from school_api import School, SchoolNotFoundError
from tour_of_schools import (
    DashboardController,
    Navigator,
    SchoolDetailController,
    SchoolSearchController,
    SchoolsController,
)


def test_schools_controller_loads_on_init(api):
    controller = SchoolsController(api)
    assert len(controller.schools) == 10


def test_failed_load_shows_empty_list(failing_api):
    assert SchoolsController(failing_api).schools == []


def test_delete_target_school(api):
    controller = SchoolsController(api)
    target = next(s for s in controller.schools if s.id == 15)
    controller.delete(target)
    assert len(controller.schools) == 9
    assert all(s.id != 15 for s in controller.schools)
    assert len(api.list_schools()) == 9


def test_delete_is_not_rolled_back_when_server_fails(api, monkeypatch):
    controller = SchoolsController(api)
    monkeypatch.setattr(api, "delete_school", lambda school: None)
    controller.delete(School(id=15, name="Magneta"))
    assert all(s.id != 15 for s in controller.schools)
    assert len(api.list_schools()) == 10


def test_add_appends_server_entity(api):
    controller = SchoolsController(api)
    controller.delete(next(s for s in controller.schools if s.id == 15))
    school = controller.add("  Alice  ")
    assert school == School(id=21, name="Alice")
    assert len(controller.schools) == 10
    assert controller.schools[-1] == school


def test_add_blank_name_is_noop(api, session):
    controller = SchoolsController(api)
    calls = len(session.calls)
    assert controller.add("   ") is None
    assert len(session.calls) == calls
    assert len(controller.schools) == 10


def test_add_failure_leaves_list_unchanged(api, monkeypatch):
    controller = SchoolsController(api)
    monkeypatch.setattr(api, "add_school", lambda name: None)
    controller.add("Alice")
    assert len(controller.schools) == 10


def test_detail_loads_school_from_route(api):
    navigator = Navigator()
    navigator.navigate("/detail/15")
    controller = SchoolDetailController(api, navigator)
    assert controller.load() == School(id=15, name="Magneta")


def test_detail_not_found_propagates(api):
    navigator = Navigator()
    navigator.navigate("/detail/99")
    with pytest.raises(SchoolNotFoundError):
        SchoolDetailController(api, navigator).load()


def test_detail_save_updates_and_goes_back(api):
    navigator = Navigator()
    navigator.navigate("/schools")
    navigator.navigate("/detail/15")
    controller = SchoolDetailController(api, navigator)
    controller.load()
    controller.school.name = "MagnetaX"
    controller.save()
    assert navigator.current == "/schools"
    assert api.get_school(15).name == "MagnetaX"


def test_detail_save_goes_back_even_when_update_fails(api, monkeypatch):
    navigator = Navigator()
    navigator.navigate("/detail/15")
    controller = SchoolDetailController(api, navigator)
    controller.load()
    monkeypatch.setattr(api, "update_school", lambda school: None)
    controller.save()
    assert navigator.current == "/dashboard"


def test_detail_go_back_does_not_save(api):
    navigator = Navigator()
    navigator.navigate("/detail/15")
    controller = SchoolDetailController(api, navigator)
    controller.load()
    controller.school.name = "MagnetaX"
    controller.go_back()
    assert navigator.current == "/dashboard"
    assert api.get_school(15).name == "Magneta"


def test_navigator_back_stops_at_first_route():
    navigator = Navigator()
    navigator.back()
    assert navigator.current == "/dashboard"
    assert navigator.route_params() == {}


def test_dashboard_top_schools(api):
    navigator = Navigator()
    dashboard = DashboardController(api, navigator)
    assert [s.name for s in dashboard.top_schools] == ["Narco", "Bombasto", "Celeritas", "Magneta"]
    dashboard.select(dashboard.top_schools[3])
    assert navigator.current == "/detail/15"


def test_search_controller_narrowing(api):
    search = SchoolSearchController(api)
    assert len(search.search("Ma")) == 4
    assert len(search.search("Mag")) == 2
    assert search.search("Mag" + "n") == [School(id=15, name="Magneta")]


def test_search_controller_skips_repeated_term(api, session):
    search = SchoolSearchController(api)
    search.search("Mag")
    search.search("Mag")
    assert len(session.calls) == 1
