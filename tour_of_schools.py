"""Tour of Schools views and interactive console.

This module holds the view controllers that sit on top of
:class:`school_api.SchoolAPI` and a line‑oriented console that drives
them:

* :class:`SchoolsController` – the full list with add and delete.
* :class:`SchoolDetailController` – one school, editable, with save
  and back.
* :class:`DashboardController` – the "top schools" strip.
* :class:`SchoolSearchController` – search as you type.
* :class:`Navigator` – the route history shared by the views.

Controllers never see transport errors; the API client turns them into
empty results and writes a line to the message log, which the console
prints with the ``messages`` command.

The console reads its configuration from the environment:

``TOUR_OF_SCHOOLS_BASE_URL``
    Base URL of the backend.  Defaults to ``http://127.0.0.1:8000``.

``TOUR_OF_SCHOOLS_TIMEOUT``
    Request timeout in seconds.  Defaults to 15.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Dict, List, Optional, TextIO

from school_api import MessageService, School, SchoolAPI, SchoolNotFoundError


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
DASHBOARD = "/dashboard"
SCHOOLS = "/schools"
DETAIL_PREFIX = "/detail/"


class Navigator:
    """Route history of the application.

    Routes are plain paths: ``/dashboard``, ``/schools`` and
    ``/detail/<id>``.
    """

    def __init__(self, start: str = DASHBOARD) -> None:
        self.history: List[str] = [start]

    @property
    def current(self) -> str:
        return self.history[-1]

    def navigate(self, path: str) -> None:
        logger.debug("Navigating to %s", path)
        self.history.append(path)

    def back(self) -> None:
        """Return to the previous route.  Does nothing at the first route."""
        if len(self.history) > 1:
            self.history.pop()

    def route_params(self) -> Dict[str, str]:
        if self.current.startswith(DETAIL_PREFIX):
            return {"id": self.current[len(DETAIL_PREFIX):]}
        return {}


class SchoolsController:
    """List view.

    ``schools`` is a local copy of the collection.  Additions and
    deletions are applied to it directly instead of reloading.  A
    deletion is applied before the server confirms it and is not
    undone if the server call fails.
    """

    def __init__(self, api: SchoolAPI) -> None:
        self.api = api
        self.schools: List[School] = []
        self.load()

    def load(self) -> None:
        self.schools = self.api.list_schools()

    def add(self, name: str) -> Optional[School]:
        name = name.strip()
        if not name:
            return None
        school = self.api.add_school(name)
        if school:
            self.schools.append(school)
        return school

    def delete(self, school: School) -> None:
        self.schools = [s for s in self.schools if s.id != school.id]
        self.api.delete_school(school)


class SchoolDetailController:
    """Detail view of the school named by the current route."""

    def __init__(self, api: SchoolAPI, navigator: Navigator) -> None:
        self.api = api
        self.navigator = navigator
        self.school: Optional[School] = None

    def load(self) -> Optional[School]:
        """Fetch the school whose id is in the route.

        Raises:
            SchoolNotFoundError: The school does not exist.
        """
        school_id = int(self.navigator.route_params()["id"])
        self.school = self.api.get_school(school_id)
        return self.school

    def go_back(self) -> None:
        self.navigator.back()

    def save(self) -> None:
        """Send the edited school to the server, then go back.

        Navigation happens whether or not the update succeeded.
        """
        if self.school is not None:
            self.api.update_school(self.school)
        self.go_back()


class DashboardController:
    """Shows four schools, skipping the first one of the collection."""

    def __init__(self, api: SchoolAPI, navigator: Navigator) -> None:
        self.api = api
        self.navigator = navigator
        self.top_schools: List[School] = []
        self.load()

    def load(self) -> None:
        self.top_schools = self.api.list_schools()[1:5]

    def select(self, school: School) -> None:
        self.navigator.navigate(f"{DETAIL_PREFIX}{school.id}")


class SchoolSearchController:
    """Search as you type.

    A term equal to the previous one is not sent again.  Earlier
    searches are never cancelled.
    """

    def __init__(self, api: SchoolAPI) -> None:
        self.api = api
        self.results: List[School] = []
        self._last_term: Optional[str] = None

    def search(self, term: str) -> List[School]:
        if term == self._last_term:
            return self.results
        self._last_term = term
        self.results = self.api.search_schools(term)
        return self.results


class TourOfSchoolsConsole:
    """Command shell over the controllers.

    Each input line is a command followed by optional arguments, e.g.
    ``add Alice`` or ``detail 15``.  Output goes to ``stdout``.
    """

    title = "Tour of Schools"

    def __init__(
        self,
        api: SchoolAPI,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.api = api
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.navigator = Navigator()
        self.search_controller = SchoolSearchController(api)
        self.schools_controller: Optional[SchoolsController] = None
        self.dashboard_controller: Optional[DashboardController] = None
        self.detail_controller: Optional[SchoolDetailController] = None
        self.commands: Dict[str, Callable[[str], None]] = {
            "dashboard": self._handle_dashboard,
            "schools": self._handle_schools,
            "add": self._handle_add,
            "delete": self._handle_delete,
            "detail": self._handle_detail,
            "rename": self._handle_rename,
            "save": self._handle_save,
            "back": self._handle_back,
            "search": self._handle_search,
            "messages": self._handle_messages,
            "clear": self._handle_clear,
            "help": self._handle_help,
        }

    @property
    def message_service(self) -> MessageService:
        return self.api.message_service

    def _write(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _show_current(self) -> None:
        """(Re)load and print the view for the current route."""
        route = self.navigator.current
        if route == SCHOOLS:
            self.schools_controller = SchoolsController(self.api)
            self._render_schools()
        elif route.startswith(DETAIL_PREFIX):
            self.detail_controller = SchoolDetailController(self.api, self.navigator)
            try:
                self.detail_controller.load()
            except SchoolNotFoundError as exc:
                self._write(str(exc))
                self.detail_controller = None
                self.navigator.back()
                self._show_current()
                return
            self._render_detail()
        else:
            self.dashboard_controller = DashboardController(self.api, self.navigator)
            self._render_dashboard()

    def _render_dashboard(self) -> None:
        self._write("Top Schools")
        for school in self.dashboard_controller.top_schools:
            self._write(f"  {school.name}")

    def _render_schools(self) -> None:
        self._write("My Schools")
        for school in self.schools_controller.schools:
            self._write(f"  {school.id} {school.name}")

    def _render_detail(self) -> None:
        school = self.detail_controller.school
        if school is None:
            self._write("School could not be loaded")
            return
        self._write(f"{school.name.upper()} Details")
        self._write(f"id: {school.id}")
        self._write(f"name: {school.name}")

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------
    def _handle_dashboard(self, args: str) -> None:
        self.navigator.navigate(DASHBOARD)
        self._show_current()

    def _handle_schools(self, args: str) -> None:
        self.navigator.navigate(SCHOOLS)
        self._show_current()

    def _require_schools_view(self) -> bool:
        if self.navigator.current != SCHOOLS or self.schools_controller is None:
            self._write("Open the schools view first")
            return False
        return True

    def _handle_add(self, args: str) -> None:
        if not self._require_schools_view():
            return
        if self.schools_controller.add(args):
            self._render_schools()

    def _handle_delete(self, args: str) -> None:
        if not self._require_schools_view():
            return
        try:
            school_id = int(args)
        except ValueError:
            self._write("Usage: delete <id>")
            return
        for school in self.schools_controller.schools:
            if school.id == school_id:
                self.schools_controller.delete(school)
                self._render_schools()
                return
        self._write(f"No school with id {school_id} in the list")

    def _handle_detail(self, args: str) -> None:
        try:
            school_id = int(args)
        except ValueError:
            self._write("Usage: detail <id>")
            return
        self.navigator.navigate(f"{DETAIL_PREFIX}{school_id}")
        self._show_current()

    def _require_detail_view(self) -> bool:
        if self.detail_controller is None or self.detail_controller.school is None:
            self._write("Open a school first")
            return False
        return True

    def _handle_rename(self, args: str) -> None:
        if not self._require_detail_view():
            return
        self.detail_controller.school.name = args
        self._render_detail()

    def _handle_save(self, args: str) -> None:
        if not self._require_detail_view():
            return
        self.detail_controller.save()
        self.detail_controller = None
        self._show_current()

    def _handle_back(self, args: str) -> None:
        if self.detail_controller is not None:
            self.detail_controller.go_back()
            self.detail_controller = None
        else:
            self.navigator.back()
        self._show_current()

    def _handle_search(self, args: str) -> None:
        for school in self.search_controller.search(args):
            self._write(f"  {school.name}")

    def _handle_messages(self, args: str) -> None:
        self._write("Messages")
        for message in self.message_service.messages:
            self._write(f"  {message}")

    def _handle_clear(self, args: str) -> None:
        self.message_service.clear()

    def _handle_help(self, args: str) -> None:
        self._write(
            "Commands:\n"
            "  dashboard          show the top schools\n"
            "  schools            list all schools\n"
            "  add <name>         add a school (schools view)\n"
            "  delete <id>        delete a school (schools view)\n"
            "  detail <id>        open a school\n"
            "  rename <name>      edit the open school\n"
            "  save               save the open school and go back\n"
            "  back               go back without saving\n"
            "  search <term>      search schools by name\n"
            "  messages           show the message log\n"
            "  clear              clear the message log\n"
            "  quit               leave"
        )

    def handle(self, line: str) -> bool:
        """Run one command.  Returns ``False`` when the console should stop."""
        command, _, args = line.strip().partition(" ")
        command = command.lower()
        if not command:
            return True
        if command in {"quit", "exit"}:
            return False
        handler = self.commands.get(command)
        if handler is None:
            self._write(f"Unknown command: {command} (try 'help')")
            return True
        handler(args.strip())
        return True

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        """Show the dashboard and process commands until ``quit`` or EOF."""
        logger.info("Console started against %s", self.api.base_url)
        self._write(self.title)
        self._show_current()
        try:
            for line in self.stdin:
                if not self.handle(line):
                    break
        except KeyboardInterrupt:
            logger.info("Console stopped by user.")


def main(base_url: Optional[str] = None) -> None:
    base_url = base_url or os.getenv("TOUR_OF_SCHOOLS_BASE_URL", DEFAULT_BASE_URL)
    try:
        timeout = float(os.getenv("TOUR_OF_SCHOOLS_TIMEOUT", "15"))
    except ValueError:
        logger.warning("TOUR_OF_SCHOOLS_TIMEOUT should be a number of seconds; using 15")
        timeout = 15
    api = SchoolAPI(base_url=base_url, message_service=MessageService(), timeout=timeout)
    try:
        TourOfSchoolsConsole(api).run()
    finally:
        api.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
    main()
