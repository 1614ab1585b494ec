# Rev 0.1.0

"""Line-oriented menu for DIY projects.

Blank input at the menu exits. Errors from one selection are reported and the
menu is shown again.
"""
from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from ..exceptions import DbError
from ..models.entities import Project
from ..services.project_service import ProjectService
from ..utils.logging_setup import get_logger

CENTS = Decimal("0.01")
MIN_DIFFICULTY, MAX_DIFFICULTY = 1, 5

OPERATIONS = [
    "1) Add a project",
]


class ProjectsApp:
    def __init__(
        self,
        service: ProjectService,
        input_fn: Optional[Callable[[str], str]] = None,
        out: Optional[Callable[[str], None]] = None,
    ):
        self._service = service
        self._input = input_fn or input
        self._out = out or print
        self._log = get_logger("ProjectsApp")

    # ---------- menu loop ----------

    def process_user_selections(self) -> None:
        done = False
        while not done:
            try:
                selection = self._get_user_selection()
                if selection is None:
                    done = self._exit_menu()
                elif selection == 1:
                    self.create_project()
                else:
                    self._out(f"\n{selection} is not a valid selection. Try again.")
            except DbError as e:
                self._log.error("Menu selection failed: %s", e, exc_info=e.__cause__ is not None)
                self._out(f"\nError: {e} Try again.")

    def _get_user_selection(self) -> Optional[int]:
        self._print_operations()
        try:
            return self._get_int_input("Enter a menu selection")
        except EOFError:
            return None

    def _print_operations(self) -> None:
        self._out("\nThese are the available selections. Press the Enter key to quit:")
        for line in OPERATIONS:
            self._out(f"  {line}")

    def _exit_menu(self) -> bool:
        self._out("Exiting the menu.")
        return True

    # ---------- operations ----------

    def create_project(self) -> Project:
        try:
            project = Project(
                project_name=self._get_string_input("Enter the project name"),
                estimated_hours=self._get_decimal_input("Enter the estimated hours"),
                actual_hours=self._get_decimal_input("Enter the actual hours"),
                difficulty=self._get_difficulty(),
                notes=self._get_string_input("Enter the project notes"),
            )
        except EOFError:
            raise DbError("Input ended before the project was complete.") from None
        db_project = self._service.add_project(project)
        self._out(f"You have successfully created project: {db_project}")
        return db_project

    def _get_difficulty(self) -> int:
        # no retry limit: only a whole number in range gets past here
        while True:
            prompt = f"Enter the project difficulty ({MIN_DIFFICULTY}-{MAX_DIFFICULTY})"
            try:
                value = self._get_int_input(prompt)
            except DbError as e:
                self._out(str(e))
                value = None
            if value is not None and MIN_DIFFICULTY <= value <= MAX_DIFFICULTY:
                return value
            self._out(f"Difficulty must be a whole number from {MIN_DIFFICULTY} to {MAX_DIFFICULTY}.")

    # ---------- input parsing ----------

    def _get_string_input(self, prompt: str) -> Optional[str]:
        line = self._input(f"{prompt}: ")
        return line.strip() or None

    def _get_int_input(self, prompt: str) -> Optional[int]:
        text = self._get_string_input(prompt)
        if text is None:
            return None
        try:
            return int(text)
        except ValueError:
            raise DbError(f"{text} is not a valid number.") from None

    def _get_decimal_input(self, prompt: str) -> Optional[Decimal]:
        text = self._get_string_input(prompt)
        if text is None:
            return None
        try:
            value = Decimal(text)
            if not value.is_finite():
                raise InvalidOperation(text)
            return value.quantize(CENTS)
        except InvalidOperation:
            raise DbError(f"{text} is not a valid decimal number.") from None
