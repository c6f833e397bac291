"""
Interactive session for hours-signer.

The session is a closed set of screens plus one handler per screen, looked up
in ``_HANDLERS``. ``Session.update`` consumes one event (a key name or a
``Resize``) and returns at most one follow-up ``Action`` for the driver:

  SETUP_WELCOME -> SETUP_SIGNATURE -> SETUP_EMPLOYEE -> SETUP_MANAGER -> SETUP_CONFIRM -> MAIN
  MAIN -> FILE_PICKER -> SIGNING -> RESULT -> MAIN
  MAIN -> SETUP_SIGNATURE (edit the active configuration)

Only two transitions have side effects: confirming the setup persists the
draft configuration, and ``Session.sign`` runs the signing pipeline after the
file picker returned ``Action.SIGN``.
"""
import os
from enum import Enum
from typing import Callable, NamedTuple, Optional, Union

from .config import (
    DEFAULT_EMPLOYEE_NAME,
    DEFAULT_MANAGER_NAME,
    DEFAULT_SIGNATURE_HINT,
    Configuration,
    save_config,
)
from .errors import SigningError
from .fields import TextField
from .filepicker import FileBrowser
from .signer import sign_pdf
from .utils import default_output_name


class Screen(str, Enum):
    SETUP_WELCOME = "setup_welcome"
    SETUP_SIGNATURE = "setup_signature"
    SETUP_EMPLOYEE = "setup_employee"
    SETUP_MANAGER = "setup_manager"
    SETUP_CONFIRM = "setup_confirm"
    MAIN = "main"
    FILE_PICKER = "file_picker"
    SIGNING = "signing"
    RESULT = "result"


class Action(str, Enum):
    QUIT = "quit"
    SIGN = "sign"


class Resize(NamedTuple):
    width: int
    height: int


Event = Union[str, Resize]

# quitting mid-wizard or mid-pick would drop input silently
QUIT_SCREENS = {Screen.MAIN, Screen.SETUP_WELCOME, Screen.RESULT}
QUIT_KEYS = {"q", "ctrl+c"}

SIGNATURE, EMPLOYEE, MANAGER = range(3)

# rows used by the file picker screen around the listing
PICKER_CHROME_ROWS = 8


class Session:
    def __init__(
        self,
        config: Configuration,
        config_exists: bool,
        *,
        save: Callable[[Configuration], object] = save_config,
        sign: Callable[..., object] = sign_pdf,
        browser_factory: Callable[[str], FileBrowser] = FileBrowser,
        output_name: Callable[[], str] = default_output_name,
        cwd: Optional[str] = None,
    ):
        self.config = config
        self.config_exists = config_exists
        self.draft = config.model_copy()
        self.persist = save
        self.run_pipeline = sign
        self.make_browser = browser_factory
        self.output_name = output_name
        self.cwd = cwd

        self.inputs = [
            TextField(placeholder=DEFAULT_SIGNATURE_HINT, char_limit=256),
            TextField(placeholder=DEFAULT_EMPLOYEE_NAME, char_limit=100),
            TextField(placeholder=DEFAULT_MANAGER_NAME, char_limit=100),
        ]
        self.inputs[EMPLOYEE].set_value(config.employee_name)
        self.inputs[MANAGER].set_value(config.manager_name)

        self.screen = Screen.MAIN if config_exists else Screen.SETUP_WELCOME
        self.browser: Optional[FileBrowser] = None
        self.selected_file: Optional[str] = None
        self.result_output: Optional[str] = None
        self.result_error: Optional[Exception] = None
        self.width = 0
        self.height = 0

    def update(self, event: Event) -> Optional[Action]:
        if isinstance(event, Resize):
            self.width, self.height = event
            self.fit_browser()
            return None
        if event in QUIT_KEYS and self.screen in QUIT_SCREENS:
            return Action.QUIT
        if event == "esc" and self.screen is Screen.FILE_PICKER:
            self.screen = Screen.MAIN
            return None
        handler = _HANDLERS.get(self.screen)
        if handler is None:
            return None
        return handler(self, event)

    def sign(self):
        """Run the pipeline for the selected file and move to the result screen."""
        output = self.output_name()
        try:
            self.run_pipeline(
                self.selected_file,
                output,
                self.config.employee_name,
                self.config.manager_name,
                self.config.signature_path,
            )
        except SigningError as exc:
            self.result_error = exc
            self.result_output = None
        else:
            self.result_error = None
            self.result_output = output
        self.screen = Screen.RESULT

    def fit_browser(self):
        if self.browser is not None and self.height:
            self.browser.height = max(1, self.height - PICKER_CHROME_ROWS)

    def focus_field(self, index: int):
        for i, field in enumerate(self.inputs):
            if i == index:
                field.focus()
            else:
                field.blur()

    def fill_fields(self, cfg: Configuration):
        self.inputs[SIGNATURE].set_value(cfg.signature_path)
        self.inputs[EMPLOYEE].set_value(cfg.employee_name)
        self.inputs[MANAGER].set_value(cfg.manager_name)


def _commit(session: Session, index: int) -> str:
    field = session.inputs[index]
    return field.value or field.placeholder


def _update_setup_welcome(session: Session, key: str):
    if key in ("enter", " "):
        session.screen = Screen.SETUP_SIGNATURE
        session.focus_field(SIGNATURE)
    return None


def _update_setup_signature(session: Session, key: str):
    if key != "enter":
        session.inputs[SIGNATURE].handle_key(key)
        return None
    value = session.inputs[SIGNATURE].value
    if not value:
        return None
    session.draft.signature_path = value
    session.screen = Screen.SETUP_EMPLOYEE
    session.focus_field(EMPLOYEE)
    return None


def _update_setup_employee(session: Session, key: str):
    if key != "enter":
        session.inputs[EMPLOYEE].handle_key(key)
        return None
    session.draft.employee_name = _commit(session, EMPLOYEE)
    session.screen = Screen.SETUP_MANAGER
    session.focus_field(MANAGER)
    return None


def _update_setup_manager(session: Session, key: str):
    if key != "enter":
        session.inputs[MANAGER].handle_key(key)
        return None
    session.draft.manager_name = _commit(session, MANAGER)
    session.screen = Screen.SETUP_CONFIRM
    session.focus_field(-1)
    return None


def _update_setup_confirm(session: Session, key: str):
    if key in ("enter", "y"):
        try:
            session.persist(session.draft)
        except SigningError as exc:
            session.result_error = exc
            session.result_output = None
            session.screen = Screen.RESULT
            return None
        session.config = session.draft.model_copy()
        session.config_exists = True
        session.screen = Screen.MAIN
    elif key == "n":
        session.fill_fields(session.draft)
        session.focus_field(SIGNATURE)
        session.screen = Screen.SETUP_SIGNATURE
    return None


def _update_main(session: Session, key: str):
    if key in ("s", "1"):
        session.browser = session.make_browser(session.cwd or os.getcwd())
        session.fit_browser()
        session.screen = Screen.FILE_PICKER
    elif key in ("c", "2"):
        session.draft = session.config.model_copy()
        session.fill_fields(session.config)
        session.focus_field(SIGNATURE)
        session.screen = Screen.SETUP_SIGNATURE
    return None


def _update_file_picker(session: Session, key: str):
    path = session.browser.handle_key(key)
    if path is None:
        return None
    session.selected_file = path
    session.screen = Screen.SIGNING
    return Action.SIGN


def _update_result(session: Session, key: str):
    if key in ("enter", " "):
        session.result_error = None
        session.result_output = None
        session.screen = Screen.MAIN
    return None


_HANDLERS = {
    Screen.SETUP_WELCOME: _update_setup_welcome,
    Screen.SETUP_SIGNATURE: _update_setup_signature,
    Screen.SETUP_EMPLOYEE: _update_setup_employee,
    Screen.SETUP_MANAGER: _update_setup_manager,
    Screen.SETUP_CONFIRM: _update_setup_confirm,
    Screen.MAIN: _update_main,
    Screen.FILE_PICKER: _update_file_picker,
    Screen.RESULT: _update_result,
}
