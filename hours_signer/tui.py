import curses
import unicodedata
from contextlib import suppress
from typing import Optional, Union

from .session import Action, Resize, Session
from .views import render

_SPECIAL_KEYS = {
    curses.KEY_ENTER: "enter",
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_HOME: "home",
    curses.KEY_END: "end",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_DC: "delete",
}

_CONTROL_CHARS = {
    "\n": "enter",
    "\r": "enter",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\b": "backspace",
    "\x01": "ctrl+a",
    "\x03": "ctrl+c",
    "\x05": "ctrl+e",
    "\x15": "ctrl+u",
}


def translate_key(ch: Union[int, str], stdscr=None) -> Optional[Union[str, Resize]]:
    """Map a curses key code to the event names understood by Session.update."""
    if isinstance(ch, int):
        if ch == curses.KEY_RESIZE and stdscr is not None:
            height, width = stdscr.getmaxyx()
            return Resize(width, height)
        return _SPECIAL_KEYS.get(ch)
    if ch in _CONTROL_CHARS:
        return _CONTROL_CHARS[ch]
    if ch.isprintable():
        return ch
    return None


def cell_width(ch: str) -> int:
    if unicodedata.combining(ch) or unicodedata.category(ch) in ("Mn", "Me", "Cf"):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def clip_to_width(line: str, width: int) -> str:
    """Cut ``line`` so it fits in ``width`` terminal cells."""
    used = 0
    for idx, ch in enumerate(line):
        used += cell_width(ch)
        if used > width:
            return line[:idx]
    return line


def _draw(stdscr, session: Session):
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    for row, line in enumerate(render(session).splitlines()[: height - 1]):
        stdscr.addstr(row, 0, clip_to_width(line, width - 1))
    stdscr.refresh()


def _loop(stdscr, session: Session):
    curses.raw()
    with suppress(curses.error):
        curses.curs_set(0)
    height, width = stdscr.getmaxyx()
    session.update(Resize(width, height))
    while True:
        _draw(stdscr, session)
        event = translate_key(stdscr.get_wch(), stdscr)
        if event is None:
            continue
        action = session.update(event)
        if action is Action.QUIT:
            return
        if action is Action.SIGN:
            _draw(stdscr, session)
            session.sign()


def run(session: Session):
    curses.set_escdelay(25)
    curses.wrapper(_loop, session)
