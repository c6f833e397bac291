import os
from datetime import date
from typing import Optional


def expand_home(path: str) -> str:
    # only a leading "~" segment is expanded, "~user" is left alone
    home = os.path.expanduser("~")
    if path == "~":
        return home
    if path.startswith("~/") or path.startswith("~" + os.sep):
        return os.path.join(home, path[2:])
    return path


def format_date(day: date) -> str:
    return day.strftime("%d-%m-%Y")


def default_output_name(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"Urenstaat-{today.year}-{today.month:02d}-Joel-Grimberg.pdf"
