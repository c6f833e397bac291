import curses

from hours_signer.fields import TextField
from hours_signer.filepicker import FileBrowser
from hours_signer.session import Resize
from hours_signer.tui import clip_to_width, translate_key


def focused_field(**kwargs):
    field = TextField(**kwargs)
    field.focus()
    return field


def test_text_field_inserts_at_cursor():
    field = focused_field()
    for key in "hllo":
        field.handle_key(key)
    for _ in range(3):
        field.handle_key("left")
    field.handle_key("e")
    assert field.value == "hello"
    field.handle_key("end")
    field.handle_key("backspace")
    assert field.value == "hell"


def test_text_field_respects_char_limit():
    field = focused_field(char_limit=3)
    for key in "abcdef":
        field.handle_key(key)
    assert field.value == "abc"
    field.set_value("too long for it")
    assert field.value == "too"


def test_text_field_ignores_keys_when_blurred():
    field = TextField(value="keep")
    field.handle_key("x")
    field.handle_key("ctrl+u")
    assert field.value == "keep"


def test_text_field_view_shows_placeholder_when_empty():
    field = TextField(placeholder="Rob van der Pouw Kraan")
    assert "Rob van der Pouw Kraan" in field.view()
    field.set_value("Anna")
    assert field.view() == "> Anna"


def make_tree(root):
    (root / "b-dir").mkdir()
    (root / "a-dir").mkdir()
    (root / "a-dir" / "inner.pdf").write_bytes(b"%PDF")
    (root / "timesheet.PDF").write_bytes(b"%PDF")
    (root / "notes.txt").write_text("skip me")
    (root / ".hidden.pdf").write_bytes(b"%PDF")


def test_browser_lists_dirs_first_and_filters_extension(tmp_path):
    make_tree(tmp_path)
    browser = FileBrowser(str(tmp_path))
    assert [(e.name, e.is_dir) for e in browser.entries] == [
        ("a-dir", True),
        ("b-dir", True),
        ("timesheet.PDF", False),
    ]


def test_browser_selects_file(tmp_path):
    make_tree(tmp_path)
    browser = FileBrowser(str(tmp_path))
    browser.handle_key("down")
    browser.handle_key("down")
    browser.handle_key("down")
    assert browser.selected == 2
    assert browser.handle_key("enter") == str(tmp_path / "timesheet.PDF")


def test_browser_enters_and_leaves_directories(tmp_path):
    make_tree(tmp_path)
    browser = FileBrowser(str(tmp_path))
    assert browser.handle_key("enter") is None
    assert browser.current_directory == str(tmp_path / "a-dir")
    assert browser.handle_key("l") == str(tmp_path / "a-dir" / "inner.pdf")
    browser.handle_key("backspace")
    assert browser.current_directory == str(tmp_path)


def test_browser_reports_unreadable_directory(tmp_path):
    browser = FileBrowser(str(tmp_path / "gone"))
    assert browser.entries == []
    assert browser.error
    assert browser.handle_key("enter") is None
    assert "cannot read directory" in browser.view()


def test_translate_key():
    assert translate_key(curses.KEY_UP) == "up"
    assert translate_key(curses.KEY_BACKSPACE) == "backspace"
    assert translate_key("\n") == "enter"
    assert translate_key("\x1b") == "esc"
    assert translate_key("\x03") == "ctrl+c"
    assert translate_key("ë") == "ë"
    assert translate_key("\x02") is None


def test_translate_resize_reads_screen_size():
    class Screen:
        def getmaxyx(self):
            return (30, 100)

    assert translate_key(curses.KEY_RESIZE, Screen()) == Resize(100, 30)


def test_clip_counts_wide_characters_as_two_cells():
    assert clip_to_width("📝 Hours", 4) == "📝 H"
    assert clip_to_width("日本語", 3) == "日"
    assert clip_to_width("日本語", 4) == "日本"


def test_clip_leaves_short_ascii_alone():
    assert clip_to_width("Hours", 10) == "Hours"
    assert clip_to_width("Hours", 3) == "Hou"


def test_clip_ignores_combining_marks():
    assert clip_to_width("Joël", 4) == "Joël"
    assert clip_to_width("Joël", 3) == "Joë"
