import base64
import tempfile
from io import BytesIO

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

SIMPLE_SIGNATURE_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/Pf8icQAAAABJRU5ErkJggg=="


def build_pdf(pages: int, pagesize=A4) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=pagesize)
    for number in range(1, pages + 1):
        c.setFont("Helvetica", 12)
        c.drawString(72, 750, f"Timesheet page {number}")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config" / "hours-signer" / "config.json"
    monkeypatch.setenv("HOURS_SIGNER_CONFIG", str(path))
    return path


@pytest.fixture
def signature_png(tmp_path):
    path = tmp_path / "signature.png"
    path.write_bytes(base64.b64decode(SIMPLE_SIGNATURE_B64))
    return path


@pytest.fixture
def make_pdf(tmp_path):
    def _make(pages: int = 1, name: str = "timesheet.pdf"):
        path = tmp_path / name
        path.write_bytes(build_pdf(pages))
        return path
    return _make


@pytest.fixture
def scratch_dir(tmp_path, monkeypatch):
    """Route tempfile.mkstemp into a directory the test can inspect."""
    path = tmp_path / "scratch"
    path.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(path))
    return path
