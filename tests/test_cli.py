import json

from pypdf import PdfReader

from hours_signer import cli
from hours_signer.config import DEFAULT_EMPLOYEE_NAME, DEFAULT_MANAGER_NAME, Configuration, save_config
from hours_signer.utils import default_output_name


def test_init_writes_default_config(config_file, capsys):
    assert cli.main(["-init"]) == 0
    assert json.loads(config_file.read_text(encoding="utf-8")) == Configuration().model_dump()
    assert f"Config file created at: {config_file}" in capsys.readouterr().out


def test_show_config_without_signature(config_file, capsys):
    assert cli.main(["-show-config"]) == 0
    out = capsys.readouterr().out
    assert f"Config file: {config_file}" in out
    assert f"Employee name: {DEFAULT_EMPLOYEE_NAME}" in out
    assert f"Manager name: {DEFAULT_MANAGER_NAME}" in out
    assert "Signature: (not configured)" in out


def test_show_config_with_signature(config_file, capsys):
    save_config(Configuration(signature_path="~/sig.png"))
    assert cli.main(["--show-config"]) == 0
    assert "Signature path: ~/sig.png" in capsys.readouterr().out


def test_missing_input_prints_usage(config_file, capsys):
    assert cli.main(["-employee", "Anna"]) == 1
    out = capsys.readouterr().out
    assert "Error: -input is required" in out
    assert "usage: hours-signer" in out


def test_sign_with_overrides(config_file, make_pdf, signature_png, tmp_path, capsys, scratch_dir):
    destination = tmp_path / "signed.pdf"
    code = cli.main([
        "-input", str(make_pdf(pages=2)),
        "-output", str(destination),
        "-employee", "Anna de Vries",
        "-manager", "Kees",
        "-signature", str(signature_png),
    ])
    assert code == 0
    out = capsys.readouterr().out
    assert f"✓ Created signed PDF: {destination}" in out
    assert "Employee: Anna de Vries" in out
    assert "Manager: Kees" in out
    text = PdfReader(str(destination)).pages[1].extract_text()
    assert "Werknemer: Anna de Vries" in text
    # overrides are not persisted
    assert not config_file.exists()


def test_sign_uses_saved_config_and_default_output(config_file, make_pdf, signature_png, tmp_path, monkeypatch, capsys, scratch_dir):
    save_config(Configuration(signature_path=str(signature_png), employee_name="Jan", manager_name="Piet"))
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-input", str(make_pdf())]) == 0
    assert (tmp_path / default_output_name()).exists()
    out = capsys.readouterr().out
    assert "Employee: Jan" in out
    assert "Manager: Piet" in out


def test_sign_without_signature_fails(config_file, make_pdf, tmp_path, capsys, scratch_dir):
    destination = tmp_path / "signed.pdf"
    assert cli.main(["-input", str(make_pdf()), "-output", str(destination)]) == 1
    assert "Error: signature path is required" in capsys.readouterr().out
    assert not destination.exists()


def test_show_config_survives_invalid_utf8(config_file, capsys):
    config_file.parent.mkdir(parents=True)
    config_file.write_bytes(b'{"employee_name": "\xff\xfe"}')
    assert cli.main(["-show-config"]) == 0
    out = capsys.readouterr().out
    assert f"Employee name: {DEFAULT_EMPLOYEE_NAME}" in out
    assert f"Manager name: {DEFAULT_MANAGER_NAME}" in out
