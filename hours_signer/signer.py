import logging
import os
import stat
import tempfile
from contextlib import contextmanager, suppress
from datetime import date
from typing import Iterator, List, Optional

from . import stamping
from .errors import ConfigurationError, DocumentIOError, OverlayError
from .stamping import OverlaySpec
from .utils import expand_home, format_date

logger = logging.getLogger(__name__)

# two columns of labels, offsets in points from the bottom-left corner
EMPLOYEE_X = 40
MANAGER_X = 350
NAME_Y = 210
DATE_Y = 195
CAPTION_Y = 180
SIGNATURE_X = 120
SIGNATURE_Y = 90
SIGNATURE_SCALE = 0.35


def read_signature(signature_path: str) -> bytes:
    if not signature_path:
        raise ConfigurationError("signature path is required - please configure it first")
    path = expand_home(signature_path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise ConfigurationError(f"failed to read signature file: {exc}") from exc
    try:
        stamping.image_size(path)
    except Exception as exc:
        raise ConfigurationError(f"signature file is not a readable image: {path}") from exc
    return data


@contextmanager
def materialized_signature(data: bytes, suffix: str = ".png") -> Iterator[str]:
    """Write the signature to a temp file that is removed when the block exits."""
    try:
        fd, path = tempfile.mkstemp(prefix="signature-", suffix=suffix)
    except OSError as exc:
        raise DocumentIOError(f"failed to create temp file: {exc}") from exc
    try:
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as exc:
            raise DocumentIOError(f"failed to write signature: {exc}") from exc
        yield path
    finally:
        with suppress(FileNotFoundError):
            os.remove(path)


def build_overlay_specs(employee_name: str, manager_name: str, signature_file: str, today: date) -> List[OverlaySpec]:
    current_date = format_date(today)
    return [
        stamping.text_overlay(f"Werknemer: {employee_name}", EMPLOYEE_X, NAME_Y, "employee label"),
        stamping.text_overlay(f"Datum: {current_date}", EMPLOYEE_X, DATE_Y, "employee date"),
        stamping.text_overlay("Handtekening:", EMPLOYEE_X, CAPTION_Y, "employee signature label"),
        stamping.image_overlay(signature_file, SIGNATURE_X, SIGNATURE_Y, "signature", scale=SIGNATURE_SCALE),
        stamping.text_overlay(f"Manager: {manager_name}", MANAGER_X, NAME_Y, "manager label"),
        # the manager fills in the date by hand
        stamping.text_overlay("Datum:", MANAGER_X, DATE_Y, "manager date"),
        stamping.text_overlay("Handtekening:", MANAGER_X, CAPTION_Y, "manager signature label"),
    ]


def apply_overlays(document: bytes, specs: List[OverlaySpec], page: int) -> bytes:
    for spec in specs:
        logger.debug("adding %s to page %d", spec.label, page)
        try:
            document = stamping.apply_overlay(document, spec, [page])
        except Exception as exc:
            raise OverlayError(spec.label, exc) from exc
    return document


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _output_mode(target: str) -> int:
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        return 0o644 & ~_current_umask()


def write_output(destination_path: str, data: bytes):
    # write through symlinks, keep the mode of a file being overwritten
    target = os.path.realpath(destination_path)
    directory = os.path.dirname(target)
    try:
        mode = _output_mode(target)
    except OSError as exc:
        raise DocumentIOError(f"failed to write output file: {exc}") from exc
    try:
        fd, tmp = tempfile.mkstemp(prefix=".hours-signer-", suffix=".pdf", dir=directory)
    except OSError as exc:
        raise DocumentIOError(f"failed to write output file: {exc}") from exc
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        os.replace(tmp, target)
    except OSError as exc:
        with suppress(FileNotFoundError):
            os.remove(tmp)
        raise DocumentIOError(f"failed to write output file: {exc}") from exc


def sign_pdf(
    source_path: str,
    destination_path: str,
    employee_name: str,
    manager_name: str,
    signature_path: str,
    today: Optional[date] = None,
) -> str:
    """
    Stamp the employee and manager signature blocks onto the last page of
    ``source_path`` and write the result to ``destination_path``.

    Raises a SigningError subclass naming the step that failed; nothing is
    written to ``destination_path`` unless every step succeeded.
    """
    signature = read_signature(signature_path)
    try:
        with open(source_path, "rb") as f:
            document = f.read()
    except OSError as exc:
        raise DocumentIOError(f"failed to read input file: {exc}") from exc
    try:
        last_page = stamping.page_count(document)
    except Exception as exc:
        raise DocumentIOError(f"failed to read PDF context: {exc}") from exc
    if last_page < 1:
        raise DocumentIOError(f"document has no pages: {source_path}")

    suffix = os.path.splitext(signature_path)[1] or ".png"
    with materialized_signature(signature, suffix) as signature_file:
        specs = build_overlay_specs(employee_name, manager_name, signature_file, today or date.today())
        document = apply_overlays(document, specs, last_page)

    write_output(destination_path, document)
    logger.info("wrote signed document %s (page %d of %s)", destination_path, last_page, source_path)
    return destination_path
