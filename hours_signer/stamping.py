from dataclasses import dataclass
from io import BytesIO
from typing import Iterable, Tuple

from pypdf import PdfReader, PdfWriter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

TEXT = "text"
IMAGE = "image"


@dataclass(frozen=True)
class OverlaySpec:
    """One element stamped onto a page, positioned in points from the bottom-left corner."""
    kind: str
    content: str
    x: float
    y: float
    label: str
    font: str = "Helvetica"
    font_size: float = 10
    scale: float = 1.0
    rotation: float = 0


def text_overlay(text: str, x: float, y: float, label: str, font: str = "Helvetica", font_size: float = 10) -> OverlaySpec:
    return OverlaySpec(kind=TEXT, content=text, x=x, y=y, label=label, font=font, font_size=font_size)


def image_overlay(path: str, x: float, y: float, label: str, scale: float = 1.0) -> OverlaySpec:
    return OverlaySpec(kind=IMAGE, content=path, x=x, y=y, label=label, scale=scale)


def page_count(pdf_bytes: bytes) -> int:
    return len(PdfReader(BytesIO(pdf_bytes)).pages)


def image_size(path: str) -> Tuple[int, int]:
    return ImageReader(path).getSize()


def _overlay_page(width, height, origin, spec: OverlaySpec):
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height))
    c.translate(origin[0] + spec.x, origin[1] + spec.y)
    if spec.rotation:
        c.rotate(spec.rotation)
    if spec.kind == TEXT:
        c.setFont(spec.font, spec.font_size)
        c.drawString(0, 0, spec.content)
    elif spec.kind == IMAGE:
        img = ImageReader(spec.content)
        w, h = img.getSize()
        c.drawImage(img, 0, 0, width=w * spec.scale, height=h * spec.scale, mask='auto')
    else:
        raise ValueError(f"unknown overlay kind: {spec.kind}")
    c.showPage(); c.save()
    return buf.getvalue()


def apply_overlay(pdf_bytes: bytes, spec: OverlaySpec, pages: Iterable[int]) -> bytes:
    """Stamp ``spec`` onto the given 1-based pages and return the whole re-serialized document."""
    reader = PdfReader(BytesIO(pdf_bytes))
    total = len(reader.pages)
    selection = list(pages)
    for number in selection:
        if not 1 <= number <= total:
            raise ValueError(f"page {number} out of range (document has {total} pages)")
    writer = PdfWriter()
    for p in reader.pages:
        writer.add_page(p)
    for number in selection:
        page = reader.pages[number - 1]
        media, crop = page.mediabox, page.cropbox
        # anchor to the visible area, cover the whole media box
        overlay_pdf = _overlay_page(
            float(media.right), float(media.top), (float(crop.left), float(crop.bottom)), spec
        )
        overlay_reader = PdfReader(BytesIO(overlay_pdf))
        writer.pages[number - 1].merge_page(overlay_reader.pages[0])
    out = BytesIO(); writer.write(out)
    return out.getvalue()
