"""
PDF export of a normalized report.

The report is rasterized to one image, scaled to the A4 content width and
tiled down successive pages until its full height is placed.
"""

import logging
import math
from datetime import date
from typing import List, Optional, Tuple

from fpdf import FPDF
from PIL import Image

import config.settings as settings
from sentilyser.exceptions import ExportError
from sentilyser.export.files import report_filename, write_report
from sentilyser.export.renderer import render_report_image
from sentilyser.models.analysis import NormalizedAnalysisResult

logger = logging.getLogger(__name__)

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0


def plan_pages(
    image_width_px: int,
    image_height_px: int,
    page_width_mm: float = A4_WIDTH_MM,
    page_height_mm: float = A4_HEIGHT_MM,
    margin_mm: float = 10.0
) -> List[Tuple[int, int]]:
    """
    Split an image into per-page pixel bands.

    The image is scaled so its width fills the content width; each page
    holds at most one content-height band.

    Returns:
        (top, bottom) pixel rows for each page, covering the whole image in order
    """
    if image_width_px <= 0 or image_height_px <= 0:
        raise ValueError(f"Cannot paginate an empty image ({image_width_px}x{image_height_px})")

    content_width_mm = page_width_mm - 2 * margin_mm
    content_height_mm = page_height_mm - 2 * margin_mm
    px_per_mm = image_width_px / content_width_mm
    band_px = max(1, math.floor(content_height_mm * px_per_mm))

    return [
        (top, min(top + band_px, image_height_px))
        for top in range(0, image_height_px, band_px)
    ]


def paginate(image: Image.Image, margin_mm: float = 10.0) -> FPDF:
    """Lay the image out over as many A4 portrait pages as needed."""
    content_width_mm = A4_WIDTH_MM - 2 * margin_mm
    px_per_mm = image.width / content_width_mm

    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(margin_mm, margin_mm, margin_mm)

    for top, bottom in plan_pages(image.width, image.height, margin_mm=margin_mm):
        pdf.add_page()
        band = image.crop((0, top, image.width, bottom))
        pdf.image(band, x=margin_mm, y=margin_mm, w=content_width_mm, h=(bottom - top) / px_per_mm)

    logger.debug(f"Paginated {image.width}x{image.height}px image over {pdf.page_no()} pages")
    return pdf


def build_pdf(image: Image.Image, margin_mm: float = 10.0) -> bytes:
    """Paginate the image and return the PDF document bytes."""
    return bytes(paginate(image.convert("RGB"), margin_mm=margin_mm).output())


def export_pdf(
    normalized: NormalizedAnalysisResult,
    output_dir: str,
    today: Optional[date] = None
) -> str:
    """
    Render the report and write it as a PDF to output_dir.

    Returns:
        Path to the written file

    Raises:
        ExportError: If rasterization, pagination or writing fails
    """
    data = build_report_pdf(normalized, today=today)
    try:
        return write_report(data, output_dir, report_filename("pdf", today))
    except OSError as e:
        logger.error(f"Failed to write PDF report: {e}")
        raise ExportError("pdf", e) from e


def build_report_pdf(normalized: NormalizedAnalysisResult, today: Optional[date] = None) -> bytes:
    """In-memory variant of export_pdf for download buttons."""
    try:
        image = render_report_image(normalized, dpi=settings.RENDER_DPI, generated_on=today)
        return build_pdf(image, margin_mm=settings.PDF_MARGIN_MM)
    except Exception as e:
        logger.error(f"PDF export failed: {e}")
        raise ExportError("pdf", e) from e
