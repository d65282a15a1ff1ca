"""
Treatments brochure as a downloadable PDF.

One A4 document: a title band in the resort's green, a short introduction,
the numbered treatment list with descriptions, and the contact block.
Every page carries a "Page N of M" footer.

Usage:
    path = save_brochure("downloads")
    # downloads/OLU_Ayurveda_Treatments_2026-10-17.pdf
"""

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from resort_booking.config import ResortConfig, settings
from resort_booking.tools.treatments import get_all_treatments

logger = logging.getLogger(__name__)

GREEN = (46, 139, 87)
GOLD = (201, 162, 106)
INK = (47, 47, 47)
MUTED = (128, 128, 128)
WHITE = (255, 255, 255)

MARGIN = 14
FILENAME_PREFIX = "OLU_Ayurveda_Treatments"
SUBTITLE = "Ayurveda Treatments & Packages"
INTRO = (
    "Discover a curated range of ancient and modern wellness therapies "
    "designed to balance mind, body, and spirit."
)

# Core PDF fonts cover Latin-1 only
_PUNCTUATION = {
    "\u2013": "-", "\u2014": "-",
    "\u2018": "'", "\u2019": "'",
    "\u201c": '"', "\u201d": '"',
}


def _latin1(text: str) -> str:
    for char, plain in _PUNCTUATION.items():
        text = text.replace(char, plain)
    return text.encode("latin-1", "replace").decode("latin-1")


class TreatmentBrochure(FPDF):
    """FPDF document laid out as the resort's treatments brochure."""

    def __init__(self, resort: ResortConfig, issued: date) -> None:
        super().__init__(orientation="P", unit="mm", format="A4")
        self.resort = resort
        self.issued = issued
        self.set_margins(MARGIN, 20, MARGIN)
        self.set_auto_page_break(auto=True, margin=20)

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("helvetica", "", 8)
        self.set_text_color(*MUTED)
        text = f"© {self.issued.year} {self.resort.name} - Page {self.page_no()} of {{nb}}"
        self.cell(0, 10, _latin1(text), align="C")

    def title_band(self) -> None:
        self.set_fill_color(*GREEN)
        self.rect(0, 0, self.w, 35, style="F")
        self.set_text_color(*WHITE)
        self.set_font("helvetica", "B", 24)
        self.set_xy(0, 8)
        self.cell(self.w, 10, _latin1(self.resort.name), align="C")
        self.set_font("helvetica", "", 14)
        self.set_xy(0, 20)
        self.cell(self.w, 8, SUBTITLE, align="C")
        self.set_xy(MARGIN, 42)

    def intro(self) -> None:
        self.set_text_color(*INK)
        self.set_font("helvetica", "I", 11)
        self.multi_cell(0, 5, INTRO, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(6)

    def heading(self, text: str, size: int) -> None:
        self.set_font("helvetica", "B", size)
        self.set_text_color(*GREEN)
        self.cell(0, 8, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(2)

    def rule(self, color: tuple[int, int, int], width: float) -> None:
        self.set_draw_color(*color)
        self.set_line_width(width)
        self.line(MARGIN, self.get_y(), self.w - MARGIN, self.get_y())

    def treatment_entry(self, number: int, treatment: dict) -> None:
        # Keep a title together with the start of its description
        if self.will_page_break(30):
            self.add_page()
        self.set_font("helvetica", "B", 12)
        self.set_text_color(*INK)
        self.cell(
            0, 7, _latin1(f"{number}. {treatment['name']}"),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self.set_font("helvetica", "", 10)
        self.set_x(MARGIN + 4)
        self.multi_cell(
            0, 5, _latin1(treatment["description"]),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self.ln(4)
        self.rule(GOLD, 0.2)
        self.ln(6)

    def contact_block(self) -> None:
        if self.will_page_break(40):
            self.add_page()
        self.rule(GREEN, 0.5)
        self.ln(8)
        self.heading("Contact Us", 14)
        self.set_font("helvetica", "", 10)
        self.set_text_color(*INK)
        for label, value in (
            ("Phone", self.resort.contact_phone),
            ("Email", self.resort.contact_email),
            ("Address", self.resort.address),
            ("Hours", self.resort.hours),
        ):
            self.multi_cell(
                0, 6, _latin1(f"{label}: {value}"),
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )


def build_brochure(
    treatments: Optional[Iterable[dict]] = None,
    resort: Optional[ResortConfig] = None,
    issued: Optional[date] = None,
    compress: bool = True,
) -> bytes:
    """
    Render the treatments brochure.

    Args:
        treatments: Dicts with ``name`` and ``description``. Defaults to
            the resort catalog.
        resort: Name and contact details. Defaults to configuration.
        issued: Date printed in the footer. Defaults to today.
        compress: Deflate page streams. Turn off to inspect the text.

    Returns:
        The PDF document as bytes.

    Raises:
        ValueError: If there are no treatments to list.
    """
    entries = list(treatments if treatments is not None else get_all_treatments())
    if not entries:
        raise ValueError("Brochure needs at least one treatment")

    pdf = TreatmentBrochure(resort or settings.resort, issued or date.today())
    pdf.set_compression(compress)
    pdf.add_page()
    pdf.title_band()
    pdf.intro()
    pdf.heading("Our Treatments & Packages", 16)
    for number, treatment in enumerate(entries, start=1):
        pdf.treatment_entry(number, treatment)
    pdf.contact_block()

    logger.info("Brochure rendered: %d treatments on %d pages", len(entries), pdf.page_no())
    return bytes(pdf.output())


def brochure_filename(issued: date) -> str:
    return f"{FILENAME_PREFIX}_{issued.isoformat()}.pdf"


def save_brochure(
    directory: Union[str, Path] = ".",
    issued: Optional[date] = None,
) -> Path:
    """Write the brochure into ``directory`` and return its path."""
    issued = issued or date.today()
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    path = target / brochure_filename(issued)
    path.write_bytes(build_brochure(issued=issued))
    logger.info("Brochure saved to %s", path)
    return path
