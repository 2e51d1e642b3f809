import datetime
from pathlib import Path
from typing import Any, Sequence, Union

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4

import config
from services.file_manager import ensure_folder

TOP = 800
BOTTOM = 50
LINE = 16


def _column_offsets(headers: Sequence[str], width: float) -> list:
    step = (width - 100) / max(1, len(headers))
    return [50 + i * step for i in range(len(headers))]


def export_rows_pdf(
    save_path: Union[str, Path],
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
) -> Path:
    """
    Writes a simple tabular PDF (report results, payments table...).

    Args:
        save_path (Path): Destination file.
        title (str): Heading printed on the first page.
        headers (list): Column titles.
        rows (list): Cell values, converted with str().

    Returns:
        Path: The written file.
    """
    save_path = Path(save_path)
    ensure_folder(save_path.parent)

    c = canvas.Canvas(str(save_path), pagesize=A4)
    w, _ = A4
    xs = _column_offsets(headers, w)

    def draw_header(y: float) -> float:
        c.setFont("Helvetica-Bold", 10)
        for x, h in zip(xs, headers):
            c.drawString(x, y, str(h))
        c.setFont("Helvetica", 10)
        return y - LINE

    # --- TITLE ---
    y = TOP
    c.setFont("Helvetica-Bold", 16)
    c.setFillColorRGB(0.8, 0.0, 0.0)  # Dark Red
    c.drawString(50, y, f"{config.APP_NAME} - {title}")
    c.setFillColorRGB(0, 0, 0)
    y -= 18
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(50, y, f"Generated {datetime.datetime.now():%Y-%m-%d %H:%M}")
    y -= 24

    # --- TABLE ---
    y = draw_header(y)
    if not rows:
        c.drawString(50, y, "No results.")

    for row in rows:
        if y < BOTTOM:
            c.showPage()
            y = draw_header(TOP)
        for x, val in zip(xs, row):
            c.drawString(x, y, str(val if val is not None else "-")[:40])
        y -= LINE

    c.save()
    return save_path
