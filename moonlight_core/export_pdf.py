# moonlight_core/export_pdf.py
from __future__ import annotations
import io

import pandas as pd
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib import colors
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

def render_stats_pdf(title: str, stats_df: pd.DataFrame) -> bytes:
    buf = io.BytesIO()
    page_size = landscape(letter)
    c = canvas.Canvas(buf, pagesize=page_size)

    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, page_size[1] - 40, title)

    data = [list(stats_df.columns)]
    for _, row in stats_df.iterrows():
        data.append([str(v) for v in row.values])

    t = Table(data, repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.lightgrey),
        ("TEXTCOLOR", (0,0), (-1,0), colors.black),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
        ("ALIGN", (1,1), (-1,-1), "RIGHT"),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
    ]))

    table_w, table_h = t.wrapOn(c, page_size[0] - 80, page_size[1] - 100)
    t.drawOn(c, 40, page_size[1] - 80 - table_h)

    c.showPage()
    c.save()
    return buf.getvalue()
