# /sahayak-backend/app/services/export_service.py

"""
Renders plain-text teaching content into downloadable files: a PDF through
reportlab's platypus layer, or a PNG drawn with Pillow.
"""

import io
import logging
import re
from typing import List, Optional
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from ..core import config

logger = logging.getLogger(__name__)

EXPORT_FONT_NAME = "SahayakExportFont"
_HEADING = re.compile(r"^\s*\*\*(.+?)\*\*\s*:?\s*$")
_INLINE_BOLD = re.compile(r"\*\*(.+?)\*\*")

IMAGE_WIDTH = 1240
IMAGE_MARGIN = 60
IMAGE_LINE_SPACING = 10
IMAGE_TITLE_SIZE = 40
IMAGE_BODY_SIZE = 24


def build_filename(kind: str, title: str, extension: str) -> str:
    """`worksheet`, `Water Cycle Basics`, `pdf` -> `worksheet_Water_Cycle_Basics.pdf`"""
    safe_title = re.sub(r"\s+", "_", (title or "document").strip())
    safe_title = re.sub(r'[\\/:*?"<>|]', "", safe_title) or "document"
    return f"{kind}_{safe_title}.{extension.lstrip('.')}"


def _register_font() -> Optional[str]:
    """Registers the configured TTF once; returns its name, or None to use Helvetica."""
    if not config.EXPORT_FONT_PATH:
        return None
    if EXPORT_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(EXPORT_FONT_NAME, config.EXPORT_FONT_PATH))
    return EXPORT_FONT_NAME


def render_pdf(content: str, title: str, language: str = "english") -> bytes:
    """
    Lays out `content` line by line. A line wrapped in `**...**` becomes a
    heading and inline `**bold**` is kept. All other text is XML-escaped
    before it reaches reportlab's paragraph markup.
    """
    font_name = _register_font()
    styles = getSampleStyleSheet()
    base_font = font_name or "Helvetica"
    bold_font = font_name or "Helvetica-Bold"

    title_style = ParagraphStyle("ExportTitle", parent=styles["Title"], fontName=bold_font)
    heading_style = ParagraphStyle("ExportHeading", parent=styles["Heading2"], fontName=bold_font, spaceBefore=8)
    body_style = ParagraphStyle("ExportBody", parent=styles["BodyText"], fontName=base_font, leading=15)
    meta_style = ParagraphStyle("ExportMeta", parent=styles["Italic"], fontName=base_font, fontSize=8)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4, title=title,
        leftMargin=0.75 * inch, rightMargin=0.75 * inch,
        topMargin=0.75 * inch, bottomMargin=0.75 * inch,
    )

    story = [Paragraph(escape(title), title_style), Paragraph(escape(f"Language: {language}"), meta_style), Spacer(1, 0.2 * inch)]
    for line in content.splitlines():
        if not line.strip():
            story.append(Spacer(1, 0.1 * inch))
            continue
        heading = _HEADING.match(line)
        if heading:
            story.append(Paragraph(escape(heading.group(1).strip()), heading_style))
            continue
        text = _INLINE_BOLD.sub(lambda m: f"<b>{m.group(1)}</b>", escape(line))
        story.append(Paragraph(text, body_style))

    doc.build(story)
    logger.info("Rendered PDF '%s' (%d lines).", title, len(content.splitlines()))
    return buffer.getvalue()


def _load_image_font(size: int):
    if config.EXPORT_FONT_PATH:
        return ImageFont.truetype(config.EXPORT_FONT_PATH, size)
    return ImageFont.load_default(size=size)


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    lines: List[str] = []
    for paragraph in text.splitlines() or [""]:
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if draw.textlength(candidate, font=font) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


def render_image(content: str, title: str) -> bytes:
    """Draws the title and wrapped content on a white canvas and returns PNG bytes."""
    title_font = _load_image_font(IMAGE_TITLE_SIZE)
    body_font = _load_image_font(IMAGE_BODY_SIZE)
    max_width = IMAGE_WIDTH - 2 * IMAGE_MARGIN

    measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    plain = _INLINE_BOLD.sub(lambda m: m.group(1), content)
    title_lines = _wrap(measure, title, title_font, max_width)
    body_lines = _wrap(measure, plain, body_font, max_width)

    title_height = IMAGE_TITLE_SIZE + IMAGE_LINE_SPACING
    body_height = IMAGE_BODY_SIZE + IMAGE_LINE_SPACING
    height = 2 * IMAGE_MARGIN + len(title_lines) * title_height + IMAGE_MARGIN // 2 + len(body_lines) * body_height

    canvas = Image.new("RGB", (IMAGE_WIDTH, height), "white")
    draw = ImageDraw.Draw(canvas)
    y = IMAGE_MARGIN
    for line in title_lines:
        draw.text((IMAGE_MARGIN, y), line, fill="black", font=title_font)
        y += title_height
    y += IMAGE_MARGIN // 2
    for line in body_lines:
        draw.text((IMAGE_MARGIN, y), line, fill=(40, 40, 40), font=body_font)
        y += body_height

    buffer = io.BytesIO()
    canvas.save(buffer, format="PNG")
    return buffer.getvalue()
