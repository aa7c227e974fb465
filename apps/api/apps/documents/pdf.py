"""
PDF rendering machinery shared by prescriptions and certificates.

Documents are described as an ordered list of sections. Each section is a
(condition, formatter) pair; the formatter turns the joined record into
layout blocks. Blocks are plain data so the content of a document can be
inspected without parsing PDF bytes. PdfFlowWriter then draws the blocks
top to bottom on a ReportLab canvas, breaking pages automatically.

Coordinates in blocks are measured from the top-left corner of the page;
the writer converts them to ReportLab's bottom-left origin.
"""
import time
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from django.conf import settings
from django.utils import timezone
from PIL import Image
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from apps.core.observability import metrics, get_sanitized_logger
from apps.core.observability.tracing import trace_span

logger = get_sanitized_logger(__name__)

PAGE_SIZE = LETTER
MARGIN = 50
FONT = 'Helvetica'
LINE_SPACING = 1.2
SIGNATURE_RULE = '________________________________'


class RenderError(Exception):
    """Raised when the PDF engine fails; no partial output is returned."""
    pass


# ============================================================================
# Layout blocks
# ============================================================================

@dataclass(frozen=True)
class Text:
    """A paragraph, wrapped to the content width."""
    text: str
    size: int = 10
    align: str = 'left'
    underline: bool = False


@dataclass(frozen=True)
class Spacer:
    """Vertical gap measured in lines of `size` points."""
    lines: float = 1.0
    size: int = 10


@dataclass(frozen=True)
class Picture:
    """
    An image `width` points wide, height from its aspect ratio.

    With `top` set, the image is placed at that distance from the top of
    the page and the cursor moves below it. Otherwise it is an overlay
    placed `offset` points below the cursor (negative means above), and
    the cursor does not move.
    """
    path: str
    x: float
    width: float
    top: Optional[float] = None
    offset: float = 0


Block = Union[Text, Spacer, Picture]
Section = Tuple[Callable[[Any], bool], Callable[[Any], List[Block]]]


def always(view) -> bool:
    return True


def build_blocks(view, sections: Iterable[Section]) -> List[Block]:
    """Run every section whose condition holds, in order."""
    blocks: List[Block] = []
    for condition, formatter in sections:
        if condition(view):
            blocks.extend(formatter(view))
    return blocks


def block_texts(blocks: Iterable[Block]) -> List[str]:
    """The text content of `blocks`, in drawing order."""
    return [block.text for block in blocks if isinstance(block, Text)]


# ============================================================================
# Formatting helpers
# ============================================================================

def format_date(value) -> str:
    """Render a date or datetime as DD/MM/YYYY; empty for None.

    Aware datetimes are shown in the local TIME_ZONE, the same calendar day
    timezone.localdate() gives for the visit.
    """
    if not value:
        return ''
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime('%d/%m/%Y')


def resolve_image(path: Optional[str]) -> Optional[str]:
    """
    Return an absolute path to a readable image, or None.

    Relative paths are resolved against MEDIA_ROOT. Missing files and
    files Pillow cannot identify are treated as absent.
    """
    if not path:
        return None

    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path(settings.MEDIA_ROOT) / candidate

    if not candidate.is_file():
        return None

    try:
        with Image.open(candidate) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError) as e:
        logger.warning(
            'Unreadable image ignored',
            extra={
                'event': 'pdf_image_unreadable',
                'error_type': e.__class__.__name__,
            }
        )
        return None

    return str(candidate)


def signature_blocks(name: str, qualification: Optional[str], registration_number: Optional[str],
                     signature_path: Optional[str] = None,
                     stamp_path: Optional[str] = None) -> List[Block]:
    """Signature rule, doctor lines, then signature and stamp overlays."""
    blocks: List[Block] = [
        Spacer(4),
        Text(SIGNATURE_RULE),
        Text(f"Dr. {name}"),
        Text(qualification or ''),
        Text(f"Reg. No: {registration_number or ''}"),
    ]

    signature = resolve_image(signature_path)
    if signature:
        blocks.append(Picture(signature, x=400, width=100, offset=-100))

    stamp = resolve_image(stamp_path)
    if stamp:
        blocks.append(Picture(stamp, x=400, width=80, offset=20))

    return blocks


# ============================================================================
# Writer
# ============================================================================

def _line_height(size: float) -> float:
    return size * LINE_SPACING


def _split_word(word: str, size: float, max_width: float) -> List[str]:
    """Break a word wider than max_width into pieces that fit."""
    pieces: List[str] = []
    current = ''
    for char in word:
        if current and pdfmetrics.stringWidth(current + char, FONT, size) > max_width:
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


def wrap_text(text: str, size: float, max_width: float) -> List[str]:
    """Greedy word wrap using the font's glyph metrics.

    Words that do not fit on a line by themselves are split by character.
    """
    lines: List[str] = []
    for paragraph in (text or '').split('\n'):
        words = [
            piece
            for word in paragraph.split(' ')
            for piece in _split_word(word, size, max_width)
        ]
        current = ''
        for word in words:
            candidate = f"{current} {word}" if current else word
            if current and pdfmetrics.stringWidth(candidate, FONT, size) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


class PdfFlowWriter:
    """Draws layout blocks on a canvas with a top-down cursor."""

    def __init__(self, title: str = ''):
        self.buffer = BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=PAGE_SIZE)
        if title:
            self.canvas.setTitle(title)
        self.page_width, self.page_height = PAGE_SIZE
        self.content_width = self.page_width - 2 * MARGIN
        self.cursor = MARGIN
        self.pages = 1

    def _ensure_room(self, height: float):
        if self.cursor + height > self.page_height - MARGIN:
            self.canvas.showPage()
            self.pages += 1
            self.cursor = MARGIN

    def _draw_line(self, line: str, block: Text):
        height = _line_height(block.size)
        self._ensure_room(height)
        self.canvas.setFont(FONT, block.size)
        baseline = self.page_height - self.cursor - block.size

        if block.align == 'center':
            x = self.page_width / 2
            self.canvas.drawCentredString(x, baseline, line)
            width = pdfmetrics.stringWidth(line, FONT, block.size)
            start = x - width / 2
        else:
            start = MARGIN
            self.canvas.drawString(start, baseline, line)
            width = pdfmetrics.stringWidth(line, FONT, block.size)

        if block.underline and line:
            self.canvas.setLineWidth(0.5)
            self.canvas.line(start, baseline - 2, start + width, baseline - 2)

        self.cursor += height

    def _draw_picture(self, block: Picture):
        reader = ImageReader(block.path)
        image_width, image_height = reader.getSize()
        height = block.width * image_height / image_width

        if block.top is not None:
            top = block.top
            self.cursor = max(self.cursor, top + height)
        else:
            # Overlays stay inside the bottom margin of the current page
            lowest = self.page_height - MARGIN - height
            top = min(max(self.cursor + block.offset, 0), max(lowest, 0))

        self.canvas.drawImage(
            reader,
            block.x,
            self.page_height - top - height,
            width=block.width,
            height=height,
            mask='auto'
        )

    def draw(self, blocks: Sequence[Block]):
        for block in blocks:
            if isinstance(block, Text):
                for line in wrap_text(block.text, block.size, self.content_width):
                    self._draw_line(line, block)
            elif isinstance(block, Spacer):
                self.cursor += _line_height(block.size) * block.lines
            elif isinstance(block, Picture):
                self._draw_picture(block)

    def finish(self) -> bytes:
        self.canvas.save()
        return self.buffer.getvalue()


def render_pdf(kind: str, blocks: Sequence[Block], title: str = '') -> bytes:
    """
    Draw `blocks` into a complete PDF document.

    Args:
        kind: document kind for metrics and logs ('prescription', 'certificate')
        blocks: layout blocks from build_blocks
        title: PDF metadata title

    Returns:
        The PDF bytes, only after the canvas has been saved

    Raises:
        RenderError: the engine failed; nothing is returned
    """
    start = time.time()
    with trace_span('documents.render_pdf', attributes={'document.kind': kind, 'blocks': len(blocks)}):
        try:
            writer = PdfFlowWriter(title=title)
            writer.draw(blocks)
            content = writer.finish()
        except Exception as e:
            metrics.documents_rendered_total.labels(kind=kind, result='failure').inc()
            logger.error(
                'PDF rendering failed',
                extra={
                    'event': 'document_render_failed',
                    'kind': kind,
                    'error_type': e.__class__.__name__,
                },
                exc_info=True
            )
            raise RenderError(f"Failed to render {kind} document") from e

    metrics.documents_rendered_total.labels(kind=kind, result='success').inc()
    metrics.document_render_duration_seconds.labels(kind=kind).observe(time.time() - start)
    logger.info(
        'PDF rendered',
        extra={
            'event': 'document_rendered',
            'kind': kind,
            'pages': writer.pages,
            'size_bytes': len(content),
        }
    )
    return content
