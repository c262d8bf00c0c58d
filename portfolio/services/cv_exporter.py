"""
CV (résumé) PDF export.

Layout runs first and produces a flat list of drawing operations in
millimetres, tracking a vertical cursor against a fixed left margin. The
operations are then painted onto A4 pages with PyMuPDF.
"""

import logging
from typing import List, Optional, Tuple, Union

import fitz  # PyMuPDF
from pydantic import BaseModel

from portfolio.constants import (
    A4_HEIGHT_MM,
    A4_WIDTH_MM,
    CV_BULLET,
    CV_BULLET_INDENT_MM,
    CV_EDUCATION_BREAK_MM,
    CV_FILENAME_SUFFIX,
    CV_LINE_HEIGHT_MM,
    CV_MARGIN_MM,
    CV_PROJECT_BREAK_MM,
    CV_SECTION_BREAK_MM,
    CV_SEPARATOR,
    CV_TOP_MM,
    PT_PER_MM,
)
from portfolio.models import PortfolioData, Profile, Project
from portfolio.utils import split_list

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]

BLACK: Color = (0, 0, 0)
GRAY: Color = (80 / 255, 80 / 255, 80 / 255)
MUTED: Color = (100 / 255, 100 / 255, 100 / 255)
ACCENT: Color = (0, 100 / 255, 200 / 255)
DIVIDER: Color = (200 / 255, 200 / 255, 200 / 255)

# Base-14 Helvetica faces as named by MuPDF
NORMAL = "helv"
BOLD = "hebo"
ITALIC = "heit"


class CVExportError(Exception):
    """Raised when a record cannot be laid out as a CV."""


class TextOp(BaseModel):
    page: int
    x: float
    y: float  # baseline
    text: str
    font: str = NORMAL
    size: float = 10
    color: Color = BLACK


class LineOp(BaseModel):
    page: int
    x0: float
    y0: float
    x1: float
    y1: float
    color: Color = DIVIDER


DrawOp = Union[TextOp, LineOp]


class CVLayoutConfig(BaseModel):
    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM
    margin: float = CV_MARGIN_MM
    top: float = CV_TOP_MM
    line_height: float = CV_LINE_HEIGHT_MM
    bullet_indent: float = CV_BULLET_INDENT_MM
    section_break: float = CV_SECTION_BREAK_MM
    project_break: float = CV_PROJECT_BREAK_MM
    education_break: float = CV_EDUCATION_BREAK_MM

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin * 2


class CVLayout(BaseModel):
    ops: List[DrawOp] = []
    page_count: int = 1

    def texts(self) -> List[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]

    def bullet_lines(self) -> List[str]:
        return [t for t in self.texts() if t.startswith(CV_BULLET + " ")]


class CVDocument(BaseModel):
    filename: str
    content: bytes
    page_count: int


def cv_filename(name: str) -> str:
    # Only the first space is replaced: "Ana Maria Lopez" -> "Ana_Maria Lopez_CV.pdf"
    return name.replace(" ", "_", 1) + CV_FILENAME_SUFFIX


_fonts = {}


def _font(name: str) -> fitz.Font:
    if name not in _fonts:
        _fonts[name] = fitz.Font(name)
    return _fonts[name]


def text_width(text: str, font: str, size: float) -> float:
    """Rendered width of ``text`` in millimetres."""
    return _font(font).text_length(text, fontsize=size) / PT_PER_MM


def _split_word(word: str, font: str, size: float, max_width: float) -> List[str]:
    """Break a word wider than ``max_width`` into character chunks that fit."""
    chunks: List[str] = []
    current = ""
    for char in word:
        if current and text_width(current + char, font, size) > max_width:
            chunks.append(current)
            current = char
        else:
            current += char
    chunks.append(current)
    return chunks


def wrap_text(text: str, font: str, size: float, max_width: float) -> List[str]:
    """Greedy word wrap to ``max_width`` millimetres. Overlong words are split by character."""
    lines: List[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if text_width(candidate, font, size) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            *full, current = _split_word(word, font, size, max_width)
            lines.extend(full)
        lines.append(current)
    return lines


class _Cursor:
    def __init__(self, config: CVLayoutConfig):
        self.config = config
        self.y = config.top
        self.page = 0
        self.ops: List[DrawOp] = []

    def break_if_past(self, threshold: float) -> None:
        if self.y > threshold:
            self.page += 1
            self.y = self.config.top

    def text(self, x: float, text: str, **style) -> None:
        self.ops.append(TextOp(page=self.page, x=x, y=self.y, text=text, **style))

    def lines(self, x: float, lines: List[str], **style) -> None:
        for i, line in enumerate(lines):
            self.ops.append(
                TextOp(
                    page=self.page,
                    x=x,
                    y=self.y + i * self.config.line_height,
                    text=line,
                    **style,
                )
            )
        self.y += len(lines) * self.config.line_height

    def rule(self) -> None:
        c = self.config
        self.ops.append(
            LineOp(
                page=self.page,
                x0=c.margin,
                y0=self.y,
                x1=c.page_width - c.margin,
                y1=self.y,
            )
        )


class CVExporter:
    def __init__(self, config: Optional[CVLayoutConfig] = None):
        self.config = config or CVLayoutConfig()

    # Layout

    def layout(self, data: PortfolioData) -> CVLayout:
        if data.profile is None:
            raise CVExportError("Cannot export a CV without a profile")

        cur = _Cursor(self.config)
        self._header(cur, data.profile)
        self._summary(cur, data.profile)
        if data.services:
            self._competencies(cur, [s.title for s in data.services])
        self._skills(cur, data)
        self._projects(cur, data.projects)
        self._education(cur, data.profile)
        return CVLayout(ops=cur.ops, page_count=cur.page + 1)

    def _heading(self, cur: _Cursor, title: str) -> None:
        cur.text(self.config.margin, title, font=BOLD, size=14, color=ACCENT)
        cur.y += 7

    def _header(self, cur: _Cursor, p: Profile) -> None:
        m = self.config.margin
        cur.text(m, p.name.upper(), font=BOLD, size=26)
        cur.y += 10
        if p.title:
            cur.text(m, p.title.upper(), size=14, color=GRAY)
            cur.y += 8
        contact = " | ".join(part for part in (p.location, p.email, p.phone) if part)
        cur.text(m, contact, size=10, color=GRAY)
        cur.y += 6
        cur.text(m, f"LinkedIn: {p.linkedin} | GitHub: {p.github}", size=10, color=GRAY)
        cur.y += 6
        cur.rule()
        cur.y += 10

    def _summary(self, cur: _Cursor, p: Profile) -> None:
        cur.break_if_past(self.config.section_break)
        self._heading(cur, "PROFESSIONAL SUMMARY")
        lines = wrap_text(p.summary, NORMAL, 10, self.config.content_width)
        cur.lines(self.config.margin, lines, size=10)
        cur.y += 5

    def _competencies(self, cur: _Cursor, titles: List[str]) -> None:
        cur.break_if_past(self.config.section_break)
        self._heading(cur, "CORE COMPETENCIES")
        lines = wrap_text(CV_SEPARATOR.join(titles), NORMAL, 10, self.config.content_width)
        cur.lines(self.config.margin, lines, size=10)
        cur.y += 5

    def _skills(self, cur: _Cursor, data: PortfolioData) -> None:
        m = self.config.margin
        cur.break_if_past(self.config.section_break)
        self._heading(cur, "TECHNICAL SKILLS")
        for cat in data.skills:
            label = f"{cat.category}:"
            cur.text(m, label, font=BOLD, size=10)
            offset = text_width(label + " ", BOLD, 10)
            listing = ", ".join(split_list(cat.skill_list))
            lines = wrap_text(listing, NORMAL, 10, self.config.content_width - offset)
            cur.lines(m + offset, lines, size=10)
            cur.y += 1
        cur.y += 5

    def _projects(self, cur: _Cursor, projects: List[Project]) -> None:
        m = self.config.margin
        cur.break_if_past(self.config.section_break)
        self._heading(cur, "PROJECTS")
        cur.y += 1
        for proj in projects:
            cur.break_if_past(self.config.project_break)
            cur.text(m, proj.title, font=BOLD, size=12)
            if proj.tech_stack:
                suffix = f" ({proj.tech_stack})"
                cur.text(
                    m + text_width(proj.title, BOLD, 12),
                    suffix,
                    font=ITALIC,
                    size=9,
                    color=MUTED,
                )
            cur.y += 6
            indent = m + self.config.bullet_indent
            width = self.config.content_width - self.config.bullet_indent
            for segment in split_list(proj.full_desc, "|"):
                lines = wrap_text(f"{CV_BULLET} {segment}", NORMAL, 10, width)
                cur.lines(indent, lines, size=10)
            cur.y += 4

    def _education(self, cur: _Cursor, p: Profile) -> None:
        m = self.config.margin
        cur.break_if_past(self.config.education_break)
        self._heading(cur, "EDUCATION")
        cur.text(m, p.education_degree, font=BOLD, size=12)
        cur.y += 6
        cur.text(m, f"{p.education_uni} | {p.education_year}", size=10)
        cur.y += 6

    # Rendering

    def render(self, layout: CVLayout) -> bytes:
        to_pt = PT_PER_MM
        doc = fitz.open()
        try:
            pages = [
                doc.new_page(
                    width=self.config.page_width * to_pt,
                    height=self.config.page_height * to_pt,
                )
                for _ in range(layout.page_count)
            ]
            for op in layout.ops:
                page = pages[op.page]
                if isinstance(op, LineOp):
                    page.draw_line(
                        fitz.Point(op.x0 * to_pt, op.y0 * to_pt),
                        fitz.Point(op.x1 * to_pt, op.y1 * to_pt),
                        color=op.color,
                        width=0.5,
                    )
                elif op.text:
                    writer = fitz.TextWriter(page.rect)
                    writer.append(
                        fitz.Point(op.x * to_pt, op.y * to_pt),
                        op.text,
                        font=_font(op.font),
                        fontsize=op.size,
                    )
                    writer.write_text(page, color=op.color)
            return doc.tobytes(garbage=3, deflate=True)
        finally:
            doc.close()

    def export(self, data: PortfolioData) -> CVDocument:
        layout = self.layout(data)
        content = self.render(layout)
        filename = cv_filename(data.profile.name)
        logger.info(f"Exported CV {filename} ({layout.page_count} page(s))")
        return CVDocument(filename=filename, content=content, page_count=layout.page_count)
