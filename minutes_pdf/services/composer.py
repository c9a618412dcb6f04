"""
Builds the Minutes of Meeting PDF for one meeting.

Section order is fixed: identity band, title band, details grid, Participants,
Action Items, Meeting Summary, raw notes (when present), Decisions and the
Document Details band. Private or sensitive reports carry a watermark on
every page, including pages PageFlow adds mid-table.
"""
from __future__ import annotations
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, NamedTuple, Optional

from ..core.config import settings
from ..core.exceptions import AppError, Forbidden, NotGenerated, RenderFailed
from ..core.logger import get_logger
from ..obs.events import record_event
from ..utils.pdf import ReportLabSurface, Surface
from .action_items import CanonicalActionItem, normalize_action_items
from .cell_layout import Cell
from .page_flow import PageFlow
from .participants import (
    ParticipantReconciler,
    ParticipantRow,
    normalize_name_key,
    reconcile_participants,
)
from .records import MeetingRecord, MinutesRecord
from .sections import Column, SectionRenderer

log = get_logger("composer")

FILENAME_PART_MAX = 60
LABEL_WIDTH = 95
SECTION_GAP = 16

LABEL_FILL = "#f8fafc"
GRID_STROKE = "#cbd5e1"
FRAME_STROKE = "#94a3b8"

_UNSAFE_RE = re.compile(r"[^a-z0-9]+")


# ---------- filenames ----------
class FilenameTokens(NamedTuple):
    org: str
    title: str
    date: str
    stamp: str


def sanitize_part(value: str, max_len: int = FILENAME_PART_MAX) -> str:
    text = _UNSAFE_RE.sub("_", (value or "").lower()).strip("_")
    return text[:max_len].strip("_") or "na"


def format_date_only(value: datetime) -> str:
    return value.strftime("%b %d, %Y")


def format_time_only(value: datetime) -> str:
    return value.strftime("%I:%M %p")


def filename_tokens(meeting: MeetingRecord, now: datetime) -> FilenameTokens:
    return FilenameTokens(
        org=sanitize_part(meeting.organization.name or "org"),
        title=sanitize_part(meeting.title or "meeting"),
        date=sanitize_part(meeting.date_time.strftime("%b %d %Y")),
        stamp=now.strftime("%Y%m%d_%H%M%S"),
    )


def build_filename(meeting: MeetingRecord, now: datetime) -> str:
    t = filename_tokens(meeting, now)
    return f"mom_{t.org}_{t.title}_{t.date}_{t.stamp}.pdf"


def document_id(meeting: MeetingRecord, minutes: MinutesRecord) -> str:
    return f"MOM-{meeting.id[:8]}-{minutes.id[:8]}"


# ---------- authorization ----------
@dataclass
class Requester:
    user_id: str
    role: str = ""
    name: Optional[str] = None


def authorize_download(meeting: MeetingRecord, requester: Requester) -> None:
    """Raise Forbidden when `requester` may not see a private meeting's report."""
    if not meeting.is_private:
        return
    if requester.role.upper() in settings.parsed_admin_roles():
        return
    if requester.user_id and requester.user_id == meeting.creator_id:
        return
    if any(p.user_id == requester.user_id for p in meeting.participants):
        return
    if requester.name:
        # the notes-derived rows of the rendered roster
        reconciler = ParticipantReconciler(meeting)
        reconciler.reconcile()
        key = normalize_name_key(requester.name)
        if key and key in {normalize_name_key(r.name) for r in reconciler.notes_rows()}:
            return
    raise Forbidden(f"User {requester.user_id} may not view meeting {meeting.id}")


# ---------- composition ----------
@dataclass
class ComposedReport:
    filename: str
    content: bytes
    page_count: int
    document_id: str
    watermarked: bool
    participants: List[ParticipantRow] = field(default_factory=list)
    action_items: List[CanonicalActionItem] = field(default_factory=list)
    truncated_sections: List[str] = field(default_factory=list)


class DocumentComposer:
    def __init__(
        self,
        meeting: MeetingRecord,
        minutes: Optional[MinutesRecord],
        surface: Optional[Surface] = None,
        now: Optional[datetime] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if minutes is None:
            raise NotGenerated(f"Minutes not generated for meeting {meeting.id}")
        self.meeting = meeting
        self.minutes = minutes
        self.now = now or datetime.now()
        self.surface = surface or ReportLabSurface(
            settings.page_dimensions(), title=f"Minutes of Meeting - {meeting.title}"
        )
        margin = settings.page_margin
        self.flow = PageFlow(self.surface, top_margin=margin, bottom_margin=margin, cancel_event=cancel_event)
        self.sections = SectionRenderer(self.surface, self.flow, margin)
        self.watermarked = meeting.is_private or minutes.is_sensitive

    @property
    def total_width(self) -> float:
        return self.sections.total_width

    def _watermark(self, _page_number: int) -> None:
        self.surface.watermark(settings.watermark_text, opacity=settings.watermark_opacity)

    def _pair_row(self, label_a: str, value_a: str, label_b: str, value_b: str) -> None:
        half = self.total_width // 2
        self.sections.cell_row([
            Cell(label_a, LABEL_WIDTH, bold=True, fill=LABEL_FILL, stroke=GRID_STROKE),
            Cell(value_a, half - LABEL_WIDTH, stroke=GRID_STROKE),
            Cell(label_b, LABEL_WIDTH, bold=True, fill=LABEL_FILL, stroke=GRID_STROKE),
            Cell(value_b, self.total_width - half - LABEL_WIDTH, stroke=GRID_STROKE),
        ])

    def _wide_row(self, label: str, value: str, min_height: float) -> None:
        self.sections.cell_row([
            Cell(label, LABEL_WIDTH, bold=True, fill=LABEL_FILL, stroke=GRID_STROKE, min_height=min_height),
            Cell(value, self.total_width - LABEL_WIDTH, stroke=GRID_STROKE, min_height=min_height),
        ])

    def _identity(self) -> None:
        org_name = self.meeting.organization.name or "Organization"
        w = self.total_width
        self.sections.cell_row([
            Cell(settings.org_mark, 70, bold=True, align="center", fill="#f1f5f9", stroke=FRAME_STROKE,
                 min_height=28, font_size=14, text_color="#0f8fb2"),
            Cell(org_name, w - 70 - 95, bold=True, align="center", stroke=FRAME_STROKE, min_height=28, font_size=10),
            Cell("MOM", 95, bold=True, align="center", stroke=FRAME_STROKE, min_height=28, font_size=10),
        ])
        self.sections.cell_row([
            Cell(f"Minutes of Meeting - {self.meeting.title}", w, bold=True, align="center", fill="#9ca3af",
                 stroke=FRAME_STROKE, min_height=28, font_size=11, text_color="#ffffff"),
        ])

    def _details(self) -> None:
        m, mins = self.meeting, self.minutes
        self._pair_row("Organization", m.organization.name or "-", "Department", m.organization.category or "-")
        self._pair_row("Meeting Title", m.title or "-", "Visibility", m.visibility.value.replace("_", " "))
        self._pair_row("Date", format_date_only(m.date_time), "Time", format_time_only(m.date_time))
        self._pair_row("Organizer", (m.creator.name if m.creator else None) or "-", "Recorder", settings.recorder_label)
        self._pair_row(
            "Generated On", mins.updated_at.strftime("%Y-%m-%d %H:%M"),
            "Sensitive", "Yes" if mins.is_sensitive else "No",
        )
        if m.description:
            self._wide_row("Agenda / Purpose", m.description, min_height=30)

    def _participants(self, rows: List[ParticipantRow]) -> None:
        w = self.total_width
        cols = [Column("No.", 36), Column("Name", 150), Column("Email", 150), Column("Role", 80),
                Column("Remarks", w - 36 - 150 - 150 - 80)]
        self.sections.table(
            "Participants",
            cols,
            [[str(i + 1), p.name, p.email, p.role, p.remarks] for i, p in enumerate(rows)],
            empty_row=[("-", 36), ("No participants found.", w - 36)],
        )

    def _action_items(self, items: List[CanonicalActionItem]) -> None:
        w = self.total_width
        task_w, owner_w = int(w * 0.46), int(w * 0.24)
        cols = [Column("Task", task_w), Column("Owner", owner_w), Column("Due Date", w - task_w - owner_w)]
        self.sections.table(
            "Action Items",
            cols,
            [[a.task, a.owner, a.due] for a in items],
            empty_row=[("No action items captured.", cols[0].width), ("-", cols[1].width), ("-", cols[2].width)],
        )

    def _decisions(self) -> None:
        w = self.total_width
        cols = [Column("#", 44), Column("Decision", w - 44)]
        self.sections.table(
            "Decisions",
            cols,
            [[str(i + 1), d] for i, d in enumerate(self.minutes.decisions)],
            empty_row=[("-", 44), ("No decisions captured.", w - 44)],
        )

    def _document_details(self, doc_id: str) -> None:
        mins = self.minutes
        self.sections.band("Document Details", allowance=3 * 28)
        self._pair_row("Document No", doc_id, "Issue Date", format_date_only(self.now))
        self._pair_row("Revision", settings.document_revision, "Tags", ", ".join(str(t) for t in mins.tags) or "-")
        self._wide_row("Sensitivity Reason", mins.sensitivity_reason or "None", min_height=28)

    def _draw(self, participants: List[ParticipantRow], actions: List[CanonicalActionItem], doc_id: str) -> None:
        if self.watermarked:
            self._watermark(self.flow.cursor.page_number)
            self.flow.on_new_page(self._watermark)

        self._identity()
        self._details()

        self.flow.advance(SECTION_GAP)
        self._participants(participants)

        self.flow.advance(SECTION_GAP + 2)
        self._action_items(actions)

        self.flow.advance(SECTION_GAP)
        self.sections.paragraph("Meeting Summary", self.minutes.mom or "No summary available.")

        if self.meeting.notes:
            self.flow.advance(14)
            self.sections.paragraph("Meeting Notes (Raw Input)", self.meeting.notes)

        self.flow.advance(SECTION_GAP)
        self._decisions()

        self.flow.advance(SECTION_GAP + 2)
        self._document_details(doc_id)

    def compose(self) -> ComposedReport:
        try:
            participants = reconcile_participants(self.meeting)
            actions = normalize_action_items(self.minutes.action_items)
            doc_id = document_id(self.meeting, self.minutes)
            filename = build_filename(self.meeting, self.now)
            self._draw(participants, actions, doc_id)
            content = self.surface.finish()
        except AppError:
            self.surface.abort()
            raise
        except Exception as e:
            log.exception("Render failed for meeting %s", self.meeting.id)
            self.surface.abort()
            record_event("error", {"meeting_id": self.meeting.id, "error": str(e)})
            raise RenderFailed(f"PDF generation failed: {e}") from e

        pages = self.flow.cursor.page_number
        log.info("Rendered %s (%d pages)", filename, pages)
        record_event("pdf_render", {
            "meeting_id": self.meeting.id,
            "filename": filename,
            "pages": pages,
            "watermarked": self.watermarked,
        })
        return ComposedReport(
            filename=filename,
            content=content,
            page_count=pages,
            document_id=doc_id,
            watermarked=self.watermarked,
            participants=participants,
            action_items=actions,
            truncated_sections=list(self.sections.truncated),
        )


def compose_report(
    meeting: MeetingRecord,
    minutes: Optional[MinutesRecord],
    surface: Optional[Surface] = None,
    now: Optional[datetime] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ComposedReport:
    return DocumentComposer(meeting, minutes, surface=surface, now=now, cancel_event=cancel_event).compose()


def build_minutes_report(
    meeting: MeetingRecord,
    minutes: Optional[MinutesRecord],
    requester: Requester,
    **kwargs,
) -> ComposedReport:
    """Authorization first, so a refused request never reaches the surface."""
    if minutes is None:
        raise NotGenerated(f"Minutes not generated for meeting {meeting.id}")
    authorize_download(meeting, requester)
    return compose_report(meeting, minutes, **kwargs)
