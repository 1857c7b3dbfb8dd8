"""
Builds record entries from the data-entry form and sends them to the
Apps Script endpoint one at a time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import List, Mapping, Optional, Sequence

from indicator_dashboard.config import DEFAULT_PACING_SECONDS
from indicator_dashboard.data.client import RemoteDataClient
from indicator_dashboard.data.errors import FormValidationError, SubmissionError
from indicator_dashboard.data.models import FormDataEntry, Sector

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
STATUS_INFO = "info"

MSG_NO_ENDPOINT = "URL do Google Apps Script não configurada para envio."
MSG_EMPTY_BATCH = "Nenhum dado de indicador foi preenchido para enviar."
MSG_FAILED = "Falha ao enviar {failed} de {total} registro(s). {first_error}"
MSG_CANCELLED = "Envio cancelado: {cancelled} de {total} registro(s) não foram enviados."
MSG_SUCCESS = "{succeeded} registro(s) do setor foram salvos com sucesso!"


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def build_form_entries(
    sector: Sector,
    values: Mapping[str, Optional[str]],
    record_date: date,
    observations: Optional[Mapping[str, Optional[str]]] = None,
    files_links: Optional[Mapping[str, Optional[str]]] = None,
    sector_observation: Optional[str] = None,
    sector_files_link: Optional[str] = None,
) -> List[FormDataEntry]:
    """
    Turn the raw form inputs of one sector into entries, keyed by indicator id.

    Blank inputs are skipped. A blank input for a mandatory indicator fails the
    whole sector with ``FormValidationError`` so nothing partial is sent.
    """
    observations = observations or {}
    files_links = files_links or {}
    missing = [
        indicator.name
        for indicator in sector.indicators
        if indicator.is_mandatory and _clean(values.get(indicator.id)) is None
    ]
    if missing:
        raise FormValidationError(missing)

    entries: List[FormDataEntry] = []
    for indicator in sector.indicators:
        value = _clean(values.get(indicator.id))
        if value is None:
            continue
        entries.append(
            FormDataEntry(
                sector_id=sector.id,
                sector_name=sector.name,
                indicator_id=indicator.id,
                indicator_name=indicator.name,
                value=value,
                date=record_date.isoformat(),
                observation=_clean(observations.get(indicator.id)),
                files_link=_clean(files_links.get(indicator.id)),
                sector_observation=_clean(sector_observation),
                sector_files_link=_clean(sector_files_link),
            )
        )
    return entries


@dataclass
class ItemOutcome:
    entry: FormDataEntry
    ok: bool
    error: Optional[SubmissionError] = None


@dataclass
class SubmissionReport:
    total: int
    outcomes: List[ItemOutcome] = field(default_factory=list)
    cancelled: int = 0
    status_override: Optional[str] = None
    message_override: Optional[str] = None

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.ok)

    @property
    def first_error(self) -> Optional[str]:
        for outcome in self.outcomes:
            if outcome.error is not None:
                return outcome.error.display_message
        return None

    @property
    def status(self) -> str:
        if self.status_override:
            return self.status_override
        if self.failed or self.cancelled:
            return STATUS_ERROR
        return STATUS_SUCCESS

    @property
    def message(self) -> str:
        if self.message_override:
            return self.message_override
        if self.failed:
            return MSG_FAILED.format(
                failed=self.failed,
                total=self.total,
                first_error=self.first_error or "",
            ).strip()
        if self.cancelled:
            return MSG_CANCELLED.format(cancelled=self.cancelled, total=self.total)
        return MSG_SUCCESS.format(succeeded=self.succeeded)


def submit_batch(
    client: RemoteDataClient,
    url: Optional[str],
    entries: Sequence[FormDataEntry],
    pacing_seconds: float = DEFAULT_PACING_SECONDS,
    cancel_event: Optional[threading.Event] = None,
) -> SubmissionReport:
    """
    Send entries sequentially, waiting ``pacing_seconds`` before each one.

    A failing entry is recorded and the loop moves on. Setting ``cancel_event``
    stops the loop before the next entry; the rest are counted as cancelled.
    """
    if not url or not url.strip():
        return SubmissionReport(
            total=len(entries),
            status_override=STATUS_ERROR,
            message_override=MSG_NO_ENDPOINT,
        )
    if not entries:
        return SubmissionReport(total=0, status_override=STATUS_INFO, message_override=MSG_EMPTY_BATCH)

    cancel_event = cancel_event or threading.Event()
    report = SubmissionReport(total=len(entries))
    for index, entry in enumerate(entries):
        # Event.wait doubles as the pacing sleep and returns early on cancel
        if cancel_event.wait(pacing_seconds):
            report.cancelled = len(entries) - index
            logger.warning("Submission cancelled with %d entries pending", report.cancelled)
            break
        try:
            client.submit_record(url, entry)
        except SubmissionError as exc:
            logger.error("Submission failed for %s: %s", entry.indicator_id, exc)
            report.outcomes.append(ItemOutcome(entry=entry, ok=False, error=exc))
            continue
        report.outcomes.append(ItemOutcome(entry=entry, ok=True))

    logger.info(
        "Submitted batch: %d ok, %d failed, %d cancelled",
        report.succeeded,
        report.failed,
        report.cancelled,
    )
    return report
