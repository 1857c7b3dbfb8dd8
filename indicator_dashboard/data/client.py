"""
HTTP client for the Google Apps Script web app that fronts the spreadsheet.

The script is trusted to have already picked the most recent record for each
indicator; this client only validates and normalises the payload.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

import pandas as pd
import requests

from indicator_dashboard.config import DEFAULT_TIMEOUT_SECONDS
from indicator_dashboard.data.errors import (
    RemoteFormatError,
    RemoteServiceError,
    SubmissionDuplicateError,
    SubmissionError,
    is_duplicate_message,
)
from indicator_dashboard.data.models import DashboardData, FormDataEntry, SubmissionResult

logger = logging.getLogger(__name__)

CACHE_BUST_PARAM = "_cacheBust"
REQUIRED_FIELDS = ("sectors", "lastUpdated", "title")
# Apps Script cannot read JSON bodies sent with a JSON content type from the browser
SUBMIT_HEADERS = {"Content-Type": "text/plain;charset=utf-8"}


def _is_ok(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _json_or_none(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def normalize_timestamp(raw: Any) -> pd.Timestamp:
    # Lists would come back as a DatetimeIndex
    if not isinstance(raw, str):
        raise RemoteFormatError(f"Campo lastUpdated inválido: {raw!r}")
    parsed = pd.to_datetime(raw, errors="coerce", utc=True)
    if not isinstance(parsed, pd.Timestamp) or pd.isna(parsed):
        raise RemoteFormatError(f"Campo lastUpdated inválido: {raw!r}")
    return parsed


class RemoteDataClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_dashboard(self, url: str) -> DashboardData:
        if not url or not url.strip():
            raise RemoteServiceError("URL do Google Apps Script não fornecida.")

        params = {CACHE_BUST_PARAM: str(int(time.time() * 1000))}
        logger.info("Fetching dashboard data from %s", url)
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Cache-Control": "no-store"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Transport failure fetching dashboard: %s", exc)
            raise RemoteServiceError(f"Erro ao carregar dados do Google Apps Script: {exc}") from exc

        if not _is_ok(response):
            body = _json_or_none(response)
            if isinstance(body, dict) and body.get("error"):
                raise RemoteServiceError(
                    f"Erro do Google Apps Script: {body['error']} (Status: {response.status_code})",
                    status_code=response.status_code,
                )
            raise RemoteServiceError(
                f"Erro ao buscar dados do Google Apps Script: {response.status_code} {response.reason or ''}".strip(),
                status_code=response.status_code,
            )

        data = _json_or_none(response)
        if not isinstance(data, dict):
            raise RemoteFormatError("Resposta do Google Apps Script não é um objeto JSON válido.")

        if data.get("error"):
            raise RemoteServiceError(
                f"Erro retornado pelo Google Apps Script: {data['error']}",
                status_code=response.status_code,
            )

        missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
        if missing:
            logger.warning("Payload missing required fields %s", missing)
            raise RemoteFormatError(
                "Formato de dados inválido recebido do Google Apps Script. "
                f"Campos ausentes: {', '.join(missing)}."
            )
        if not isinstance(data["sectors"], list):
            raise RemoteFormatError(
                "Formato de dados inválido recebido do Google Apps Script. "
                f"Campo sectors deve ser uma lista, recebido {type(data['sectors']).__name__}."
            )

        last_updated = normalize_timestamp(data["lastUpdated"])
        dashboard = DashboardData.from_dict(data, last_updated=last_updated.to_pydatetime())
        logger.info(
            "Loaded %d sectors / %d indicators from Apps Script",
            len(dashboard.sectors),
            dashboard.indicator_count(),
        )
        return dashboard

    def submit_record(self, url: str, entry: FormDataEntry) -> SubmissionResult:
        if not url or not url.strip():
            raise SubmissionError("URL do Google Apps Script não fornecida para submissão.")

        body = json.dumps(entry.as_dict(), ensure_ascii=False)
        logger.info("Submitting record for indicator %s", entry.indicator_id)
        try:
            response = self.session.post(
                url,
                data=body.encode("utf-8"),
                headers=SUBMIT_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Transport failure submitting %s: %s", entry.indicator_id, exc)
            raise SubmissionError(f"Erro ao enviar dados: {exc}") from exc

        logger.debug("Raw submission response: %s", response.text)
        try:
            payload = json.loads(response.text)
        except ValueError as exc:
            raise SubmissionError(
                f"Resposta inválida do Google Apps Script ({response.status_code}).",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            payload = {"data": payload}

        if not _is_ok(response) or payload.get("status") == "error":
            message = str(
                payload.get("message")
                or f"Erro ao enviar dados: {response.status_code} {response.reason or ''}".strip()
            )
            error_cls = SubmissionDuplicateError if is_duplicate_message(message) else SubmissionError
            raise error_cls(message, status_code=response.status_code)

        return SubmissionResult(
            status=str(payload.get("status") or "success"),
            message=payload.get("message"),
            payload=payload,
        )


def build_payload_summary(data: DashboardData) -> Dict[str, int]:
    return {
        "sectors": len(data.sectors),
        "indicators": data.indicator_count(),
    }
