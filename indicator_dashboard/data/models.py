"""
Typed records for the dashboard payload served by the Apps Script endpoint.

The endpoint speaks camelCase JSON; these dataclasses use snake_case and
convert in both directions through ``from_dict`` / ``as_dict``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

IndicatorValue = Union[int, float, str]

FORMAT_CURRENCY = "currency"
FORMAT_PERCENTAGE = "percentage"
FORMAT_NUMBER = "number"
INDICATOR_FORMATS = (FORMAT_CURRENCY, FORMAT_PERCENTAGE, FORMAT_NUMBER)


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"

    @classmethod
    def parse(cls, raw: Any) -> Optional["Trend"]:
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


def normalize_format(raw: Any) -> str:
    if isinstance(raw, str) and raw.strip().lower() in INDICATOR_FORMATS:
        return raw.strip().lower()
    return FORMAT_NUMBER


def _optional_str(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _optional_value(raw: Any) -> Optional[IndicatorValue]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, str)):
        return raw
    return str(raw)


def normalize_numeric_text(text: str) -> str:
    # "1.234,5" -> "1234.5"; a "." only counts as a thousands separator next to a ","
    text = text.strip()
    if "," in text:
        if "." in text:
            text = text.replace(".", "")
        text = text.replace(",", ".")
    return text


def parse_localized_number(value: Any) -> Optional[float]:
    """Return the numeric value of ``value`` or None when it is not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    try:
        numeric = float(normalize_numeric_text(value))
    except ValueError:
        return None
    return numeric if math.isfinite(numeric) else None


def _optional_number(raw: Any) -> Optional[float]:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool) and math.isfinite(raw):
        return raw
    return parse_localized_number(raw)


@dataclass(frozen=True)
class HistoricalPoint:
    date: str
    value: Optional[IndicatorValue]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "HistoricalPoint":
        return cls(date=str(payload.get("date", "")), value=_optional_value(payload.get("value")))

    def as_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "value": self.value}


@dataclass(frozen=True)
class Indicator:
    """
    A single tracked metric inside a sector.

    ``value`` and the aggregates keep the raw type sent by the spreadsheet:
    a number, a numeric string with a comma decimal separator, or one of the
    sentinel strings ("N/A", "N/D", "-", "#NUM!").
    """

    id: str
    name: str
    value: IndicatorValue
    unit: Optional[str] = None
    format: str = FORMAT_NUMBER
    target: Optional[float] = None
    average_7_days: Optional[IndicatorValue] = None
    average_30_days: Optional[IndicatorValue] = None
    sum_7_days: Optional[IndicatorValue] = None
    sum_30_days: Optional[IndicatorValue] = None
    trend: Optional[Trend] = None
    description: Optional[str] = None
    last_record_observation: Optional[str] = None
    last_record_files_link: Optional[str] = None
    original_id: Optional[str] = None
    is_mandatory: bool = True
    historical_data: Tuple[HistoricalPoint, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Indicator":
        value = _optional_value(payload.get("value"))
        is_mandatory = payload.get("isMandatory")
        history = payload.get("historicalData") or ()
        return cls(
            id=str(payload.get("id") or ""),
            name=str(payload.get("name") or ""),
            value="N/A" if value is None else value,
            unit=_optional_str(payload.get("unit")),
            format=normalize_format(payload.get("format")),
            target=_optional_number(payload.get("target")),
            average_7_days=_optional_value(payload.get("average7Days")),
            average_30_days=_optional_value(payload.get("average30Days")),
            sum_7_days=_optional_value(payload.get("sum7Days")),
            sum_30_days=_optional_value(payload.get("sum30Days")),
            trend=Trend.parse(payload.get("trend")),
            description=_optional_str(payload.get("description")),
            last_record_observation=_optional_str(payload.get("lastRecordObservation")),
            last_record_files_link=_optional_str(payload.get("lastRecordFilesLink")),
            original_id=_optional_str(payload.get("originalId")),
            is_mandatory=True if is_mandatory is None else bool(is_mandatory),
            historical_data=tuple(
                HistoricalPoint.from_dict(point) for point in history if isinstance(point, Mapping)
            ),
        )

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "unit": self.unit,
            "format": self.format,
            "target": self.target,
            "average7Days": self.average_7_days,
            "average30Days": self.average_30_days,
            "sum7Days": self.sum_7_days,
            "sum30Days": self.sum_30_days,
            "trend": self.trend.value if self.trend else None,
            "description": self.description,
            "lastRecordObservation": self.last_record_observation,
            "lastRecordFilesLink": self.last_record_files_link,
            "originalId": self.original_id,
            "isMandatory": self.is_mandatory,
        }
        if self.historical_data:
            payload["historicalData"] = [point.as_dict() for point in self.historical_data]
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class Sector:
    id: str
    name: str
    indicators: Tuple[Indicator, ...] = ()
    description: Optional[str] = None
    sector_observation: Optional[str] = None
    sector_files_link: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Sector":
        indicators = payload.get("indicators") or ()
        return cls(
            id=str(payload.get("id") or ""),
            name=str(payload.get("name") or ""),
            indicators=tuple(Indicator.from_dict(item) for item in indicators if isinstance(item, Mapping)),
            description=_optional_str(payload.get("description")),
            sector_observation=_optional_str(payload.get("sectorObservation")),
            sector_files_link=_optional_str(payload.get("sectorFilesLink")),
        )

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "indicators": [indicator.as_dict() for indicator in self.indicators],
            "sectorObservation": self.sector_observation,
            "sectorFilesLink": self.sector_files_link,
        }
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class DashboardData:
    title: str
    sectors: Tuple[Sector, ...]
    last_updated: datetime

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], last_updated: Optional[datetime] = None) -> "DashboardData":
        sectors = payload.get("sectors") or ()
        return cls(
            title=str(payload.get("title") or ""),
            sectors=tuple(Sector.from_dict(item) for item in sectors if isinstance(item, Mapping)),
            last_updated=last_updated or datetime.now(timezone.utc),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "lastUpdated": self.last_updated.isoformat(),
            "sectors": [sector.as_dict() for sector in self.sectors],
        }

    def with_title(self, title: str) -> "DashboardData":
        return replace(self, title=title)

    def indicator_count(self) -> int:
        return sum(len(sector.indicators) for sector in self.sectors)


@dataclass(frozen=True)
class FormDataEntry:
    """
    One user-submitted record for one indicator.

    Created by the data-entry form and sent to the endpoint as-is; nothing
    is persisted locally.
    """

    sector_id: str
    sector_name: str
    indicator_id: str
    indicator_name: str
    value: IndicatorValue
    date: str
    observation: Optional[str] = None
    files_link: Optional[str] = None
    sector_observation: Optional[str] = None
    sector_files_link: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "sectorId": self.sector_id,
            "sectorName": self.sector_name,
            "indicatorId": self.indicator_id,
            "indicatorName": self.indicator_name,
            "value": self.value,
            "date": self.date,
            "observation": self.observation,
            "filesLink": self.files_link,
            "sectorObservation": self.sector_observation,
            "sectorFilesLink": self.sector_files_link,
        }
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class SubmissionResult:
    status: str
    message: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


def indicators_of(sectors: Iterable[Sector]) -> List[Indicator]:
    return [indicator for sector in sectors for indicator in sector.indicators]
