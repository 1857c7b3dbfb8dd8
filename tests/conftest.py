from __future__ import annotations

import json
from typing import Any, List, Optional

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; replays queued responses and records calls."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[dict] = []

    def _next(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"unexpected {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("POST", url, **kwargs)


@pytest.fixture
def dashboard_payload() -> dict:
    return {
        "title": "Painel remoto",
        "lastUpdated": "2024-05-02T13:45:00-03:00",
        "sectors": [
            {
                "id": "comercial",
                "name": "COMERCIAL",
                "indicators": [
                    {"id": "comercial_venda-tg", "name": "VENDA TG", "value": 12, "originalId": "venda-tg",
                     "sum7Days": 80, "sum30Days": 310, "average7Days": 11, "average30Days": 10},
                    {"id": "comercial_tg", "name": "%TG", "value": "56,40", "format": "percentage", "target": 40},
                    {"id": "comercial_venda-tg", "name": "VENDA TG (dup)", "value": 99},
                ],
            },
            {
                "id": "comercial",
                "name": "COMERCIAL (dup)",
                "indicators": [],
            },
            {
                "id": "financeiro",
                "name": "FINANCEIRO",
                "indicators": [
                    {"id": "financeiro_total", "name": "TOTAL DE VENDAS (R$)", "value": 1234.5,
                     "format": "currency", "unit": "BRL", "isMandatory": False},
                ],
            },
        ],
    }


@pytest.fixture
def transport_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
