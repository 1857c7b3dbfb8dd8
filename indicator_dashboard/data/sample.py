"""
Built-in sample dataset used when the Apps Script endpoint is not configured
or cannot be reached. It also provides the sector/indicator layout for the
data-entry form.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from indicator_dashboard.config import DEFAULT_TITLE
from indicator_dashboard.data.models import (
    FORMAT_CURRENCY,
    FORMAT_NUMBER,
    FORMAT_PERCENTAGE,
    DashboardData,
    Indicator,
    IndicatorValue,
    Sector,
    Trend,
    normalize_format,
)


def slugify(text: Optional[str]) -> str:
    # ASCII-only word characters, so accented letters are dropped rather than
    # transliterated; the spreadsheet ids (e.g. "nmero-de-vendas-totais") rely on it
    if not text:
        return ""
    slug = str(text).lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]+", "", slug, flags=re.ASCII)
    return re.sub(r"--+", "-", slug)


def _default_unit(fmt: str) -> Optional[str]:
    if fmt == FORMAT_PERCENTAGE:
        return "%"
    if fmt == FORMAT_CURRENCY:
        return "BRL"
    return None


def _derived(value: IndicatorValue, factor: float) -> IndicatorValue:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return round(value * factor)
    return "N/D"


def build_indicator(sector_id: str, name: str, value: IndicatorValue, **opts: Any) -> Indicator:
    slug = slugify(name)
    fmt = normalize_format(opts.get("format"))
    target = opts.get("target")
    if target is None and isinstance(value, (int, float)):
        target = round(value * 1.1)
    return Indicator(
        id=f"{sector_id}_{slug}",
        name=name,
        value=value,
        unit=opts.get("unit") or _default_unit(fmt),
        format=fmt,
        target=target,
        average_7_days=opts.get("average_7_days", _derived(value, 0.95)),
        average_30_days=opts.get("average_30_days", _derived(value, 0.9)),
        sum_7_days=opts.get("sum_7_days", _derived(value, 7)),
        sum_30_days=opts.get("sum_30_days", _derived(value, 30)),
        trend=opts.get("trend") or Trend.STABLE,
        description=opts.get("description") or f"Descrição para {name}",
        last_record_observation=opts.get("observation"),
        last_record_files_link=opts.get("files_link"),
        original_id=opts.get("original_id", slug),
        is_mandatory=opts.get("is_mandatory", True),
    )


SAMPLE_SECTORS: List[Dict[str, Any]] = [
    {
        "name": "MARKETING",
        "description": "Indicadores relacionados às estratégias e resultados de Marketing.",
        "sector_observation": "Campanha de Páscoa impulsionou as vendas. O bot esteve em manutenção, impactando sua conversão.",
        "sector_files_link": "https://example.com/marketing_reports_folder",
        "indicators": [
            {
                "name": "NÚMERO DE VENDAS TOTAIS",
                "value": 155,
                "format": FORMAT_NUMBER,
                "target": 7,
                "observation": "Aumento devido à campanha de Páscoa. Ver anexo para detalhes sobre a performance e ROI.",
                "files_link": "https://example.com/pascoa_report.pdf",
            },
        ],
    },
    {
        "name": "PRÉ-VENDAS CONVERSÃO",
        "description": "Indicadores de conversão da equipe de pré-vendas.",
        "sector_observation": "Fila de prospects alta pós-feriado. Equipe focada na redução. Número de indevidos ainda é um ponto de atenção.",
        "indicators": [
            {"name": "NÚMERO FILA PROSPECT (INÍCIO DE DIA)", "value": 150, "trend": Trend.DOWN, "target": 10,
             "observation": "Fila alta devido ao feriado prolongado. Equipe focada em reduzir nas próximas 48h."},
            {"name": "NÚMERO DE FILA TREBLE", "value": 0, "trend": Trend.DOWN, "target": 5,
             "observation": "Novo indicador de fila Treble."},
            {"name": "NÚMERO DE VENDAS HUMANO", "value": 15, "format": FORMAT_PERCENTAGE, "target": 1350,
             "files_link": "https://example.com/human_sales_overview.docx",
             "observation": "Vendas humanas estáveis, mas com potencial de crescimento."},
            {"name": "CONVERSÃO HUMANO", "value": 24, "format": FORMAT_PERCENTAGE, "trend": Trend.UP, "target": 14,
             "observation": "Melhoria na conversão de 2% após treinamento da equipe em novas técnicas de abordagem."},
        ],
    },
    {
        "name": "PRÉ VENDAS COMPARECIMENTO",
        "description": "Indicadores de comparecimento relacionados à pré-venda.",
        "sector_observation": "Nenhuma atividade de agendamento recente. Monitorar os próximos dias.",
        "sector_files_link": "https://example.com/prevendas_comparecimento_docs",
        "indicators": [
            {"name": "NÚMERO AGENDADO", "value": 0, "format": FORMAT_PERCENTAGE, "target": 6550,
             "observation": "Nenhum agendamento realizado no último dia."},
            {"name": "% COMPARECIMENTO", "value": 0, "format": FORMAT_PERCENTAGE, "trend": Trend.UP, "target": 85,
             "observation": "Sem agendamentos, sem taxa de comparecimento. Monitorar próximos eventos.",
             "files_link": "https://example.com/event_schedule.ics"},
        ],
    },
    {
        "name": "COMERCIAL",
        "description": "Indicadores de desempenho da equipe comercial.",
        "sector_observation": "Desempenho comercial estável. Sinais pendentes e outras pendências em redução, o que é positivo.",
        "indicators": [
            {"name": "VENDAS TRATAMENTO", "value": 0, "trend": Trend.DOWN},
            {"name": "VENDA TG", "value": 0, "trend": Trend.DOWN},
            {"name": "VENDA TG ASSISTIDO", "value": 0, "format": FORMAT_CURRENCY, "unit": "BRL",
             "observation": "Valor de Teste de Genotipagem (TG) de vendas assistidas."},
            {"name": "%TG", "value": 0, "format": FORMAT_PERCENTAGE, "target": 40,
             "files_link": "https://example.com/tg_details.csv"},
            {"name": "CONVERSÃO NO DIA", "value": 0, "format": FORMAT_PERCENTAGE, "target": 60,
             "observation": "Meta de conversão para o dia."},
            {"name": "SINAIS PENDENTES (ACUMULADO)", "value": 0, "trend": Trend.DOWN,
             "observation": "Redução no número de sinais pendentes."},
            {"name": "PENDÊNCIA PACIENTE/ASSINATURA (ACUMULADO)", "value": 0, "trend": Trend.DOWN,
             "files_link": "https://example.com/pending_signatures.csv",
             "observation": "Acompanhamento de assinaturas pendentes está em dia."},
        ],
    },
    {
        "name": "PRÉ VENDAS: AGENDAMENTO COM NUTRIÇÃO",
        "description": "Indicadores de agendamento com a equipe de nutrição.",
        "sector_observation": "Volume de leads e agendamentos dentro do esperado. Pendências de agendamento em queda.",
        "sector_files_link": "https://example.com/nutricao_agendamento_recursos",
        "indicators": [
            {"name": "NÚMERO QUE SUBIU EM LISTA", "value": 0,
             "observation": "Volume de leads para nutrição dentro do esperado."},
            {"name": "AGENDAMENTOS REALIZADOS", "value": 0,
             "observation": "Agendamentos realizados pela equipe de nutrição."},
            {"name": "AGENDAMENTOS REALIZADOS COM PRIORIDADE", "value": 0},
            {"name": "PENDÊNCIAS DE AGENDAMENTO (ACUMULADO MÊS)", "value": 0, "trend": Trend.DOWN,
             "files_link": "https://example.com/nutri_scheduling_backlog.xlsx"},
        ],
    },
    {
        "name": "NUTRIÇÃO",
        "description": "Indicadores de desempenho e satisfação da equipe de nutrição.",
        "sector_observation": "Equipe de nutrição performando bem, com baixo absenteísmo e NPS alto. Nenhuma queixa registrada.",
        "indicators": [
            {"name": "% ABSENTEÍSMO", "value": 0, "format": FORMAT_PERCENTAGE, "trend": Trend.DOWN, "target": 20,
             "observation": "Taxa de absenteísmo baixa, equipe completa."},
            {"name": "PRIMEIRA CONSULTA (TRAT ANTIGO)", "value": 0},
            {"name": "INDICAÇÕES DE SUPLEMENTOS (TRAT ANTIGO)", "value": 0},
            {"name": "% INDICAÇÃO EM INÍCIO", "value": 0, "format": FORMAT_PERCENTAGE, "trend": Trend.UP, "target": 90,
             "files_link": "https://example.com/suplement_indication_rate.png"},
            {"name": "QUEIXA DE CLIENTES/NPS", "value": 0, "trend": Trend.DOWN, "target": 1,
             "observation": "Nenhuma queixa registrada para a equipe de nutrição."},
            {"name": "NOTA SATISFAÇÃO", "value": 0, "unit": "/10", "trend": Trend.UP, "target": 8.5},
            {"name": "NOTA NPS", "value": 0, "trend": Trend.UP, "target": 900,
             "observation": "NPS da nutrição se mantém alto."},
        ],
    },
    {
        "name": "PÓS-VENDAS",
        "description": "Indicadores do setor de pós-vendas.",
        "indicators": [
            {"name": "TOTAL DE OPORTUNIDADES", "value": 0,
             "observation": "Total de oportunidades geradas no pós-vendas."},
            {"name": "CONVERSÃO NO DIA", "value": 0, "format": FORMAT_PERCENTAGE,
             "observation": "Taxa de conversão do dia no pós-vendas."},
            {"name": "TOTAL DE VENDAS R$", "value": 0, "format": FORMAT_CURRENCY, "unit": "BRL",
             "observation": "Total de vendas em reais no pós-vendas."},
            {"name": "NÚMERO PENDÊNCIAS PLANILHA (ACUMULADO)", "value": 0,
             "observation": "Pendências acumuladas na planilha do pós-vendas."},
        ],
    },
    {
        "name": "LOGÍSTICA",
        "description": "Indicadores de operações logísticas.",
        "sector_observation": "Indicadores de performance logística atualizados. Monitoramento de entregas, custos e devoluções em andamento.",
        "sector_files_link": "https://example.com/logistica_procedimentos",
        "indicators": [
            {"name": "% De Entregas No Prazo - 30 dias", "value": 92, "format": FORMAT_PERCENTAGE},
            {"name": "% De Atraso - 30 dias", "value": 8, "format": FORMAT_PERCENTAGE},
            {"name": "Total De Devolução Nos Últimos - 30 dias", "value": 10},
            {"name": "Tempo Médio De Entrega - 30 dias", "value": 10, "unit": "dias"},
            {"name": "% De Divergentes - 30 dias", "value": 2, "format": FORMAT_PERCENTAGE},
            {"name": "% Saída Rochavera", "value": 75, "format": FORMAT_PERCENTAGE},
            {"name": "Custo Logístico (R$)", "value": 12.50, "unit": "BRL", "format": FORMAT_CURRENCY,
             "is_mandatory": False},
            {"name": "Custo De Retrabalho (R$)", "value": 12.50, "unit": "BRL", "format": FORMAT_CURRENCY,
             "is_mandatory": False},
        ],
    },
    {
        "name": "FINANCEIRO",
        "description": "Indicadores financeiros da operação.",
        "sector_observation": "Controle de estornos eficiente, com pendências zeradas.",
        "indicators": [
            {"name": "NÚMERO DE ESTORNOS TRATAMENTOS/ATEND.", "value": 0, "trend": Trend.DOWN,
             "observation": "Controle de estornos de tratamentos efetivo."},
            {"name": "NÚMERO DE ESTORNOS SUPLEMENTOS", "value": 0, "trend": Trend.DOWN},
            {"name": "ESTORNOS REALIZADOS/DIA (R$)", "value": 0, "format": FORMAT_CURRENCY, "unit": "BRL",
             "trend": Trend.DOWN, "files_link": "https://example.com/daily_refunds.csv"},
            {"name": "PENDÊNCIA DE ESTORNOS", "value": 0, "trend": Trend.DOWN,
             "observation": "Fila de pendências de estorno zerada."},
            {"name": "TOTAL DE VENDAS (R$)", "value": 0, "format": FORMAT_CURRENCY, "unit": "BRL", "target": 4200000,
             "observation": "Total de vendas em valor monetário."},
        ],
    },
    {
        "name": "JORNADA CLIENTE",
        "description": "Indicadores relacionados à experiência e satisfação do cliente.",
        "sector_observation": "Baixo volume de chamados SAC e queixas. Sem casos em aberto no Reclame Aqui.",
        "sector_files_link": "https://example.com/jornada_cliente_faq",
        "indicators": [
            {"name": "SAC: NÚMERO EM ABERTO", "value": 0, "trend": Trend.DOWN,
             "observation": "Poucos chamados SAC em aberto."},
            {"name": "RETENÇÃO: NÚMERO EM ABERTO", "value": 0, "trend": Trend.DOWN},
            {"name": "SOLICITAÇÕES DE CANCELAMENTO DE AVALIAÇÕES", "value": 0, "trend": Trend.DOWN},
            {"name": "SOLICITAÇÃO DE CANCELAMENTO DE SUPLEMENTOS", "value": 0, "trend": Trend.DOWN,
             "observation": "Baixo número de solicitações de cancelamento de suplementos."},
            {"name": "SOLICITAÇÕES DE CANCELAMENTO DE TRATAMENTOS", "value": 0, "trend": Trend.DOWN},
            {"name": "RECLAME AQUI: NOVOS CASOS", "value": 0, "trend": Trend.DOWN},
            {"name": "RECLAME AQUI: CASOS EM ABERTO", "value": 0, "trend": Trend.DOWN,
             "observation": "Nenhum caso em aberto no Reclame Aqui atualmente."},
        ],
    },
]


def build_sample_sectors() -> List[Sector]:
    sectors: List[Sector] = []
    for definition in SAMPLE_SECTORS:
        sector_id = slugify(definition["name"])
        indicators: List[Indicator] = []
        seen = set()
        for item in definition["indicators"]:
            opts = {key: value for key, value in item.items() if key not in ("name", "value")}
            indicator = build_indicator(sector_id, item["name"], item["value"], **opts)
            if indicator.id in seen:
                continue
            seen.add(indicator.id)
            indicators.append(indicator)
        sectors.append(
            Sector(
                id=sector_id,
                name=definition["name"],
                description=definition.get("description"),
                indicators=tuple(indicators),
                sector_observation=definition.get("sector_observation"),
                sector_files_link=definition.get("sector_files_link"),
            )
        )
    return sectors


def load_sample_dashboard(now: Optional[datetime] = None) -> DashboardData:
    return DashboardData(
        title=DEFAULT_TITLE,
        sectors=tuple(build_sample_sectors()),
        last_updated=now or datetime.now(timezone.utc),
    )
