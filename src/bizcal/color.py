# SPDX-License-Identifier: MIT

DEFAULT_COLOR = "#3B82F6"

# Colors keyed by event type
EVENT_COLORS: dict[str, str] = {
    "reuniao": "#2563EB",
    "gravacao": "#D97706",
    "entrega": "#7C3AED",
    "edicao": "#DC2626",
    "financeiro": "#059669",
    "prazo": "#DB2777",
    "externo": "#4F46E5",
    "planejamento": "#0284C7",
    "capacitacao": "#0D9488",
    "projeto": "#4B5563",
}

# Colors keyed by task priority
TASK_PRIORITY_COLORS: dict[str, str] = {
    "baixa": "#10B981",
    "media": "#F59E0B",
    "alta": "#FB923C",
    "critica": "#EF4444",
}

TASK_STATUS_COLORS: dict[str, str] = {
    "pendente": "#F97316",
    "em_andamento": "#3B82F6",
    "concluido": "#10B981",
    "bloqueada": "#EF4444",
    "cancelada": "#6B7280",
}

EVENT_TYPE_LABELS: dict[str, str] = {
    "reuniao": "Reunião",
    "gravacao": "Gravação",
    "entrega": "Entrega",
    "edicao": "Edição",
    "financeiro": "Financeiro",
    "prazo": "Prazo de Entrega",
    "externo": "Evento Externo",
    "planejamento": "Planejamento",
    "capacitacao": "Capacitação",
    "projeto": "Início de Projeto",
}

TODAY_STYLE = "bold black on bright_cyan"
WEEKEND_STYLE = "bold white on orange4"
OUTSIDE_MONTH_STYLE = "bright_black"
OVERDUE_STYLE = "bold red"


def color_for_key(color_key: str) -> str:
    """Resolve an occurrence color key (event type or task priority) to a Rich color."""
    if color_key in EVENT_COLORS:
        return EVENT_COLORS[color_key]
    if color_key in TASK_PRIORITY_COLORS:
        return TASK_PRIORITY_COLORS[color_key]
    return DEFAULT_COLOR
