"""Централизованные стили для Streamlit приложения."""

from typing import Final

# ===== COLORS =====
PRIMARY_GRADIENT: Final[str] = "linear-gradient(135deg, #4F6BED 0%, #7A8CF2 100%)"

# ===== SIDEBAR STYLES =====
SIDEBAR_HIDE_STYLE: Final[str] = """
<style>
    [data-testid="stSidebar"] {
        display: none;
    }
    [data-testid="stSidebarNav"] {
        display: none;
    }
</style>
"""

SIDEBAR_BUTTON_STYLE: Final[str] = """
<style>
div[data-testid="stSidebar"] button[kind="primary"] {
    background: linear-gradient(135deg, #4F6BED 0%, #7A8CF2 100%) !important;
    color: white !important;
    border: none !important;
    font-weight: 600 !important;
}

/* Длинные названия чатов обрезаются */
[data-testid="stSidebar"] .stButton button {
    text-align: left !important;
    justify-content: flex-start !important;
    white-space: nowrap;
    overflow: hidden;
    text-overflow: ellipsis;
}
</style>
"""


def get_stat_card_html(label: str, value: int, hint: str = "") -> str:
    """
    Генерирует HTML карточки статистики.

    Args:
        label: Подпись карточки
        value: Значение
        hint: Пояснение под значением

    Returns:
        HTML строка с карточкой
    """
    return f"""
    <div style="background: {PRIMARY_GRADIENT}; color: white;
                padding: 1rem; border-radius: 10px; margin-bottom: 1rem;">
        <div style="font-size: 0.9rem; opacity: 0.9;">{label}</div>
        <div style="font-size: 2rem; font-weight: bold;">{value:,}</div>
        <div style="font-size: 0.8rem; opacity: 0.8;">{hint}</div>
    </div>
    """
