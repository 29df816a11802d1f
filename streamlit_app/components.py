"""Общие компоненты для Streamlit приложения."""

from typing import Any, Dict, List, Optional

import streamlit as st

from api_client import APIClient
from constants import (
    DEFAULT_CHAT_TITLE,
    MSG_CHATS_LOAD_ERROR,
    MSG_MODEL_DELETE_ERROR,
    MSG_MODEL_REQUIRED_FIELDS,
    MSG_MODEL_SAVE_ERROR,
    MSG_NO_CHATS_YET,
    MSG_NO_MODELS,
    SESSION_CHAT_ID,
    SESSION_MODEL_ID,
    SESSION_USER_INFO,
)
from core.auth import logout
from core.session import reset_chat_state
from styles import SIDEBAR_BUTTON_STYLE, get_stat_card_html


def render_chat_list(
    api_client: APIClient,
    current_chat_id: Optional[str] = None,
) -> None:
    """
    Отображает список чатов пользователя.

    Чат создается на сервере при отправке первого сообщения, поэтому
    кнопка "Новый чат" только сбрасывает состояние.

    Args:
        api_client: API клиент
        current_chat_id: ID текущего открытого чата
    """
    st.markdown(SIDEBAR_BUTTON_STYLE, unsafe_allow_html=True)

    if st.button(
        f"+ {DEFAULT_CHAT_TITLE}",
        use_container_width=True,
        type="primary",
        key="new_chat_btn",
    ):
        reset_chat_state()
        st.rerun()

    st.markdown("#### Ваши чаты")

    chats_data = api_client.get_chats()
    if not chats_data or "chats" not in chats_data:
        st.warning(MSG_CHATS_LOAD_ERROR)
        return

    chats = chats_data["chats"]
    if not chats:
        st.info(MSG_NO_CHATS_YET)
        return

    for chat in chats:
        chat_id = chat["id"]
        is_active = chat_id == current_chat_id

        col1, col2 = st.columns([4, 1])
        with col1:
            if st.button(
                chat["title"],
                key=f"chat_{chat_id}",
                use_container_width=True,
                type="primary" if is_active else "secondary",
            ):
                reset_chat_state()
                st.session_state[SESSION_CHAT_ID] = chat_id
                st.session_state[SESSION_MODEL_ID] = chat.get("model_id")
                st.rerun()

        with col2:
            if st.button("⨯", key=f"delete_{chat_id}", help="Удалить чат"):
                if api_client.delete_chat(chat_id):
                    if is_active:
                        reset_chat_state()
                    st.rerun()


def render_model_selector(api_client: APIClient) -> Optional[str]:
    """
    Выбор модели для генерации.

    Returns:
        ID выбранной модели или None если модели недоступны
    """
    data = api_client.get_models()
    models: List[Dict[str, Any]] = data.get("models", []) if data else []
    if not models:
        st.warning(MSG_NO_MODELS)
        return None

    ids = [m["id"] for m in models]
    names = {m["id"]: m["name"] for m in models}

    current = st.session_state.get(SESSION_MODEL_ID)
    if current not in ids:
        current = data.get("default_model_id") or ids[0]

    selected = st.selectbox(
        "Модель",
        options=ids,
        index=ids.index(current),
        format_func=lambda model_id: names[model_id],
    )
    st.session_state[SESSION_MODEL_ID] = selected
    return selected


NEW_MODEL_OPTION = ""


def render_model_config(api_client: APIClient) -> None:
    """
    Редактор списка моделей: добавление, изменение и удаление.

    Пустой API ключ при редактировании оставляет прежний ключ.
    """
    with st.expander("⚙️ Настройка моделей"):
        data = api_client.get_models() or {}
        models = {m["id"]: m for m in data.get("models", [])}

        selected_id = st.selectbox(
            "Модель",
            options=[NEW_MODEL_OPTION, *models],
            format_func=lambda model_id: models[model_id]["name"] if model_id else "+ Новая модель",
            key="model_config_select",
        )
        current = models.get(selected_id, {})
        is_new = not current

        with st.form(key=f"model_config_form_{selected_id or 'new'}"):
            model_id = st.text_input("ID", value=current.get("id", ""), disabled=not is_new)
            name = st.text_input("Название", value=current.get("name", ""))
            description = st.text_input("Описание", value=current.get("description") or "")
            base_url = st.text_input("Base URL", value=current.get("base_url", ""))
            api_key = st.text_input(
                "API ключ",
                type="password",
                placeholder="не менять" if current.get("has_api_key") else "",
            )
            col1, col2 = st.columns(2)
            with col1:
                save = st.form_submit_button("Сохранить", type="primary")
            with col2:
                delete = st.form_submit_button("Удалить", disabled=is_new)

        if save:
            if not (model_id.strip() and name.strip() and base_url.strip()):
                st.error(MSG_MODEL_REQUIRED_FIELDS)
                return
            if is_new:
                result = api_client.create_model(
                    model_id.strip(), name.strip(), base_url.strip(), api_key, description.strip()
                )
            else:
                result = api_client.update_model(
                    selected_id,
                    name=name.strip(),
                    description=description.strip(),
                    baseURL=base_url.strip(),
                    apiKey=api_key,
                )
            if result:
                st.rerun()
            st.error(MSG_MODEL_SAVE_ERROR.format(error=api_client.last_error))
        elif delete:
            if api_client.delete_model(selected_id):
                if st.session_state.get(SESSION_MODEL_ID) == selected_id:
                    st.session_state[SESSION_MODEL_ID] = None
                st.rerun()
            st.error(MSG_MODEL_DELETE_ERROR)


def render_stat_cards(stats: Dict[str, int]) -> None:
    """Карточки статистики пользователей"""
    cards = [
        ("Всего пользователей", stats.get("total", 0), ""),
        ("С именем", stats.get("with_name", 0), ""),
        ("Без имени", stats.get("without_name", 0), ""),
        ("Новые", stats.get("recent_count", 0), "за последние 7 дней"),
    ]
    for column, (label, value, hint) in zip(st.columns(len(cards)), cards):
        with column:
            st.markdown(get_stat_card_html(label, value, hint), unsafe_allow_html=True)


def render_logout_button() -> None:
    """Отображает email пользователя и кнопку выхода."""
    user_info = st.session_state.get(SESSION_USER_INFO) or {}
    if user_info.get("email"):
        st.caption(f"Вы вошли как {user_info['email']}")

    if st.button("Выйти из системы", use_container_width=True, type="secondary"):
        logout()
        st.switch_page("pages/1_auth.py")
