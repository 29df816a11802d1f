"""Админ-панель управления пользователями."""

import logging

import streamlit as st

from components import render_logout_button, render_stat_cards
from config import PAGE_CONFIGS, app_config
from constants import (
    MSG_EMAIL_IN_USE,
    MSG_USERS_LOAD_ERROR,
    SESSION_USER_INFO,
)
from core import get_api_client, init_session_state, require_authentication

logging.basicConfig(level=app_config.log_level, format=app_config.log_format)
logger = logging.getLogger(__name__)

page_config = PAGE_CONFIGS["users"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state()
require_authentication()

api_client = get_api_client()

with st.sidebar:
    if st.button("💬 К чатам", use_container_width=True):
        st.switch_page("pages/2_chat.py")
    render_logout_button()

st.markdown("## Пользователи")

stats = api_client.get_user_stats()
if stats:
    render_stat_cards(stats)

users = api_client.get_users()
if users is None:
    st.error(MSG_USERS_LOAD_ERROR)
    st.stop()

st.dataframe(
    [
        {
            "ID": u["id"],
            "Email": u["email"],
            "Имя": u.get("name") or "",
            "Создан": (u.get("created_at") or "")[:10],
        }
        for u in users
    ],
    use_container_width=True,
    hide_index=True,
)

# ===== СОЗДАНИЕ =====
with st.expander("Добавить пользователя"):
    with st.form(key="create_user_form", clear_on_submit=True):
        new_email = st.text_input("Email:")
        new_name = st.text_input("Имя:")
        if st.form_submit_button("Создать"):
            if not new_email.strip():
                st.error("❌ Укажите email")
            elif api_client.create_user(new_email, new_name.strip() or None):
                st.rerun()
            else:
                st.error(api_client.last_error or MSG_EMAIL_IN_USE)

# ===== РЕДАКТИРОВАНИЕ И УДАЛЕНИЕ =====
if users:
    by_id = {u["id"]: u for u in users}
    current_user_id = (st.session_state.get(SESSION_USER_INFO) or {}).get("id")

    selected_id = st.selectbox(
        "Пользователь",
        options=list(by_id),
        format_func=lambda user_id: by_id[user_id]["email"],
        key="edit_user_select",
    )
    selected = by_id[selected_id]

    with st.form(key="edit_user_form"):
        edit_email = st.text_input("Email:", value=selected["email"])
        edit_name = st.text_input("Имя:", value=selected.get("name") or "")
        col1, col2 = st.columns(2)
        with col1:
            save = st.form_submit_button("Сохранить", type="primary")
        with col2:
            delete = st.form_submit_button(
                "Удалить",
                disabled=selected_id == current_user_id,
                help="Нельзя удалить самого себя" if selected_id == current_user_id else None,
            )

    if save:
        if api_client.update_user(selected_id, edit_email, edit_name):
            st.rerun()
        st.error(api_client.last_error or MSG_EMAIL_IN_USE)
    elif delete:
        if api_client.delete_user(selected_id):
            logger.info(f"Deleted user id={selected_id}")
            st.rerun()
        st.error("❌ Не удалось удалить пользователя")
