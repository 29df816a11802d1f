"""Страница авторизации и регистрации."""

import logging

import streamlit as st

from api_client import APIClient
from config import PAGE_CONFIGS
from constants import (
    MAX_PASSWORD_LENGTH_BYTES,
    MSG_EMPTY_FIELDS,
    MSG_LOGIN_ERROR,
    MSG_LOGIN_SUCCESS,
    MSG_PASSWORDS_MISMATCH,
    MSG_REGISTER_ERROR,
    MSG_REGISTER_SUCCESS,
    SESSION_AUTHENTICATED,
)
from core import init_session_state, login_session, validate_password_length
from styles import SIDEBAR_HIDE_STYLE

logger = logging.getLogger(__name__)

# Настройка страницы
page_config = PAGE_CONFIGS["auth"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state()

api_client = APIClient()

# Скрываем sidebar и навигацию для неавторизованных пользователей
st.markdown(SIDEBAR_HIDE_STYLE, unsafe_allow_html=True)

if st.session_state.get(SESSION_AUTHENTICATED, False):
    st.switch_page("pages/2_chat.py")

st.markdown("### Добро пожаловать!")

tab1, tab2 = st.tabs(["Вход", "Регистрация"])

with tab1:
    st.markdown("#### Вход в систему")

    with st.form(key="login_form"):
        login_email = st.text_input("Email:", placeholder="your@email.com")
        login_password = st.text_input(
            "Пароль:",
            type="password",
            placeholder="Введите пароль",
            max_chars=MAX_PASSWORD_LENGTH_BYTES,
        )
        submit_login = st.form_submit_button("Войти", use_container_width=True)

        if submit_login:
            if not login_email or not login_password:
                st.error(MSG_EMPTY_FIELDS)
            else:
                with st.spinner("Выполняю вход..."):
                    result = api_client.login(login_email, login_password)

                if result:
                    login_session(result)
                    st.success(MSG_LOGIN_SUCCESS.format(email=result["user"].get("email")))
                    st.switch_page("pages/2_chat.py")
                else:
                    st.error(MSG_LOGIN_ERROR)

with tab2:
    st.markdown("#### Создать новый аккаунт")
    st.info("💡 После регистрации вы автоматически войдёте в систему")

    with st.form(key="register_form"):
        register_name = st.text_input("Имя (необязательно):")
        register_email = st.text_input("Email:", placeholder="your@email.com")
        register_password = st.text_input(
            "Пароль:",
            type="password",
            placeholder="Минимум 6 символов, хотя бы одна заглавная буква",
            max_chars=MAX_PASSWORD_LENGTH_BYTES,
        )
        register_password_confirm = st.text_input(
            "Подтвердите пароль:",
            type="password",
            placeholder="Введите пароль ещё раз",
            max_chars=MAX_PASSWORD_LENGTH_BYTES,
        )
        submit_register = st.form_submit_button("Зарегистрироваться", use_container_width=True)

        if submit_register:
            password_error = validate_password_length(register_password or "")
            if not register_email or not register_password:
                st.error(MSG_EMPTY_FIELDS)
            elif register_password != register_password_confirm:
                st.error(MSG_PASSWORDS_MISMATCH)
            elif password_error:
                st.error(f"❌ {password_error}")
            else:
                with st.spinner("Создаю аккаунт..."):
                    result = api_client.register(
                        register_email,
                        register_password,
                        register_name.strip() or None,
                    )

                if result and result.get("access_token") and result.get("user"):
                    login_session(result)
                    st.success(MSG_REGISTER_SUCCESS.format(email=result["user"].get("email")))
                    st.switch_page("pages/2_chat.py")
                else:
                    logger.warning(f"Registration failed: {api_client.last_error}")
                    st.error(MSG_REGISTER_ERROR)
