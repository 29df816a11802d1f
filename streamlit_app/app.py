"""Главная страница - навигация и маршрутизация."""

import logging

import streamlit as st

from config import PAGE_CONFIGS, app_config
from core import check_authentication, init_session_state

logging.basicConfig(level=app_config.log_level, format=app_config.log_format)

# Настройка страницы
page_config = PAGE_CONFIGS["main"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state()

if not check_authentication():
    st.switch_page("pages/1_auth.py")
else:
    st.switch_page("pages/2_chat.py")
