"""Страница чата с потоковыми ответами модели."""

import logging
import uuid
from typing import Any, Dict, List, Optional

import streamlit as st

from api_client import StreamError
from components import (
    render_chat_list,
    render_logout_button,
    render_model_config,
    render_model_selector,
)
from config import PAGE_CONFIGS, app_config
from constants import (
    MSG_CHAT_CREATE_ERROR,
    MSG_MESSAGE_DELETE_ERROR,
    MSG_STREAM_ERROR,
    ROLE_ASSISTANT,
    ROLE_USER,
    SESSION_CHAT_ID,
    SESSION_MESSAGES,
    SESSION_MESSAGES_LOADED,
    SESSION_PENDING_RETRY,
    SESSION_STREAM_ERROR,
)
from core import get_api_client, init_session_state, require_authentication

logging.basicConfig(level=app_config.log_level, format=app_config.log_format)
logger = logging.getLogger(__name__)

# Конфигурация страницы
page_config = PAGE_CONFIGS["chat"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state()
require_authentication()

api_client = get_api_client()


def text_message(role: str, text: str, message_id: str = "") -> Dict[str, Any]:
    """UI сообщение с одной текстовой частью"""
    return {
        "id": message_id or f"msg-{uuid.uuid4().hex}",
        "role": role,
        "parts": [{"type": "text", "text": text}],
    }


def message_text(message: Dict[str, Any]) -> str:
    texts = [p.get("text", "") for p in message.get("parts") or [] if p.get("type") == "text"]
    return "".join(texts) or message.get("content") or ""


def last_user_index(messages: List[Dict[str, Any]]) -> Optional[int]:
    for idx in range(len(messages) - 1, -1, -1):
        if messages[idx]["role"] == ROLE_USER:
            return idx
    return None


def delete_message(chat_id: Optional[str], message: Dict[str, Any]) -> None:
    """
    Удаляет сообщение; у сообщения пользователя удаляется и ответ на него.

    После удаления история перечитывается с сервера.
    """
    if chat_id and not api_client.delete_message(chat_id, message["id"]):
        st.error(MSG_MESSAGE_DELETE_ERROR)
        return
    st.session_state[SESSION_STREAM_ERROR] = None
    st.session_state[SESSION_MESSAGES_LOADED] = False
    st.rerun()


def request_retry() -> None:
    """Отбрасывает ответы после последнего вопроса и запрашивает генерацию заново"""
    messages = st.session_state[SESSION_MESSAGES]
    idx = last_user_index(messages)
    if idx is None:
        return
    st.session_state[SESSION_MESSAGES] = messages[: idx + 1]
    st.session_state[SESSION_STREAM_ERROR] = None
    st.session_state[SESSION_PENDING_RETRY] = True
    st.rerun()


def stream_answer(chat_id: str, model_id: str) -> bool:
    """
    Потоковая генерация ответа на текущую историю.

    Сервер сам сохраняет беседу в чат chat_id после успешного ответа.

    Returns:
        True если ответ получен
    """
    with st.chat_message(ROLE_ASSISTANT):
        try:
            stream = api_client.stream_chat(st.session_state[SESSION_MESSAGES], model_id, chat_id)
            answer = st.write_stream(stream)
        except StreamError as e:
            logger.error(f"Stream failed for chat_id={chat_id}: {e}")
            st.session_state[SESSION_STREAM_ERROR] = str(e)
            return False

    st.session_state[SESSION_MESSAGES].append(
        text_message(ROLE_ASSISTANT, answer if isinstance(answer, str) else "", stream.message_id or "")
    )
    st.session_state[SESSION_STREAM_ERROR] = None
    return True


# ===== SIDEBAR =====
with st.sidebar:
    model_id = render_model_selector(api_client)
    render_model_config(api_client)
    st.markdown("---")
    render_chat_list(api_client, current_chat_id=st.session_state.get(SESSION_CHAT_ID))
    st.markdown("---")
    if st.button("👥 Пользователи", use_container_width=True):
        st.switch_page("pages/3_users.py")
    render_logout_button()

# ===== MAIN CONTENT =====
st.markdown("## Чат")

# Загрузка истории при открытии чата
chat_id = st.session_state.get(SESSION_CHAT_ID)
if chat_id and not st.session_state.get(SESSION_MESSAGES_LOADED, False):
    logger.info(f"Loading message history for chat_id={chat_id}")
    with st.spinner("Загрузка истории чата..."):
        chat = api_client.get_chat(chat_id)
    if chat:
        st.session_state[SESSION_MESSAGES] = [
            {"id": m["id"], "role": m["role"], "parts": m.get("parts") or [], "content": m.get("content")}
            for m in chat.get("messages", [])
        ]
        logger.info(f"Loaded {len(st.session_state[SESSION_MESSAGES])} messages from history")
    st.session_state[SESSION_MESSAGES_LOADED] = True

messages = st.session_state[SESSION_MESSAGES]
busy = st.session_state[SESSION_PENDING_RETRY]

for idx, message in enumerate(messages):
    content = message_text(message)
    if not content.strip():
        continue
    with st.chat_message(message["role"]):
        st.markdown(content)
        if busy:
            continue
        actions = st.columns([1, 1, 10])
        with actions[0]:
            if st.button("🗑", key=f"delete_{message['id']}", help="Удалить сообщение"):
                delete_message(chat_id, message)
        is_last_answer = idx == len(messages) - 1 and message["role"] == ROLE_ASSISTANT
        with actions[1]:
            if is_last_answer and st.button("🔄", key=f"retry_{message['id']}", help="Сгенерировать заново"):
                request_retry()

stream_error = st.session_state.get(SESSION_STREAM_ERROR)
if stream_error and not busy:
    st.error(MSG_STREAM_ERROR.format(error=stream_error))
    if st.button("🔄 Повторить", key="retry_after_error"):
        request_retry()

prompt = st.chat_input("Спросите что-нибудь...", disabled=model_id is None or busy)

if busy and model_id:
    st.session_state[SESSION_PENDING_RETRY] = False
    if chat_id:
        stream_answer(chat_id, model_id)
    st.rerun()

if prompt and model_id:
    is_new_chat = not chat_id
    if is_new_chat:
        created = api_client.create_chat(model_id)
        if not created:
            st.error(MSG_CHAT_CREATE_ERROR)
            st.stop()
        chat_id = created["id"]
        st.session_state[SESSION_CHAT_ID] = chat_id
        st.session_state[SESSION_MESSAGES_LOADED] = True
        logger.info(f"Created new chat: {chat_id}")

    st.session_state[SESSION_MESSAGES].append(text_message(ROLE_USER, prompt))
    with st.chat_message(ROLE_USER):
        st.markdown(prompt)

    answered = stream_answer(chat_id, model_id)

    if answered and is_new_chat:
        title = api_client.generate_title(prompt)
        if title:
            api_client.update_chat(chat_id, title=title)
    st.rerun()
