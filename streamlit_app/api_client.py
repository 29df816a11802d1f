"""Централизованный API клиент для взаимодействия с backend."""

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

import requests

from config import app_config
from constants import (
    DEFAULT_API_TIMEOUT,
    ENDPOINT_AUTH_LOGIN,
    ENDPOINT_AUTH_LOGOUT,
    ENDPOINT_AUTH_ME,
    ENDPOINT_AUTH_REGISTER,
    ENDPOINT_CHAT_STREAM,
    ENDPOINT_CHAT_TITLE,
    ENDPOINT_CHATS,
    ENDPOINT_HEALTH,
    ENDPOINT_MODELS,
    ENDPOINT_USERS,
    HEALTH_CHECK_TIMEOUT,
    HTTP_CREATED,
    HTTP_NO_CONTENT,
    HTTP_OK,
    STREAM_DATA_PREFIX,
    STREAM_DONE_MARKER,
    STREAM_EVENT_ERROR,
    STREAM_EVENT_START,
    STREAM_EVENT_TEXT_DELTA,
)

logger = logging.getLogger(__name__)


class StreamError(Exception):
    """Ошибка генерации, полученная из потока"""


def parse_stream_line(line: str) -> Optional[Any]:
    """
    Разбирает строку SSE потока.

    Returns:
        dict события, маркер завершения или None для служебных строк
    """
    if not line or not line.startswith(STREAM_DATA_PREFIX):
        return None
    data = line[len(STREAM_DATA_PREFIX):].strip()
    if data == STREAM_DONE_MARKER:
        return STREAM_DONE_MARKER
    return json.loads(data)


class ChatStream:
    """
    Итератор по текстовым фрагментам ответа модели.

    Подходит для st.write_stream; после чтения содержит message_id
    сообщения ассистента.
    """

    def __init__(self, response: requests.Response) -> None:
        self.response = response
        self.message_id: Optional[str] = None

    def __iter__(self) -> Iterator[str]:
        self.response.encoding = "utf-8"
        try:
            for line in self.response.iter_lines(decode_unicode=True):
                event = parse_stream_line(line)
                if event is None:
                    continue
                if event == STREAM_DONE_MARKER:
                    break

                event_type = event.get("type")
                if event_type == STREAM_EVENT_START:
                    self.message_id = event.get("messageId")
                elif event_type == STREAM_EVENT_TEXT_DELTA:
                    yield event.get("delta", "")
                elif event_type == STREAM_EVENT_ERROR:
                    raise StreamError(event.get("errorText") or "unknown error")
        finally:
            self.response.close()


class APIClient:
    """Клиент для взаимодействия с FastAPI backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = DEFAULT_API_TIMEOUT,
    ) -> None:
        """
        Инициализация API клиента.

        Args:
            base_url: Базовый URL API (по умолчанию из конфигурации)
            timeout: Таймаут запросов в секундах
        """
        self.base_url = base_url or app_config.api_url
        self.timeout = timeout
        self.token: Optional[str] = None
        self.last_error: Optional[str] = None

    def set_token(self, token: str) -> None:
        """Установить токен авторизации"""
        self.token = token

    def clear_token(self) -> None:
        """Очистить токен авторизации"""
        self.token = None

    def _get_headers(self) -> Dict[str, str]:
        """Получить заголовки для запроса"""
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _handle_response(self, response: requests.Response) -> Optional[Any]:
        """
        Обработка ответа от сервера.

        Сообщение об ошибке сервера сохраняется в last_error.

        Returns:
            JSON данные или None в случае ошибки
        """
        self.last_error = None
        if response.status_code in (HTTP_OK, HTTP_CREATED):
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"Failed to parse JSON response: {e}")
                return None

        try:
            self.last_error = response.json().get("message")
        except ValueError:
            self.last_error = response.text[:200]
        logger.error(
            f"API request failed with status {response.status_code}: "
            f"{response.text[:200]}"
        )
        return None

    def _request(self, method: str, path: str, **kwargs) -> Optional[Any]:
        try:
            response = requests.request(
                method,
                f"{self.base_url}{path}",
                headers=self._get_headers(),
                timeout=kwargs.pop("timeout", self.timeout),
                **kwargs,
            )
            return self._handle_response(response)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            self.last_error = str(e)
            return None

    def _delete(self, path: str) -> bool:
        try:
            response = requests.delete(
                f"{self.base_url}{path}",
                headers=self._get_headers(),
                timeout=self.timeout,
            )
            return response.status_code == HTTP_NO_CONTENT
        except requests.exceptions.RequestException as e:
            logger.error(f"DELETE {path} failed: {e}")
            return False

    # ===== AUTH =====

    def register(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Регистрация нового пользователя.

        Returns:
            Данные пользователя и токен или None в случае ошибки
        """
        payload: Dict[str, Any] = {"email": email, "password": password}
        if name:
            payload["name"] = name
        return self._request("POST", ENDPOINT_AUTH_REGISTER, json=payload)

    def login(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """
        Вход пользователя.

        Returns:
            Данные пользователя и токен или None в случае ошибки
        """
        return self._request("POST", ENDPOINT_AUTH_LOGIN, json={"email": email, "password": password})

    def logout(self) -> bool:
        try:
            response = requests.post(
                f"{self.base_url}{ENDPOINT_AUTH_LOGOUT}",
                headers=self._get_headers(),
                timeout=self.timeout,
            )
            return response.status_code == HTTP_NO_CONTENT
        except requests.exceptions.RequestException as e:
            logger.error(f"Logout failed: {e}")
            return False

    def get_user_info(self) -> Optional[Dict[str, Any]]:
        """Информация о текущем пользователе"""
        return self._request("GET", ENDPOINT_AUTH_ME)

    def get_health(self) -> Optional[Dict[str, Any]]:
        """Статус сервисов или None в случае ошибки"""
        return self._request("GET", ENDPOINT_HEALTH, timeout=HEALTH_CHECK_TIMEOUT)

    # ===== MODELS =====

    def get_models(self) -> Optional[Dict[str, Any]]:
        """Список моделей и модель по умолчанию"""
        return self._request("GET", ENDPOINT_MODELS)

    def create_model(
        self,
        model_id: str,
        name: str,
        base_url: str,
        api_key: str = "",
        description: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Добавить модель в реестр"""
        payload = {
            "id": model_id,
            "name": name,
            "baseURL": base_url,
            "apiKey": api_key,
            "description": description or None,
        }
        return self._request("POST", ENDPOINT_MODELS, json=payload)

    def update_model(self, model_id: str, **changes: Any) -> Optional[Dict[str, Any]]:
        """
        Частичное обновление модели.

        Args:
            model_id: ID модели
            changes: name, description, baseURL, apiKey; пустые значения не отправляются
        """
        payload = {key: value for key, value in changes.items() if value}
        return self._request("PATCH", f"{ENDPOINT_MODELS}/{model_id}", json=payload)

    def delete_model(self, model_id: str) -> bool:
        return self._delete(f"{ENDPOINT_MODELS}/{model_id}")

    # ===== CHATS =====

    def get_chats(
        self,
        skip: int = 0,
        limit: int = app_config.default_chats_limit,
    ) -> Optional[Dict[str, Any]]:
        """
        Получение списка чатов текущего пользователя.

        Args:
            skip: Количество чатов для пропуска
            limit: Максимальное количество чатов
        """
        return self._request("GET", ENDPOINT_CHATS, params={"skip": skip, "limit": limit})

    def get_chat(self, chat_id: str) -> Optional[Dict[str, Any]]:
        """Чат вместе с сообщениями"""
        return self._request("GET", f"{ENDPOINT_CHATS}/{chat_id}")

    def create_chat(
        self,
        model_id: str,
        chat_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Создание нового чата.

        Args:
            model_id: ID модели
            chat_id: ID чата (сервер сгенерирует, если не задан)
            title: Название чата
        """
        payload: Dict[str, Any] = {"modelId": model_id}
        if chat_id:
            payload["id"] = chat_id
        if title:
            payload["title"] = title
        return self._request("POST", ENDPOINT_CHATS, json=payload)

    def update_chat(
        self,
        chat_id: str,
        title: Optional[str] = None,
        model_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        payload: Dict[str, Any] = {}
        if title:
            payload["title"] = title
        if model_id:
            payload["modelId"] = model_id
        return self._request("PATCH", f"{ENDPOINT_CHATS}/{chat_id}", json=payload)

    def delete_chat(self, chat_id: str) -> bool:
        """Удаление чата; True если успешно"""
        return self._delete(f"{ENDPOINT_CHATS}/{chat_id}")

    def delete_message(self, chat_id: str, message_id: str) -> bool:
        """Удаление сообщения (вместе с ответом на него)"""
        return self._delete(f"{ENDPOINT_CHATS}/{chat_id}/messages/{message_id}")

    # ===== GENERATION =====

    def generate_title(self, text: str) -> Optional[str]:
        """Краткое название чата по первому сообщению"""
        result = self._request("POST", ENDPOINT_CHAT_TITLE, json={"text": text})
        return result.get("title") if result else None

    def stream_chat(
        self,
        messages: List[Dict[str, Any]],
        model_id: str,
        chat_id: Optional[str] = None,
    ) -> ChatStream:
        """
        Потоковая генерация ответа.

        Args:
            messages: История в формате UI сообщений
            model_id: ID модели
            chat_id: ID чата, в который сервер сохранит беседу

        Returns:
            ChatStream с текстовыми фрагментами

        Raises:
            StreamError: Сервер отклонил запрос
        """
        payload: Dict[str, Any] = {"messages": messages, "modelId": model_id}
        if chat_id:
            payload["chatId"] = chat_id

        try:
            response = requests.post(
                f"{self.base_url}{ENDPOINT_CHAT_STREAM}",
                json=payload,
                headers=self._get_headers(),
                stream=True,
                timeout=(self.timeout, app_config.stream_read_timeout),
            )
        except requests.exceptions.RequestException as e:
            raise StreamError(str(e)) from e

        if response.status_code != HTTP_OK:
            self._handle_response(response)
            response.close()
            raise StreamError(self.last_error or f"HTTP {response.status_code}")
        return ChatStream(response)

    # ===== USERS =====

    def get_users(self) -> Optional[List[Dict[str, Any]]]:
        return self._request("GET", ENDPOINT_USERS)

    def get_user_stats(self) -> Optional[Dict[str, Any]]:
        return self._request("GET", f"{ENDPOINT_USERS}/stats")

    def create_user(self, email: str, name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return self._request("POST", ENDPOINT_USERS, json={"email": email, "name": name})

    def update_user(self, user_id: int, email: str, name: str) -> Optional[Dict[str, Any]]:
        """Email меняется только непустым, имя - всегда (пустое очищает)"""
        return self._request("PATCH", f"{ENDPOINT_USERS}/{user_id}", json={"email": email, "name": name})

    def delete_user(self, user_id: int) -> bool:
        return self._delete(f"{ENDPOINT_USERS}/{user_id}")
