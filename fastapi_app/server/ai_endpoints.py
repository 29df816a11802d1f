"""
Эндпоинты генерации: потоковый ответ модели и название чата
"""

import logging

from config import Settings, get_settings
from constants import UI_STREAM_HEADER, UI_STREAM_VERSION
from core.auth import get_current_user
from core.database import get_db_session, get_session_factory
from fastapi import APIRouter, Depends
from models import User
from repositories import ChatRepository
from schemas.ai import ChatStreamRequest, TitleRequest, TitleResponse
from services.chat_stream import conversation_saver, new_message_id, stream_ui_message
from services.llm import build_chat_model
from services.model_registry import ModelRegistry, get_model_registry
from services.title import generate_title
from services.ui_messages import convert_ui_messages
from sqlalchemy.orm import Session, sessionmaker
from sse_starlette.sse import EventSourceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["AI"])


@router.post("")
async def chat_stream(
    request: ChatStreamRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
    session_factory: sessionmaker = Depends(get_session_factory),
    registry: ModelRegistry = Depends(get_model_registry),
):
    """
    Потоковый ответ модели в формате UI message stream.

    Если передан chatId чата текущего пользователя, после генерации вся
    беседа сохраняется в этот чат.

    Raises:
        ResourceNotFoundError: Неизвестный modelId (до начала потока)
    """
    model = registry.get(request.model_id)
    message_id = new_message_id()

    on_complete = None
    if request.chat_id:
        if ChatRepository(db).get_for_user(request.chat_id, current_user.id):
            on_complete = conversation_saver(
                session_factory,
                chat_id=request.chat_id,
                user_id=current_user.id,
                model_id=model.id,
                history=request.messages,
            )
        else:
            logger.warning(
                f"[STREAM] chatId={request.chat_id} is not a chat of user_id={current_user.id}, not persisting"
            )

    logger.info(
        "[STREAM] Starting stream",
        extra={
            "user_id": current_user.id,
            "model_id": model.id,
            "chat_id": request.chat_id,
            "message_count": len(request.messages),
        },
    )
    llm = build_chat_model(model, streaming=True)
    return EventSourceResponse(
        stream_ui_message(llm, convert_ui_messages(request.messages), message_id, on_complete),
        headers={UI_STREAM_HEADER: UI_STREAM_VERSION},
    )


@router.post("/title", response_model=TitleResponse)
async def chat_title(
    request: TitleRequest,
    current_user: User = Depends(get_current_user),
    registry: ModelRegistry = Depends(get_model_registry),
    settings: Settings = Depends(get_settings),
):
    """Сгенерировать краткое название чата по первому сообщению"""
    title = await generate_title(request.text, registry, settings)
    logger.info(f"[TITLE] Generated title for user_id={current_user.id}: '{title}'")
    return TitleResponse(title=title)
