"""
Тесты преобразования UI сообщений в сообщения langchain
"""

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from schemas.chat import UIMessage
from services.ui_messages import assistant_message, convert_ui_messages, extract_text


def test_extract_text_joins_parts():
    message = UIMessage(
        id="1",
        role="user",
        parts=[{"type": "text", "text": "a"}, {"type": "reasoning", "text": "skip"}, {"type": "text", "text": "b"}],
    )
    assert extract_text(message) == "ab"


def test_extract_text_legacy_content():
    assert extract_text(UIMessage(id="1", role="user", content="plain")) == "plain"


def test_convert_roles():
    converted = convert_ui_messages(
        [
            UIMessage(id="s", role="system", parts=[{"type": "text", "text": "be brief"}]),
            UIMessage(id="u", role="user", parts=[{"type": "text", "text": "hi"}]),
            UIMessage(id="a", role="assistant", parts=[{"type": "step-start"}, {"type": "text", "text": "hello"}]),
        ]
    )
    assert [type(m) for m in converted] == [SystemMessage, HumanMessage, AIMessage]
    assert converted[2].content == "hello"


def test_convert_image_parts():
    converted = convert_ui_messages(
        [
            UIMessage(
                id="u",
                role="user",
                parts=[
                    {"type": "text", "text": "что это?"},
                    {"type": "file", "mediaType": "image/jpeg", "url": "data:image/jpeg;base64,AAAA"},
                    {"type": "file", "mediaType": "application/pdf", "url": "data:application/pdf;base64,BBBB"},
                ],
            )
        ]
    )
    assert converted[0].content == [
        {"type": "text", "text": "что это?"},
        {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,AAAA"}},
    ]


def test_convert_skips_empty_messages():
    converted = convert_ui_messages(
        [
            UIMessage(id="a", role="assistant", parts=[{"type": "step-start"}]),
            UIMessage(id="u", role="user", parts=[{"type": "text", "text": "hi"}]),
        ]
    )
    assert len(converted) == 1


def test_assistant_message_parts():
    message = assistant_message("msg-1", "готово")
    assert message.role == "assistant"
    assert extract_text(message) == "готово"
