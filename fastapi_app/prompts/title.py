"""
Промпт генерации названия чата
"""

from langchain_core.prompts import ChatPromptTemplate

title_prompt = ChatPromptTemplate.from_messages([
    ("system", """Ты - генератор названий для чатов.

Требования:
- Сформулируй краткое название беседы по первому вопросу пользователя
- Не более {max_length} символов
- Пиши на языке вопроса
- Выводи ТОЛЬКО название, без кавычек, пояснений и знаков препинания в конце"""),
    ("human", "Вопрос пользователя: {text}"),
])
