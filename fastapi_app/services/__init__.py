"""
Сервисы: реестр моделей, LLM шлюз, потоковые ответы и названия чатов
"""
