# src/services/gateway/__init__.py
"""
HTTP шлюз: приложение FastAPI, авторизация, ограничение частоты, обработка ошибок.
"""
