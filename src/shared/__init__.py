# src/shared/__init__.py
"""
Общий код между сервисами.

Модули:
- models: DTO запросов/ответов и перечисления
"""

__all__: list[str] = []
