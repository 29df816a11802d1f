"""
Промпты для LLM
"""

from .title import title_prompt

__all__ = ["title_prompt"]
