"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from weather_api.llm.prompts.weather_prompts import get_weather_advice_prompt

__all__ = [
    "get_weather_advice_prompt",
]
