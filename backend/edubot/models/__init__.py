"""
SQLAlchemy models. Import here so Alembic, init_db and the services can use them.
"""
from edubot.models.textbook import Textbook
from edubot.models.passage_set import PassageSet
from edubot.models.textbook_passage_mapping import TextbookPassageMapping
from edubot.models.question import Question
from edubot.models.system_prompt import SystemPrompt, SystemPromptVersion

__all__ = [
    "Textbook",
    "PassageSet",
    "TextbookPassageMapping",
    "Question",
    "SystemPrompt",
    "SystemPromptVersion",
]
