# Data access layer - PostgreSQL repositories
from formbuilder.repositories.base import BaseRepository
from formbuilder.repositories.forms import FormRepository

__all__ = [
    "BaseRepository",
    "FormRepository",
]
