"""
SQLAlchemy ORM Models for the form builder

Pure database models using SQLAlchemy 2.0 declarative style.
These models define the database schema and relationships.

For API schemas (Create/Public), see formbuilder.models.contracts
"""

from formbuilder.models.orm.base import Base
from formbuilder.models.orm.forms import Form, FormSubmission

__all__ = [
    # Base
    "Base",
    # Forms
    "Form",
    "FormSubmission",
]
