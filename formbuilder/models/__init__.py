"""
Form builder models

ORM models (database tables):
    from formbuilder.models import Form, FormSubmission
    from formbuilder.models.orm.forms import Form  # Granular access

Pydantic contracts (API request/response):
    from formbuilder.models import FormCreate, FormPublic
    from formbuilder.models.contracts.elements import ElementInstance  # Granular access

Enums:
    from formbuilder.models import ElementType
    from formbuilder.models.enums import ElementType
"""

# ORM models (database tables)
from formbuilder.models.orm import (
    Base,
    Form,
    FormSubmission,
)

# Pydantic schemas (API request/response) - from contracts/
# Re-export everything from contracts
from formbuilder.models.contracts import *  # noqa: F401, F403

# Enums
from formbuilder.models.enums import (
    DropHalf,
    ElementType,
)
