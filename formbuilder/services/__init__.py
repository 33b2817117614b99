# Business logic layer
from formbuilder.services.designer_sessions import (
    DesignerSession,
    DesignerSessionManager,
    get_session_manager,
)
from formbuilder.services.forms import FormService

__all__ = [
    "DesignerSession",
    "DesignerSessionManager",
    "FormService",
    "get_session_manager",
]
