# FastAPI Routers
from formbuilder.routers.designer import router as designer_router
from formbuilder.routers.elements import router as elements_router
from formbuilder.routers.forms import router as forms_router
from formbuilder.routers.submit import router as submit_router

__all__ = [
    "designer_router",
    "elements_router",
    "forms_router",
    "submit_router",
]
