"""Form Builder: drag-and-drop form designer service."""

__version__ = "0.1.0"
