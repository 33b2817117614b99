"""
Enumeration types used across the application.
"""

from enum import Enum


class ElementType(str, Enum):
    """Form element types available in the designer palette"""
    TEXT_FIELD = "TextField"
    TITLE_FIELD = "TitleField"
    SUBTITLE_FIELD = "SubTitleField"
    PARAGRAPH_FIELD = "ParagraphField"
    SPACER_FIELD = "SpacerField"
    NUMBER_FIELD = "NumberField"
    TEXTAREA_FIELD = "TextAreaField"
    DATE_FIELD = "DateField"
    SELECT_FIELD = "SelectField"
    CHECKBOX_FIELD = "CheckboxField"


class DropHalf(str, Enum):
    """Which half of a rendered element a drag was released over"""
    TOP = "top"
    BOTTOM = "bottom"
