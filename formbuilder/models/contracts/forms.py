"""
Form contract models for the form builder.
"""

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

from formbuilder.config import get_settings
from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.enums import ElementType


# ==================== FORM MODELS ====================


class FormCreate(BaseModel):
    """Input for creating a form."""
    name: str = Field(..., min_length=4, max_length=255)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if len(stripped) < 4:
            raise ValueError("name must be at least 4 characters")
        return stripped


class UpdateFormContentRequest(BaseModel):
    """Request model for saving a layout built outside a designer session"""
    content: str = Field(..., description="Serialized layout (JSON array of elements)")


class FormPublic(BaseModel):
    """Form output for API responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    published: bool
    content: str
    visits: int
    submissions: int
    share_url: str
    created_at: datetime | None = None

    @field_serializer("created_at")
    def serialize_dt(self, dt: datetime | None) -> str | None:
        return dt.isoformat() if dt else None

    @computed_field
    @property
    def share_link(self) -> str:
        """Public submission link for this form."""
        return get_settings().share_link(self.share_url)


class PublicFormResponse(BaseModel):
    """What the public submission page needs to render a form"""
    share_url: str
    elements: list[ElementInstance]


class FormSubmitRequest(BaseModel):
    """Submitted values keyed by element id"""
    values: dict[str, str] = Field(default_factory=dict)


class FormSubmitResponse(BaseModel):
    submitted: bool = True


# ==================== STATS ====================


class FormStats(BaseModel):
    """Visit/submission totals and the rates derived from them"""
    visits: int = 0
    submissions: int = 0
    submission_rate: int = Field(default=0, description="Rounded percentage of visits that submitted")
    bounce_rate: int = Field(default=100, description="100 - submission_rate")

    @classmethod
    def from_totals(cls, visits: int | None, submissions: int | None) -> "FormStats":
        visits = visits or 0
        submissions = submissions or 0
        # Half-up rounding, so 12.5% reports as 13
        submission_rate = math.floor(submissions / visits * 100 + 0.5) if visits > 0 else 0
        return cls(
            visits=visits,
            submissions=submissions,
            submission_rate=submission_rate,
            bounce_rate=100 - submission_rate,
        )


# ==================== SUBMISSIONS ====================


class SubmissionColumn(BaseModel):
    id: str
    label: str
    required: bool
    type: ElementType


class SubmissionRow(BaseModel):
    values: dict[str, Any]
    submitted_at: datetime

    @field_serializer("submitted_at")
    def serialize_dt(self, dt: datetime) -> str:
        return dt.isoformat()


class SubmissionsTable(BaseModel):
    """Submissions of one form laid out as a table"""
    form_id: int
    columns: list[SubmissionColumn]
    rows: list[SubmissionRow]
