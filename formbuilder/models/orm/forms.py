"""
Form and FormSubmission ORM models.

A form stores its layout as serialized JSON text in ``content``; the text is
parsed by the layout serializer, never by SQL.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from formbuilder.models.orm.base import Base


class Form(Base):
    """Form database table."""

    __tablename__ = "forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=text("NOW()")
    )
    published: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("false"))
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    content: Mapped[str] = mapped_column(Text, default="[]", server_default=text("'[]'"))

    # Counters bumped by the public submission page
    visits: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))
    submissions: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))

    share_url: Mapped[str] = mapped_column(
        String(36), unique=True, default=lambda: str(uuid4())
    )

    # Relationships
    form_submissions: Mapped[list["FormSubmission"]] = relationship(
        back_populates="form",
        cascade="all, delete-orphan",
        order_by="FormSubmission.created_at",
    )

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_forms_name_user_id"),
    )


class FormSubmission(Base):
    """Form submission database table."""

    __tablename__ = "form_submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=text("NOW()")
    )
    form_id: Mapped[int] = mapped_column(
        ForeignKey("forms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Submitted values, stored verbatim as JSON text
    content: Mapped[str] = mapped_column(Text)

    # Relationships
    form: Mapped["Form"] = relationship(back_populates="form_submissions")
