"""
Form Service

Form CRUD actions for the owning user, the public share-url page and the
submission gate. Raises domain exceptions from formbuilder.core.exceptions;
routers translate them into HTTP responses.
"""

import json
import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.core.auth import UserPrincipal
from formbuilder.core.database import DbSession
from formbuilder.core.exceptions import MalformedLayout, NotFound, Unauthenticated, ValidationFailed
from formbuilder.designer import deserialize, lookup, validate_values
from formbuilder.models.contracts.elements import ElementInstance
from formbuilder.models.contracts.forms import (
    FormCreate,
    FormStats,
    SubmissionColumn,
    SubmissionRow,
    SubmissionsTable,
)
from formbuilder.models.orm import Form
from formbuilder.repositories.forms import FormRepository

logger = logging.getLogger(__name__)


def _require_user(user: UserPrincipal | None) -> UserPrincipal:
    if user is None:
        raise Unauthenticated()
    return user


class FormService:
    """Service for managing forms and their submissions."""

    def __init__(self, session: AsyncSession):
        """Initialize the service with a database session."""
        self.session = session
        self.repo = FormRepository(session)

    # ==================== OWNER ACTIONS ====================

    async def create_form(self, user: UserPrincipal | None, data: FormCreate) -> Form:
        """
        Create an empty, unpublished form.

        Raises:
            Unauthenticated: If there is no current user
            ValidationFailed: If the user already has a form with this name
        """
        user = _require_user(user)
        try:
            form = await self.repo.create_form(user.user_id, data.name, data.description)
        except IntegrityError as e:
            raise ValidationFailed(
                f"A form named '{data.name}' already exists", invalid_fields=["name"]
            ) from e

        logger.info(f"Created form {form.id} '{form.name}' for user {user.user_id}")
        return form

    async def list_forms(self, user: UserPrincipal | None) -> list[Form]:
        user = _require_user(user)
        return await self.repo.list_forms(user.user_id)

    async def get_form(self, user: UserPrincipal | None, form_id: int) -> Form:
        """
        Get one of the user's forms.

        Raises:
            Unauthenticated: If there is no current user
            NotFound: If the form does not exist or belongs to someone else
        """
        user = _require_user(user)
        form = await self.repo.get_form(form_id, user.user_id)
        if form is None:
            raise NotFound()
        return form

    async def update_form_content(
        self, user: UserPrincipal | None, form_id: int, content: str
    ) -> Form:
        """
        Replace a form's stored layout.

        Args:
            user: Current user
            form_id: Form to update
            content: Serialized layout; must parse as a layout

        Raises:
            MalformedLayout: If content is not a valid layout
            ValidationFailed: If the form is already published
        """
        form = await self.get_form(user, form_id)
        if form.published:
            raise ValidationFailed("Published forms cannot be edited")

        # Parse before storing so the public page never gets content it cannot render
        deserialize(content)

        form = await self.repo.update_content(form, content)
        logger.info(f"Saved content of form {form.id}")
        return form

    async def publish_form(self, user: UserPrincipal | None, form_id: int) -> Form:
        form = await self.get_form(user, form_id)
        if form.published:
            return form
        form = await self.repo.publish(form)
        logger.info(f"Published form {form.id} at share url {form.share_url}")
        return form

    # ==================== PUBLIC PAGE ====================

    async def get_form_by_url(self, share_url: str) -> tuple[Form, list[ElementInstance]]:
        """
        Load a published form for its public page, counting the visit.

        Returns:
            The form and its parsed layout

        Raises:
            NotFound: If no published form has this share url
            MalformedLayout: If the stored content cannot be parsed
        """
        form = await self.repo.increment_visits(share_url)
        if form is None:
            raise NotFound()
        return form, self._load_layout(form)

    async def submit_form(self, share_url: str, values: dict[str, str]) -> None:
        """
        Validate and store a submission.

        Every element of the layout is checked with its variant predicate,
        the same check the designer preview runs.

        Raises:
            NotFound: If no published form has this share url
            ValidationFailed: With the ids of rejected elements
        """
        form = await self.repo.get_published_by_share_url(share_url)
        if form is None:
            raise NotFound()

        invalid = validate_values(self._load_layout(form), values)
        if invalid:
            logger.debug(f"Rejected submission for form {form.id}: {invalid}")
            raise ValidationFailed("Please check the form for errors", invalid_fields=invalid)

        submission = await self.repo.add_submission(share_url, json.dumps(values))
        if submission is None:
            # Form was unpublished or removed between the read and the write
            raise NotFound()
        logger.info(f"Stored submission {submission.id} for form {form.id}")

    # ==================== STATS ====================

    async def get_form_stats(
        self, user: UserPrincipal | None, form_id: int | None = None
    ) -> FormStats:
        """
        Visit and submission statistics.

        Args:
            user: Current user
            form_id: One form, or None for totals across all the user's forms
        """
        user = _require_user(user)
        if form_id is None:
            visits, submissions = await self.repo.get_stats(user.user_id)
        else:
            form = await self.get_form(user, form_id)
            visits, submissions = form.visits, form.submissions
        return FormStats.from_totals(visits, submissions)

    async def get_submissions_table(
        self, user: UserPrincipal | None, form_id: int
    ) -> SubmissionsTable:
        """
        Lay out a form's submissions as a table.

        Columns are the form's input elements in layout order; each row holds
        the submitted values keyed by element id.
        """
        user = _require_user(user)
        form = await self.repo.get_form_with_submissions(form_id, user.user_id)
        if form is None:
            raise NotFound()

        columns = [
            SubmissionColumn(
                id=element.id,
                label=element.extra_attributes.get("label", ""),
                required=bool(element.extra_attributes.get("required", False)),
                type=element.type,
            )
            for element in self._load_layout(form)
            if lookup(element.type).is_input
        ]
        rows = [
            SubmissionRow(values=json.loads(submission.content), submitted_at=submission.created_at)
            for submission in form.form_submissions
        ]
        return SubmissionsTable(form_id=form.id, columns=columns, rows=rows)

    @staticmethod
    def _load_layout(form: Form) -> list[ElementInstance]:
        try:
            return deserialize(form.content)
        except MalformedLayout:
            logger.error(f"Stored content of form {form.id} is not a valid layout")
            raise


def get_form_service(db: DbSession) -> FormService:
    """FastAPI dependency building a FormService on the request's session."""
    return FormService(db)


FormServiceDep = Annotated[FormService, Depends(get_form_service)]
