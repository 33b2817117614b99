"""
Form Repository

Repository for Form CRUD operations, scoped by owning user, plus the public
share-url lookups used by the submission page.
"""

from sqlalchemy import func, select, update
from sqlalchemy.orm import selectinload

from formbuilder.models.orm import Form as FormORM, FormSubmission as FormSubmissionORM
from formbuilder.repositories.base import BaseRepository


class FormRepository(BaseRepository[FormORM]):
    """
    Form repository.

    Owner-scoped reads filter on ``user_id`` so a form owned by someone else
    looks exactly like a missing one.
    """

    model = FormORM

    async def create_form(self, user_id: str, name: str, description: str | None) -> FormORM:
        return await self.create(
            FormORM(user_id=user_id, name=name, description=description)
        )

    async def get_form(self, form_id: int, user_id: str) -> FormORM | None:
        """
        Get a form by ID if it belongs to the user.

        Args:
            form_id: Form id
            user_id: Owner id from the identity provider

        Returns:
            Form ORM object or None if not found
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == form_id)
            .where(self.model.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_forms(self, user_id: str) -> list[FormORM]:
        """List a user's forms, newest first."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_content(self, form: FormORM, content: str) -> FormORM:
        form.content = content
        return await self.update(form)

    async def publish(self, form: FormORM) -> FormORM:
        form.published = True
        return await self.update(form)

    async def increment_visits(self, share_url: str) -> FormORM | None:
        """
        Count a visit to a published form and return it.

        The counter is bumped in SQL so concurrent visits are not lost.

        Returns:
            The form, or None if no published form has this share url
        """
        result = await self.session.execute(
            update(self.model)
            .where(self.model.share_url == share_url)
            .where(self.model.published.is_(True))
            .values(visits=self.model.visits + 1)
            .returning(self.model)
        )
        return result.scalar_one_or_none()

    async def get_published_by_share_url(self, share_url: str) -> FormORM | None:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.share_url == share_url)
            .where(self.model.published.is_(True))
        )
        return result.scalar_one_or_none()

    async def add_submission(self, share_url: str, content: str) -> FormSubmissionORM | None:
        """
        Store a submission against a published form and bump its counter.

        Args:
            share_url: Public share url of the form
            content: Submitted values as JSON text, stored verbatim

        Returns:
            The stored submission, or None if no published form has this share url
        """
        result = await self.session.execute(
            update(self.model)
            .where(self.model.share_url == share_url)
            .where(self.model.published.is_(True))
            .values(submissions=self.model.submissions + 1)
            .returning(self.model.id)
        )
        form_id = result.scalar_one_or_none()
        if form_id is None:
            return None

        submission = FormSubmissionORM(form_id=form_id, content=content)
        self.session.add(submission)
        await self.session.flush()
        return submission

    async def get_form_with_submissions(self, form_id: int, user_id: str) -> FormORM | None:
        """Get an owned form with its submissions eager-loaded."""
        result = await self.session.execute(
            select(self.model)
            .options(selectinload(self.model.form_submissions))
            .where(self.model.id == form_id)
            .where(self.model.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_stats(self, user_id: str) -> tuple[int, int]:
        """
        Sum visits and submissions across all of a user's forms.

        Returns:
            (visits, submissions), zeros when the user has no forms
        """
        result = await self.session.execute(
            select(
                func.coalesce(func.sum(self.model.visits), 0),
                func.coalesce(func.sum(self.model.submissions), 0),
            ).where(self.model.user_id == user_id)
        )
        visits, submissions = result.one()
        return int(visits), int(submissions)
