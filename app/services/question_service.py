"""
QuestionService - Paginated browsing of the question/answer log.
"""

import asyncio
from typing import Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import Settings, get_settings
from app.models.question import QuestionRecord
from app.repositories.question_repository import QuestionFilter, QuestionRepository
from app.schemas.question_query import QuestionQuery, is_valid_question_id
from app.utils.dates import derive_date_asked
from app.utils.pagination import Pagination


class QuestionServiceError(Exception):
    """Base exception for question service errors."""
    pass


class InvalidQuestionIdError(QuestionServiceError):
    """Raised when a question id is not a canonical UUID."""
    pass


class QuestionNotFoundError(QuestionServiceError):
    """Raised when a question does not exist."""
    pass


class QuestionPage(BaseModel):
    questions: list[QuestionRecord]
    pagination: Pagination


def format_question(row: dict) -> QuestionRecord:
    """Row -> API record, adding dateAsked and the placeholder fields."""
    return QuestionRecord(
        **row,
        date_asked=derive_date_asked(row.get("ets")),
        has_voice_input=False,
        reaction="neutral",
    )


class QuestionService:
    def __init__(self, db: AsyncEngine, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.repo = QuestionRepository(db, self.settings.query_timeout_seconds)

    async def _paginate(self, filters: QuestionFilter, query: QuestionQuery) -> QuestionPage:
        # Both queries must succeed; gather re-raises the first failure
        total, rows = await asyncio.gather(
            self.repo.count(filters),
            self.repo.get_page(filters, query.limit, query.offset),
        )

        return QuestionPage(
            questions=[format_question(r) for r in rows],
            pagination=Pagination.build(query.page, query.limit, total),
        )

    async def list_questions(self, query: QuestionQuery) -> QuestionPage:
        """Answered questions, optionally searched and date-filtered."""
        filters = QuestionFilter(
            search=query.search,
            start_timestamp=query.date_range.start_timestamp,
            end_timestamp=query.date_range.end_timestamp,
        )
        return await self._paginate(filters, query)

    async def list_by_user(self, user_id: str, query: QuestionQuery) -> QuestionPage:
        filters = QuestionFilter(
            user_id=user_id,
            start_timestamp=query.date_range.start_timestamp,
            end_timestamp=query.date_range.end_timestamp,
        )
        return await self._paginate(filters, query)

    async def list_by_session(self, session_id: str, query: QuestionQuery) -> QuestionPage:
        filters = QuestionFilter(
            session_id=session_id,
            start_timestamp=query.date_range.start_timestamp,
            end_timestamp=query.date_range.end_timestamp,
        )
        return await self._paginate(filters, query)

    async def get_question(self, question_id: str) -> QuestionRecord:
        """
        Get a single question by UUID.

        The id is validated before any query runs.
        """
        if not is_valid_question_id(question_id):
            raise InvalidQuestionIdError("Invalid question ID format. Must be a valid UUID.")

        row = await self.repo.get_by_id(question_id)
        if not row:
            raise QuestionNotFoundError(f"Question {question_id} not found")
        return format_question(row)
