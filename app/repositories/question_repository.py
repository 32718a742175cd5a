"""
QuestionRepository - SQL access for the questions table.

Listing queries only ever see answered questions (question_text and
answer_text both non-null); get_by_id is the exception.
"""

from typing import Optional

from pydantic import BaseModel
from sqlalchemy import and_, bindparam, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from app.models.tables import questions
from app.repositories.base import SQLRepository

QUESTION_COLUMNS = (
    questions.c.id,
    questions.c.uid.label("user_id"),
    questions.c.sid.label("session_id"),
    questions.c.channel,
    questions.c.question_text.label("question"),
    questions.c.answer_text.label("answer"),
    questions.c.question_source,
    questions.c.groupdetails.label("group_details"),
    questions.c.ets,
    questions.c.created_at,
)


class QuestionFilter(BaseModel):
    """Filtros de listado; todos opcionales y combinados con AND"""

    search: Optional[str] = None
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    start_timestamp: Optional[int] = None
    end_timestamp: Optional[int] = None


def build_conditions(filters: QuestionFilter) -> ColumnElement:
    """
    WHERE clause shared by the count and the page query.

    The search term is bound once and reused across the four ILIKE
    comparisons.
    """
    conditions = [
        questions.c.question_text.isnot(None),
        questions.c.answer_text.isnot(None),
    ]

    if filters.user_id is not None:
        conditions.append(questions.c.uid == filters.user_id)
    if filters.session_id is not None:
        conditions.append(questions.c.sid == filters.session_id)

    if filters.start_timestamp is not None:
        conditions.append(questions.c.ets >= filters.start_timestamp)
    if filters.end_timestamp is not None:
        conditions.append(questions.c.ets <= filters.end_timestamp)

    if filters.search:
        term = bindparam("search_term", value=f"%{filters.search}%")
        conditions.append(
            or_(
                questions.c.question_text.ilike(term),
                questions.c.answer_text.ilike(term),
                questions.c.uid.ilike(term),
                questions.c.channel.ilike(term),
            )
        )

    return and_(*conditions)


class QuestionRepository(SQLRepository):

    async def count(self, filters: QuestionFilter) -> int:
        stmt = select(func.count()).select_from(questions).where(build_conditions(filters))
        return int(await self.fetch_scalar(stmt) or 0)

    async def get_page(self, filters: QuestionFilter, limit: int, offset: int) -> list[dict]:
        stmt = (
            select(*QUESTION_COLUMNS)
            .where(build_conditions(filters))
            .order_by(questions.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self.fetch_all(stmt)

    async def get_by_id(self, question_id: str) -> Optional[dict]:
        """Get a question by id, answered or not."""
        stmt = select(*QUESTION_COLUMNS).where(questions.c.id == question_id)
        return await self.fetch_one(stmt)
