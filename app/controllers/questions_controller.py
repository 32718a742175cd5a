"""
Controlador de preguntas - Log de preguntas/respuestas

Listado con búsqueda, filtro por fechas y paginación; búsqueda por id,
por usuario y por sesión.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.core.dependencies import Database, QuestionParams
from app.models.question import QuestionRecord
from app.schemas.question_query import InvalidQueryError, QuestionQuery, parse_identifier
from app.services.question_service import (
    InvalidQuestionIdError,
    QuestionNotFoundError,
    QuestionPage,
    QuestionService,
)
from app.utils.pagination import Pagination


router = APIRouter(tags=["questions"])


class DateFilters(BaseModel):
    """Filtros aplicados (se devuelven tal cual para que el frontend los muestre)."""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    applied_start_timestamp: Optional[int] = None
    applied_end_timestamp: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_query(cls, query: QuestionQuery, **extra):
        return cls(
            start_date=query.date_range.start_date,
            end_date=query.date_range.end_date,
            applied_start_timestamp=query.date_range.start_timestamp,
            applied_end_timestamp=query.date_range.end_timestamp,
            **extra,
        )


class SearchFilters(DateFilters):
    search: Optional[str] = None


class UserFilters(DateFilters):
    user_id: str


class SessionFilters(DateFilters):
    session_id: str


class QuestionListResponse(BaseModel):
    """Página de preguntas."""
    success: bool = True
    data: list[QuestionRecord]
    pagination: Pagination


class SearchQuestionListResponse(QuestionListResponse):
    filters: SearchFilters


class UserQuestionListResponse(QuestionListResponse):
    filters: UserFilters


class SessionQuestionListResponse(QuestionListResponse):
    filters: SessionFilters


class QuestionDetailResponse(BaseModel):
    success: bool = True
    data: QuestionRecord


def _required_identifier(name: str, value: str) -> str:
    try:
        return parse_identifier(name, value)
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/questions", response_model=SearchQuestionListResponse)
async def get_questions(db: Database, query: QuestionParams):
    """
    Obtener preguntas respondidas.

    Parámetros: page, limit (1-100), search, startDate, endDate
    (timestamp en ms o fecha ISO).
    """
    question_service = QuestionService(db)
    result: QuestionPage = await question_service.list_questions(query)

    return SearchQuestionListResponse(
        data=result.questions,
        pagination=result.pagination,
        filters=SearchFilters.from_query(query, search=query.search),
    )


@router.get("/questions/{question_id}", response_model=QuestionDetailResponse)
async def get_question(question_id: str, db: Database):
    """Obtener una pregunta por su ID (UUID)."""
    question_service = QuestionService(db)

    try:
        question = await question_service.get_question(question_id)
    except InvalidQuestionIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except QuestionNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found")

    return QuestionDetailResponse(data=question)


@router.get("/users/{user_id}/questions", response_model=UserQuestionListResponse)
async def get_questions_by_user(user_id: str, db: Database, query: QuestionParams):
    """Obtener las preguntas de un usuario."""
    user_id = _required_identifier("User ID", user_id)

    question_service = QuestionService(db)
    result = await question_service.list_by_user(user_id, query)

    return UserQuestionListResponse(
        data=result.questions,
        pagination=result.pagination,
        filters=UserFilters.from_query(query, user_id=user_id),
    )


@router.get("/sessions/{session_id}/questions", response_model=SessionQuestionListResponse)
async def get_questions_by_session(session_id: str, db: Database, query: QuestionParams):
    """Obtener las preguntas de una sesión."""
    session_id = _required_identifier("Session ID", session_id)

    question_service = QuestionService(db)
    result = await question_service.list_by_session(session_id, query)

    return SessionQuestionListResponse(
        data=result.questions,
        pagination=result.pagination,
        filters=SessionFilters.from_query(query, session_id=session_id),
    )
