from datetime import datetime
from typing import Any, Optional, Union
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class QuestionRecord(BaseModel):
    """Pregunta/respuesta registrada por la telemetría, lista para la API"""

    id: str
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    channel: Optional[str] = None

    question: Optional[str] = None
    answer: Optional[str] = None
    question_source: Optional[str] = None
    group_details: Optional[Any] = None

    ets: Optional[Union[int, str]] = None
    created_at: Optional[datetime] = None
    date_asked: Optional[str] = None  # Derivado de ets, null si no se puede interpretar

    # Placeholders que consume el frontend; no salen de ninguna query
    has_voice_input: bool = False
    reaction: str = "neutral"

    class Config:
        alias_generator = to_camel
        populate_by_name = True
