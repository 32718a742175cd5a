"""
SQLAlchemy Core tables.

The tables are owned and populated by the telemetry ingestion pipeline;
this service only reads them.
"""

from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()


leaderboard = Table(
    "leaderboard",
    metadata,
    Column("unique_id", String, nullable=True),
    Column("username", String, nullable=True),
    Column("registered_location", JSON, nullable=True),  # {"lgd_code": "...", ...}
    Column("record_count", Integer, nullable=False, default=0),
    Column("farmer_id", String, nullable=True),
    Column("village_code", String, nullable=True),
    Column("taluka_code", String, nullable=True),
    Column("district_code", String, nullable=True),
)


questions = Table(
    "questions",
    metadata,
    Column("id", String, primary_key=True),  # UUID
    Column("uid", String, nullable=True),
    Column("sid", String, nullable=True),
    Column("channel", String, nullable=True),
    Column("question_text", Text, nullable=True),
    Column("answer_text", Text, nullable=True),
    Column("question_source", String, nullable=True),
    Column("groupdetails", JSON, nullable=True),
    Column("ets", BigInteger, nullable=True),  # epoch en milisegundos
    Column("created_at", DateTime(timezone=True), nullable=True),
)
