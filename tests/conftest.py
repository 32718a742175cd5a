"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings requiere DATABASE_URL; los tests usan su propio engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_placeholder.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-at-least-32-chars-long")
os.environ.setdefault("JWT_ALGORITHM", "HS256")

import json
import pytest
from typing import AsyncGenerator
from datetime import datetime, timedelta, timezone

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.models.tables import leaderboard, metadata, questions
from app.services.village_service import VillageDirectory


@pytest.fixture(scope="function")
async def test_db(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Provide a clean SQLite database for each test.

    File-backed so that concurrent queries get their own connections.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


async def insert_rows(engine: AsyncEngine, table, rows: list[dict]):
    async with engine.begin() as conn:
        await conn.execute(insert(table), rows)


@pytest.fixture
def sample_villages():
    """Two talukas in district 501, one in 502 and an empty one in 503."""
    return [
        {"village_code": 1001, "village": "Ambegaon", "taluka_code": 11, "taluka": "Haveli",
         "taluka_marathi": "हवेली", "district_code": 501, "district": "Pune", "district_marathi": "पुणे"},
        {"village_code": 1002, "village": "Bhugaon", "taluka_code": 11, "taluka": "Haveli",
         "taluka_marathi": "हवेली", "district_code": 501, "district": "Pune", "district_marathi": "पुणे"},
        {"village_code": 1003, "village": "Chakan", "taluka_code": 12, "taluka": "Khed",
         "taluka_marathi": "खेड", "district_code": 501, "district": "Pune", "district_marathi": "पुणे"},
        {"village_code": 2001, "village": "Dapoli", "taluka_code": 21, "taluka": "Dapoli",
         "taluka_marathi": "दापोली", "district_code": 502, "district": "Ratnagiri", "district_marathi": "रत्नागिरी"},
        {"village_code": 3001, "village": "Erandol", "taluka_code": 31, "taluka": "Erandol",
         "taluka_marathi": "एरंडोल", "district_code": 503, "district": "Jalgaon", "district_marathi": "जळगाव"},
    ]


@pytest.fixture
def village_list_file(tmp_path, sample_villages):
    path = tmp_path / "village_list.json"
    path.write_text(json.dumps(sample_villages, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def village_directory(village_list_file) -> VillageDirectory:
    return VillageDirectory.from_file(village_list_file)


def make_leaderboard_row(unique_id, record_count, lgd_code, **overrides):
    row = {
        "unique_id": unique_id,
        "username": f"user-{unique_id}",
        "registered_location": {"lgd_code": str(lgd_code)},
        "record_count": record_count,
        "farmer_id": None,
        "village_code": str(lgd_code),
        "taluka_code": None,
        "district_code": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def sample_leaderboard_rows():
    """Entries across the sample villages, including rows without unique_id."""
    return [
        make_leaderboard_row("u1", 50, 1001, taluka_code="11", district_code="501", farmer_id="F-1"),
        make_leaderboard_row("u2", 40, 1002, taluka_code="11", district_code="501"),
        make_leaderboard_row("u3", 30, 1003, taluka_code="12", district_code="501", farmer_id="F-3"),
        make_leaderboard_row("u4", 20, 2001, taluka_code="21", district_code="502"),
        make_leaderboard_row(None, 999, 1001, taluka_code="11", district_code="501"),
        make_leaderboard_row("", 888, 1002, taluka_code="11", district_code="501"),
    ]


BASE_ETS = 1700000000000  # 2023-11-14T22:13:20Z


def make_question_row(question_id, **overrides):
    row = {
        "id": question_id,
        "uid": "farmer-1",
        "sid": "session-1",
        "channel": "whatsapp",
        "question_text": "How much urea for wheat?",
        "answer_text": "Apply 120 kg/ha in split doses.",
        "question_source": "voice",
        "groupdetails": None,
        "ets": BASE_ETS,
        "created_at": datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


QUESTION_IDS = [
    "3f2b8c1e-9a4d-4e6b-8c2a-1d5e7f9a0b1c",
    "7a1c2d3e-4f5a-4b6c-9d7e-8f9a0b1c2d3e",
    "b2c3d4e5-f6a7-4890-abcd-ef0123456789",
    "c3d4e5f6-a7b8-4901-8cde-f01234567890",
    "d4e5f6a7-b8c9-4012-9def-012345678901",
]


@pytest.fixture
def sample_question_rows():
    """Five questions, one of them unanswered."""
    base = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
    return [
        make_question_row(QUESTION_IDS[0], ets=BASE_ETS, created_at=base),
        make_question_row(
            QUESTION_IDS[1],
            question_text="Best time to sow soybean?",
            answer_text="Sow after 100 mm of monsoon rain.",
            channel="ivr",
            ets=BASE_ETS + 86_400_000,
            created_at=base + timedelta(days=1),
        ),
        make_question_row(
            QUESTION_IDS[2],
            uid="farmer-2",
            sid="session-2",
            question_text="Pest on cotton leaves",
            answer_text="Looks like whitefly, spray neem oil.",
            ets=BASE_ETS + 2 * 86_400_000,
            created_at=base + timedelta(days=2),
        ),
        make_question_row(
            QUESTION_IDS[3],
            uid="farmer-2",
            sid="session-3",
            question_text="Mandi price for onion?",
            answer_text=None,
            ets=BASE_ETS + 3 * 86_400_000,
            created_at=base + timedelta(days=3),
        ),
        make_question_row(
            QUESTION_IDS[4],
            uid="farmer-3",
            sid="session-4",
            question_text="Drip irrigation subsidy",
            answer_text="Apply on the MahaDBT portal.",
            channel="app",
            ets=BASE_ETS + 4 * 86_400_000,
            created_at=base + timedelta(days=4),
        ),
    ]


@pytest.fixture
async def seeded_db(test_db, sample_leaderboard_rows, sample_question_rows):
    await insert_rows(test_db, leaderboard, sample_leaderboard_rows)
    await insert_rows(test_db, questions, sample_question_rows)
    return test_db


@pytest.fixture
def leaderboard_row():
    """Factory for leaderboard rows: leaderboard_row("u9", 10, 1001, ...)."""
    return make_leaderboard_row


@pytest.fixture
def question_row():
    """Factory for question rows: question_row(uuid, ...)."""
    return make_question_row


@pytest.fixture
def question_ids():
    return list(QUESTION_IDS)


@pytest.fixture
def db_insert(test_db):
    """await db_insert(table, rows) against the test database."""
    async def _insert(table, rows: list[dict]):
        await insert_rows(test_db, table, rows)
    return _insert
