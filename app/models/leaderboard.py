from enum import Enum
from typing import Optional
from pydantic import BaseModel


class LeaderboardScope(str, Enum):
    """Nivel geográfico por el que se filtra /leaderboard/users"""

    DISTRICT = "district"
    TALUKA = "taluka"
    VILLAGE = "village"

    @property
    def column_name(self) -> str:
        return f"{self.value}_code"


class LeaderboardEntry(BaseModel):
    """Fila del ranking (usuario y cantidad de registros)"""

    unique_id: Optional[str] = None
    username: Optional[str] = None
    registered_location: Optional[dict] = None
    record_count: int = 0

    farmer_id: Optional[str] = None

    class Config:
        populate_by_name = True


class ScopedLeaderboardEntry(LeaderboardEntry):
    """Fila del ranking paginado, con los códigos geográficos del usuario"""

    village_code: Optional[str] = None
    taluka_code: Optional[str] = None
    district_code: Optional[str] = None
