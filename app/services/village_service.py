"""
VillageDirectory - Geographic resolver over the village list.

Maps a village code (the registered location `lgd_code`) to its taluka or
district and the full set of village codes in it. The list is loaded once
from a JSON file and kept in memory; it never changes at runtime.
"""

import json
import logging
from collections import defaultdict
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from app.core.config import get_settings
from app.models.village import DistrictInfo, TalukaInfo, Village

logger = logging.getLogger(__name__)


class VillageServiceError(Exception):
    """Base exception for village lookups."""
    pass


class VillageNotFoundError(VillageServiceError):
    """Raised when a village code is not in the directory."""
    pass


class VillageDirectory:
    def __init__(self, villages: Iterable[Village]):
        self._by_code: dict[int, Village] = {}
        self._by_taluka: dict[int, list[Village]] = defaultdict(list)
        self._by_district: dict[int, list[Village]] = defaultdict(list)

        for village in villages:
            self._by_code.setdefault(village.village_code, village)
            self._by_taluka[village.taluka_code].append(village)
            self._by_district[village.district_code].append(village)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "VillageDirectory":
        """
        Load the directory from a JSON array of village records.

        A missing or malformed file is logged and produces an empty
        directory, so every lookup answers "not found".
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
            villages = [Village(**item) for item in raw]
        except (OSError, ValueError, TypeError, ValidationError) as exc:
            logger.error("Error loading village list from %s: %s", path, exc)
            return cls([])

        logger.info("Loaded %d villages from %s", len(villages), path)
        return cls(villages)

    def __len__(self) -> int:
        return len(self._by_code)

    def _find(self, village_code: Union[int, str, None]) -> Village:
        code = _to_int(village_code)
        village = self._by_code.get(code) if code is not None else None
        if village is None:
            raise VillageNotFoundError(f"Village with code {village_code} not found")
        return village

    def resolve_taluka(self, village_code: Union[int, str]) -> TalukaInfo:
        """Taluka of the village plus every village code in that taluka."""
        village = self._find(village_code)
        members = self._by_taluka[village.taluka_code]

        return TalukaInfo(
            village_code=village.village_code,
            taluka_code=village.taluka_code,
            taluka_name=village.taluka,
            taluka_name_marathi=village.taluka_marathi,
            district_code=village.district_code,
            district_name=village.district,
            district_name_marathi=village.district_marathi,
            total_villages=len(members),
            village_codes=[v.village_code for v in members],
        )

    def resolve_district(self, village_code: Union[int, str]) -> DistrictInfo:
        """District of the village plus every village code in that district."""
        village = self._find(village_code)
        members = self._by_district[village.district_code]

        return DistrictInfo(
            village_code=village.village_code,
            district_code=village.district_code,
            district_name=village.district,
            district_name_marathi=village.district_marathi,
            total_villages=len(members),
            village_codes=[v.village_code for v in members],
        )


def _to_int(value: Union[int, str, None]) -> Optional[int]:
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


@lru_cache()
def get_village_directory() -> VillageDirectory:
    """Directorio cargado una sola vez (FastAPI dependency)"""
    return VillageDirectory.from_file(get_settings().village_list_path)
