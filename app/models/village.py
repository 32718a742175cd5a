from typing import Optional
from pydantic import BaseModel


class Village(BaseModel):
    """Registro del listado de aldeas (village_list.json)"""

    village_code: int
    village: Optional[str] = None

    taluka_code: int
    taluka: Optional[str] = None
    taluka_marathi: Optional[str] = None

    district_code: int
    district: Optional[str] = None
    district_marathi: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "ignore"


class DistrictInfo(BaseModel):
    """Distrito de una aldea y todas las aldeas que lo componen"""

    village_code: int
    district_code: int
    district_name: Optional[str] = None
    district_name_marathi: Optional[str] = None
    total_villages: int
    village_codes: list[int]


class TalukaInfo(BaseModel):
    """Taluka de una aldea y todas las aldeas que la componen"""

    village_code: int
    taluka_code: int
    taluka_name: Optional[str] = None
    taluka_name_marathi: Optional[str] = None
    district_code: int
    district_name: Optional[str] = None
    district_name_marathi: Optional[str] = None
    total_villages: int
    village_codes: list[int]
