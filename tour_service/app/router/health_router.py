from fastapi import APIRouter, Depends

from shared.core.config import Settings, get_settings
from shared.core.database import get_storage
from ..crud import system_crud as crud
from ..schemas.system_schemas import HealthOut

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthOut, response_model_exclude_none=True)
def health(storage=Depends(get_storage), settings: Settings = Depends(get_settings)):
    return crud.get_health(storage, settings)
