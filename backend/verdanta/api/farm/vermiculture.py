# backend/verdanta/api/farm/vermiculture.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.core.auth import require_editor, require_user
from verdanta.core.database import get_db
from verdanta.core.envelope import ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.core.utils_logging import log_user_action
from verdanta.crud import vermiculture as vermi_crud
from verdanta.crud.serializers import system_to_dict
from verdanta.schemas.farm import VermicultureSystemCreate

router = APIRouter(prefix="/vermiculture", tags=["Vermiculture"])


@router.get("")
async def list_systems(db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    try:
        systems = await vermi_crud.list_systems(db)
        return ok(systems, metadata={"total": len(systems)})

    except Exception as exc:
        logger.exception("Vermiculture API error")
        return failure("Failed to fetch vermiculture systems", exc)


@router.post("")
async def create_system(body: VermicultureSystemCreate, db: AsyncSession = Depends(get_db), user=Depends(require_editor)):
    require_fields(name=body.name, location=body.location, capacity=body.capacity)

    try:
        system = await vermi_crud.create_system(db, body)
        log_user_action(str(user.get("sub", "unknown")), "vermiculture_system_created", system.id)
        return ok(system_to_dict(system))

    except Exception as exc:
        logger.exception("Vermiculture system creation error")
        return failure("Failed to create vermiculture system", exc)
