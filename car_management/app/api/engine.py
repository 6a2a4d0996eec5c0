from fastapi import APIRouter, Depends, status

from ..core.security import Principal
from ..schemas.engine import EngineRead, EngineRequest
from ..services.protocols import EngineServiceProtocol
from .deps import get_current_principal, get_engine_service

router = APIRouter(
    prefix="/engine",
    tags=["engine"],
)


@router.get(
    "/{engine_id}",
    response_model=EngineRead,
)
async def get_engine(
    engine_id: str,
    principal: Principal = Depends(get_current_principal),
    service: EngineServiceProtocol = Depends(get_engine_service),
):
    return await service.get_engine(principal, engine_id)


@router.post(
    "",
    response_model=EngineRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_engine(
    data_in: EngineRequest,
    principal: Principal = Depends(get_current_principal),
    service: EngineServiceProtocol = Depends(get_engine_service),
):
    return await service.create_engine(principal, data_in)


# update/delete отвечают 201 с телом: "успех с телом", а не "создано"
@router.put(
    "/{engine_id}",
    response_model=EngineRead,
    status_code=status.HTTP_201_CREATED,
)
async def update_engine(
    engine_id: str,
    data_in: EngineRequest,
    principal: Principal = Depends(get_current_principal),
    service: EngineServiceProtocol = Depends(get_engine_service),
):
    return await service.update_engine(principal, engine_id, data_in)


@router.delete(
    "/{engine_id}",
    response_model=EngineRead,
    status_code=status.HTTP_201_CREATED,
)
async def delete_engine(
    engine_id: str,
    principal: Principal = Depends(get_current_principal),
    service: EngineServiceProtocol = Depends(get_engine_service),
):
    return await service.delete_engine(principal, engine_id)
