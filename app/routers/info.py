from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.engine import Engine

from app.database import get_engine
from app.exceptions import QueryError
from app.models.responses import InfoResponse
from app.services.wilayah import get_info

router = APIRouter()


@router.get("/", response_model=InfoResponse)
def info(engine: Engine = Depends(get_engine)):
    try:
        return get_info(engine)
    except QueryError as e:
        raise HTTPException(status_code=500, detail=str(e))
