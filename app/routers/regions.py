from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.engine import Engine

from app.database import get_engine
from app.exceptions import QueryError
from app.models.levels import Level
from app.models.responses import WilayahItem
from app.services.wilayah import get_detail, list_children, list_items

router = APIRouter()


def _list(engine: Engine, level: Level, search: Optional[str], page: Optional[str], limit: Optional[str]):
    try:
        return list_items(engine, level, search, page, limit)
    except QueryError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _detail(engine: Engine, level: Level, item_id: str):
    try:
        return get_detail(engine, level, item_id)
    except QueryError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _children(engine: Engine, parent: Level, parent_id: str):
    try:
        return list_children(engine, parent, parent_id)
    except QueryError as e:
        raise HTTPException(status_code=500, detail=str(e))


# ==================
# PROVINSI
# ==================

@router.get("/provinsi", response_model=List[WilayahItem])
def get_provinsi(
    search: Optional[str] = Query(None, description="Cari berdasarkan nama provinsi"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    engine: Engine = Depends(get_engine),
):
    return _list(engine, Level.PROVINSI, search, page, limit)


@router.get("/provinsi/{item_id}")
def get_detail_provinsi(item_id: str, engine: Engine = Depends(get_engine)):
    return _detail(engine, Level.PROVINSI, item_id)


@router.get("/provinsi/{item_id}/kota", response_model=List[WilayahItem])
def get_kota_by_provinsi(item_id: str, engine: Engine = Depends(get_engine)):
    return _children(engine, Level.PROVINSI, item_id)


# ==================
# KABUPATEN / KOTA
# ==================

@router.get("/kota", response_model=List[WilayahItem])
def get_kota(
    search: Optional[str] = Query(None, description="Cari berdasarkan nama kabupaten/kota"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    engine: Engine = Depends(get_engine),
):
    return _list(engine, Level.KOTA, search, page, limit)


@router.get("/kota/{item_id}")
def get_detail_kota(item_id: str, engine: Engine = Depends(get_engine)):
    return _detail(engine, Level.KOTA, item_id)


@router.get("/kota/{item_id}/kecamatan", response_model=List[WilayahItem])
def get_kecamatan_by_kota(item_id: str, engine: Engine = Depends(get_engine)):
    return _children(engine, Level.KOTA, item_id)


# ==================
# KECAMATAN
# ==================

@router.get("/kecamatan", response_model=List[WilayahItem])
def get_kecamatan(
    search: Optional[str] = Query(None, description="Cari berdasarkan nama kecamatan"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    engine: Engine = Depends(get_engine),
):
    return _list(engine, Level.KECAMATAN, search, page, limit)


@router.get("/kecamatan/{item_id}")
def get_detail_kecamatan(item_id: str, engine: Engine = Depends(get_engine)):
    return _detail(engine, Level.KECAMATAN, item_id)


@router.get("/kecamatan/{item_id}/kelurahan", response_model=List[WilayahItem])
def get_kelurahan_by_kecamatan(item_id: str, engine: Engine = Depends(get_engine)):
    return _children(engine, Level.KECAMATAN, item_id)


# ==================
# KELURAHAN / DESA
# ==================

@router.get("/kelurahan", response_model=List[WilayahItem])
def get_kelurahan(
    search: Optional[str] = Query(None, description="Cari berdasarkan nama kelurahan/desa"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    engine: Engine = Depends(get_engine),
):
    return _list(engine, Level.KELURAHAN, search, page, limit)


@router.get("/kelurahan/{item_id}")
def get_detail_kelurahan(item_id: str, engine: Engine = Depends(get_engine)):
    return _detail(engine, Level.KELURAHAN, item_id)
