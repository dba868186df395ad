from pydantic import BaseModel


class WilayahItem(BaseModel):
    id: int
    nama: str


class InfoResponse(BaseModel):
    jumlah_provinsi: int
    jumlah_kabupaten: int
    jumlah_kecamatan: int
    jumlah_kelurahan: int


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: str
    database_connected: bool
    database_backend: str
