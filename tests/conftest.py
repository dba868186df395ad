import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.main import create_app

PROVINSI = [
    (1, "Aceh"),
    (2, "Sumatera Utara"),
    (3, "Sumatera Barat"),
    (4, "Riau"),
    (5, "Jambi"),
    (6, "Sumatera Selatan"),
    (7, "Bengkulu"),
    (8, "Lampung"),
    (9, "Kepulauan Bangka Belitung"),
    (10, "Kepulauan Riau"),
    (11, "DKI Jakarta"),
    (12, "Jawa Barat"),
]

# (id, provinsi_id, nama)
KAB_KOTA = [
    (1, 12, "Kota Bandung"),
    (2, 12, "Kabupaten Bogor"),
    (3, 11, "Kota Administrasi Jakarta Selatan"),
]

# (id, provinsi_id, kab_kota_id, nama)
KECAMATAN = [
    (1, 12, 1, "Coblong"),
    (2, 12, 1, "Sukajadi"),
    (3, 12, 2, "Cibinong"),
]

# (id, provinsi_id, kab_kota_id, kecamatan_id, nama)
KELURAHAN = [
    (1, 12, 1, 1, "Dago"),
    (2, 12, 1, 1, "Lebak Siliwangi"),
    (3, 12, 1, 2, "Sukabungah"),
]


def make_engine(skip_tables=(), kelurahan_provinsi_column=True):
    """In-memory SQLite database shaped like the imported wilayah dataset."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    kelurahan_prov_col = "provinsi_id INTEGER, " if kelurahan_provinsi_column else ""
    schema = {
        "provinsis": "CREATE TABLE provinsis (id INTEGER PRIMARY KEY, nama_provinsi TEXT)",
        "kab_kotas": "CREATE TABLE kab_kotas (id INTEGER PRIMARY KEY, provinsi_id INTEGER, nama_kab_kota TEXT)",
        "kecamatans": (
            "CREATE TABLE kecamatans (id INTEGER PRIMARY KEY, provinsi_id INTEGER, "
            "kab_kota_id INTEGER, nama_kecamatan TEXT)"
        ),
        "kelurahan_desas": (
            f"CREATE TABLE kelurahan_desas (id INTEGER PRIMARY KEY, {kelurahan_prov_col}"
            "kab_kota_id INTEGER, kecamatan_id INTEGER, nama_kelurahan_desa TEXT)"
        ),
    }

    with engine.begin() as conn:
        for table, ddl in schema.items():
            if table not in skip_tables:
                conn.execute(text(ddl))

        if "provinsis" not in skip_tables:
            conn.execute(
                text("INSERT INTO provinsis (id, nama_provinsi) VALUES (:id, :nama)"),
                [{"id": i, "nama": n} for i, n in PROVINSI],
            )
        if "kab_kotas" not in skip_tables:
            conn.execute(
                text("INSERT INTO kab_kotas (id, provinsi_id, nama_kab_kota) VALUES (:id, :prov, :nama)"),
                [{"id": i, "prov": p, "nama": n} for i, p, n in KAB_KOTA],
            )
        if "kecamatans" not in skip_tables:
            conn.execute(
                text(
                    "INSERT INTO kecamatans (id, provinsi_id, kab_kota_id, nama_kecamatan) "
                    "VALUES (:id, :prov, :kab, :nama)"
                ),
                [{"id": i, "prov": p, "kab": k, "nama": n} for i, p, k, n in KECAMATAN],
            )
        if "kelurahan_desas" not in skip_tables:
            if kelurahan_provinsi_column:
                conn.execute(
                    text(
                        "INSERT INTO kelurahan_desas (id, provinsi_id, kab_kota_id, kecamatan_id, nama_kelurahan_desa) "
                        "VALUES (:id, :prov, :kab, :kec, :nama)"
                    ),
                    [{"id": i, "prov": p, "kab": k, "kec": c, "nama": n} for i, p, k, c, n in KELURAHAN],
                )
            else:
                conn.execute(
                    text(
                        "INSERT INTO kelurahan_desas (id, kab_kota_id, kecamatan_id, nama_kelurahan_desa) "
                        "VALUES (:id, :kab, :kec, :nama)"
                    ),
                    [{"id": i, "kab": k, "kec": c, "nama": n} for i, _, k, c, n in KELURAHAN],
                )
    return engine


@pytest.fixture
def engine():
    engine = make_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine):
    with TestClient(create_app(engine)) as client:
        yield client


@pytest.fixture
def engine_factory():
    engines = []

    def factory(**kwargs):
        engine = make_engine(**kwargs)
        engines.append(engine)
        return engine

    yield factory
    for engine in engines:
        engine.dispose()
