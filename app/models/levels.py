from enum import Enum
from typing import Optional, Tuple


class Level(str, Enum):
    """
    The four levels of the administrative hierarchy.

    Table and column names used in SQL come only from here, never from the
    request.
    """

    PROVINSI = "provinsi"
    KOTA = "kota"
    KECAMATAN = "kecamatan"
    KELURAHAN = "kelurahan"

    @property
    def table(self) -> str:
        return _LEVELS[self]["table"]

    @property
    def name_column(self) -> str:
        return _LEVELS[self]["name_col"]

    @property
    def key_column(self) -> Optional[str]:
        """FK column naming this level on the tables below it."""
        return _LEVELS[self]["key_col"]

    @property
    def info_label(self) -> str:
        return _LEVELS[self]["info_label"]

    @property
    def child(self) -> Optional["Level"]:
        levels = list(Level)
        index = levels.index(self)
        return levels[index + 1] if index + 1 < len(levels) else None

    @property
    def descendants(self) -> Tuple["Level", ...]:
        levels = list(Level)
        return tuple(levels[levels.index(self) + 1:])


_LEVELS = {
    Level.PROVINSI: {
        "table": "provinsis",
        "name_col": "nama_provinsi",
        "key_col": "provinsi_id",
        "info_label": "jumlah_provinsi",
    },
    Level.KOTA: {
        "table": "kab_kotas",
        "name_col": "nama_kab_kota",
        "key_col": "kab_kota_id",
        "info_label": "jumlah_kabupaten",
    },
    Level.KECAMATAN: {
        "table": "kecamatans",
        "name_col": "nama_kecamatan",
        "key_col": "kecamatan_id",
        "info_label": "jumlah_kecamatan",
    },
    Level.KELURAHAN: {
        "table": "kelurahan_desas",
        "name_col": "nama_kelurahan_desa",
        "key_col": None,
        "info_label": "jumlah_kelurahan",
    },
}
