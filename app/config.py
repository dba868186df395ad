import logging
import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

from app.exceptions import StartupError

logger = logging.getLogger(__name__)

# load environment variables
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)


def get_env(key: str, default: str, secret: bool = False) -> str:
    value = os.getenv(key)
    if value:
        return value
    if secret:
        logger.info("Environment variable %s not set, using default value", key)
    else:
        logger.info("Environment variable %s not set, using default value: %s", key, default)
    return default


DRIVERS = {
    "mysql": {"drivername": "mysql+pymysql", "port": "3306"},
    "postgres": {"drivername": "postgresql+psycopg2", "port": "5432"},
}

DB_DRIVER = get_env("DB_DRIVER", "mysql")
DB_USERNAME = get_env("DB_USERNAME", "root")
DB_PASSWORD = get_env("DB_PASSWORD", "", secret=True)
DB_HOST = get_env("DB_HOST", "localhost")
DB_PORT = get_env("DB_PORT", DRIVERS.get(DB_DRIVER, DRIVERS["mysql"])["port"])
DB_DATABASE = get_env("DB_DATABASE", "db_wilayah")
DB_SSLMODE = get_env("DB_SSLMODE", "require")

HOST = get_env("HOST", "0.0.0.0")
PORT = int(get_env("PORT", "8080"))
CORS_ORIGINS = [o.strip() for o in get_env("CORS_ORIGINS", "*").split(",") if o.strip()]


def build_database_url(
    driver: str = DB_DRIVER,
    username: str = DB_USERNAME,
    password: str = DB_PASSWORD,
    host: str = DB_HOST,
    port: str = DB_PORT,
    database: str = DB_DATABASE,
    sslmode: str = DB_SSLMODE,
) -> URL:
    """Connection URL for one of the supported drivers (mysql, postgres)."""
    if driver not in DRIVERS:
        raise StartupError(f"Unsupported DB_DRIVER {driver!r}, expected one of: {', '.join(DRIVERS)}")

    try:
        port_number = int(port)
    except ValueError:
        raise StartupError(f"Invalid DB_PORT {port!r}")

    query = {"sslmode": sslmode} if driver == "postgres" and sslmode else {}
    return URL.create(
        DRIVERS[driver]["drivername"],
        username=username,
        password=password or None,
        host=host,
        port=port_number,
        database=database,
        query=query,
    )
