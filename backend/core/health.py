"""Health information used by the API ping endpoint."""

from backend.db.database import Database
from backend.schemas.health import PingResponse


def get_health(database: Database) -> PingResponse:
    """Report liveness plus whether the database answers."""
    database_ok = database.health_check()
    return PingResponse(status="ok" if database_ok else "degraded", database=database_ok)
