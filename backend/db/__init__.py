from backend.db.database import Base, Database

__all__ = ["Base", "Database"]
