from .db_connector import async_session, dispose_engine, engine, get_db

__all__ = ["async_session", "dispose_engine", "engine", "get_db"]
