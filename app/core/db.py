from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings


def create_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Создание асинхронного движка"""
    engine = create_async_engine(database_url, future=True, **kwargs)

    if engine.dialect.name == "sqlite":
        # SQLite не проверяет внешние ключи без этой настройки
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# Асинхронный движок
engine = create_engine(settings.database_url, echo=settings.sql_echo)

# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session
