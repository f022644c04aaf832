from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import declarative_base

# Базовый класс для моделей
Base = declarative_base()


async def init_models(engine: AsyncEngine) -> None:
    """Создание таблиц для всех зарегистрированных моделей"""
    import app.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
