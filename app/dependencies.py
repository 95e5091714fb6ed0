from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.db.session import get_db_session
from app.services.pipeline.orchestrator import DecryptionOrchestrator


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Database session dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with get_db_session() as session:
        yield session

DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


def get_orchestrator(settings: SettingsDep) -> DecryptionOrchestrator:
    """Orchestrator configured from settings with the default statistic."""
    return DecryptionOrchestrator.from_settings(settings)

OrchestratorDep = Annotated[DecryptionOrchestrator, Depends(get_orchestrator)]
