"""
Revoke expired sessions once and exit.

Meant to be run by an external scheduler (cron, systemd timer, k8s CronJob).
"""

import asyncio
import logging

from config import ApplicationConfig
from blog_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from blog_auth.app.use_cases.auth import CleanupExpiredSessionsUseCase
from blog_auth.depends import AsyncSessionLocal, engine

logger = logging.getLogger("cleanup_sessions")


async def run() -> int:
    async with AsyncSessionLocal() as session:
        use_case = CleanupExpiredSessionsUseCase(SqlAlchemyUnitOfWork(session))
        result = await use_case.execute()
    await engine.dispose()

    if result.is_err():
        logger.error(f"Session cleanup failed: {result.error.code}")
        return 1
    return 0


def main() -> None:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
