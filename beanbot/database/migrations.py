"""Apply the Alembic revisions under ``alembic/`` from the bot process."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from beanbot.config import Settings, get_settings

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def alembic_config(settings: Optional[Settings] = None) -> Config:
    """Alembic config pointing at the project's scripts and the configured database."""

    settings = settings or get_settings()
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return cfg


def should_run_migrations(settings: Optional[Settings] = None) -> bool:
    return (settings or get_settings()).run_migrations_on_startup


async def run_migrations(settings: Optional[Settings] = None) -> None:
    """Upgrade the database to the latest revision."""

    cfg = alembic_config(settings)
    # alembic/env.py drives its own event loop, so it must not run on ours.
    await asyncio.to_thread(command.upgrade, cfg, "head")
