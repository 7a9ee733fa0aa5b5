from __future__ import annotations

from typing import TYPE_CHECKING

from .config import Settings, settings
from .controller import AppController
from .core.repositories.implementations.json_file import JsonFileKeyValueStore
from .core.repositories.state_repository import StateRepository
from .platform.history import InMemoryHistory
from .platform.prompts import StaticPrompter
from .platform.scheduler import AsyncioScheduler
from .utils.logging import setup_logging

if TYPE_CHECKING:
    from .core.repositories.kv_store import KeyValueStore
    from .platform.history import HistoryPort
    from .platform.prompts import Prompter
    from .platform.scheduler import Scheduler


def create_app(
    config: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    history: HistoryPort | None = None,
    prompter: Prompter | None = None,
    scheduler: Scheduler | None = None,
) -> AppController:
    """Build and start an application controller.

    Defaults: JSON file storage at ``storage_path``, an in-memory history
    stack, a prompter that confirms everything and the running asyncio loop
    for timers, so signing in needs a running loop unless a scheduler is
    passed.
    """
    cfg = config or settings
    setup_logging(cfg.log_level)

    repo = StateRepository(
        store or JsonFileKeyValueStore(cfg.storage_path),
        email_key=cfg.email_key,
        tasks_key=cfg.tasks_key,
        tags_key=cfg.tags_key,
    )
    app = AppController(
        repo,
        history or InMemoryHistory(),
        prompter or StaticPrompter(),
        scheduler or AsyncioScheduler(),
        welcome_delay=cfg.welcome_delay_seconds,
    )
    app.start()
    return app
