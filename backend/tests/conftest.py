"""Shared fixtures: in-memory storage, history, prompts and a manual clock."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

from mytask.controller import AppController
from mytask.core.repositories.implementations.memory import InMemoryKeyValueStore
from mytask.core.repositories.state_repository import StateRepository
from mytask.platform.history import InMemoryHistory
from mytask.platform.prompts import StaticPrompter


@dataclass
class _Timer:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeScheduler:
    """Scheduler driven by an explicit clock instead of an event loop."""

    now: float = 0.0
    timers: list[_Timer] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        timer = _Timer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for timer in list(self.timers):
            if not timer.cancelled and timer.due <= self.now:
                self.timers.remove(timer)
                timer.callback()

    @property
    def pending(self) -> list[_Timer]:
        return [t for t in self.timers if not t.cancelled]


class CountingIds:
    def __init__(self) -> None:
        self.n = 1000

    def __call__(self) -> str:
        self.n += 1
        return str(self.n)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def repo(store):
    return StateRepository(store)


@pytest.fixture
def history():
    return InMemoryHistory()


@pytest.fixture
def prompter():
    return StaticPrompter(answer=True)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def make_app(repo, history, prompter, scheduler):
    def _make(**kwargs) -> AppController:
        app = AppController(
            repo,
            history,
            prompter,
            scheduler,
            welcome_delay=2.5,
            new_id=CountingIds(),
            **kwargs,
        )
        app.start()
        return app

    return _make


@pytest.fixture
def signed_in_app(store, make_app):
    store.set("mytask_email", "user@yopmail.com")
    return make_app()
