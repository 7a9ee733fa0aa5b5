"""MyTask: a personal task tracker with tags, due dates and local persistence."""

__version__ = "0.1.0"
