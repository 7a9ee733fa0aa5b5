"""Test the application controller end to end with in-memory ports."""
from datetime import date

import pytest

from mytask.controller import AppController
from mytask.core.models.screen import Screen
from mytask.core.models.tag import FALLBACK_TAG_ID, Tag
from mytask.core.models.task import Task
from mytask.core.schemas.draft import Draft
from mytask.core.schemas.views import HomeView, LoginView, NoteEditorView, TagEditorView, WelcomeView


def _methods(history):
    return [r.method for r in history.records]


# -- login flow --

def test_starts_on_login_without_identity(make_app):
    app = make_app()
    assert app.screen is Screen.LOGIN
    assert isinstance(app.current_view(), LoginView)


def test_starts_on_home_with_identity(signed_in_app):
    assert signed_in_app.screen is Screen.HOME


def test_login_welcome_home_uses_replacements(make_app, history, scheduler, store):
    app = make_app()
    assert app.login("user@yopmail.com") is True
    assert app.screen is Screen.WELCOME
    assert isinstance(app.current_view(), WelcomeView)
    assert store.get("mytask_email") == "user@yopmail.com"

    scheduler.advance(2.0)
    assert app.screen is Screen.WELCOME
    scheduler.advance(1.0)
    assert app.screen is Screen.HOME

    # startup stamp + Login->Welcome + Welcome->Home, no pushes
    assert _methods(history) == ["replace", "replace", "replace"]
    assert history.length == 1


def test_invalid_email_stays_on_login(make_app, store):
    app = make_app()
    assert app.login("not-an-email") is False
    assert app.screen is Screen.LOGIN
    assert app.login_view().error
    assert store.get("mytask_email") is None


def test_shutdown_cancels_welcome_timer(make_app, scheduler):
    app = make_app()
    app.login("user@yopmail.com")
    app.shutdown()
    scheduler.advance(10)
    assert app.screen is Screen.WELCOME
    assert scheduler.pending == []


class _NoLoopScheduler:
    def call_later(self, delay, callback):
        raise RuntimeError("no running event loop")


def test_login_without_timer_leaves_user_signed_out(repo, history, prompter, store):
    app = AppController(repo, history, prompter, _NoLoopScheduler())
    app.start()
    with pytest.raises(RuntimeError):
        app.login("user@yopmail.com")
    assert app.screen is Screen.LOGIN
    assert app.state.identity == ""
    assert store.get("mytask_email") is None
    assert history.current == {"screen": "login"}


def test_logout_clears_identity(signed_in_app, store, history):
    assert signed_in_app.logout() is True
    assert signed_in_app.screen is Screen.LOGIN
    assert signed_in_app.state.identity == ""
    assert store.get("mytask_email") is None
    assert history.records[-1].method == "replace"


def test_logout_needs_confirmation(signed_in_app, prompter, store):
    prompter.answer = False
    assert signed_in_app.logout() is False
    assert signed_in_app.screen is Screen.HOME
    assert store.get("mytask_email") == "user@yopmail.com"


# -- note editor --

def test_new_note_save_returns_home(signed_in_app, repo):
    app = signed_in_app
    app.new_note()
    assert app.screen is Screen.EDIT_NOTE
    app.update_draft(title="Buy milk", tag_id="2")
    assert app.save_note() is True
    assert app.screen is Screen.HOME
    assert [t.title for t in app.state.tasks] == ["Buy milk"]
    assert repo.load_tasks() == app.state.tasks
    assert app.state.draft == Draft()


def test_save_with_empty_title_is_rejected(signed_in_app):
    app = signed_in_app
    app.new_note()
    view = app.note_editor_view()
    assert isinstance(view, NoteEditorView)
    assert view.can_save is False
    assert app.save_note() is False
    assert app.screen is Screen.EDIT_NOTE
    assert app.state.tasks == []


def test_edit_existing_task(signed_in_app):
    app = signed_in_app
    app.new_note()
    app.save_note(Draft(title="Draft", tag_id="1"))
    task_id = app.state.tasks[0].id

    assert app.edit_task(task_id) is True
    assert app.note_editor_view().is_editing
    assert app.state.draft.title == "Draft"
    app.update_draft(title="Final", due_date="2026-12-24")
    app.save_note()
    assert app.state.tasks == [Task(id=task_id, title="Final", tag_id="1", due_date="2026-12-24")]
    assert app.screen is Screen.HOME


def test_cancel_note_discards_draft(signed_in_app):
    app = signed_in_app
    app.new_note()
    app.update_draft(title="half typed")
    app.cancel_note()
    assert app.screen is Screen.HOME
    assert app.state.tasks == []
    assert app.state.draft == Draft()


def test_history_back_from_editor_discards_draft(signed_in_app, history):
    app = signed_in_app
    app.new_note()
    app.save_note(Draft(title="Existing"))
    app.edit_task(app.state.tasks[0].id)
    app.update_draft(title="half typed")
    history.back()
    assert app.screen is Screen.HOME
    assert app.state.draft == Draft()
    assert app.state.editing_task_id is None
    assert app.note_editor_view().is_editing is False


def test_malformed_due_date_input_is_rejected(signed_in_app):
    app = signed_in_app
    app.new_note()
    app.update_draft(title="Pay rent")
    assert app.update_draft(title="x", due_date="tomorrow") is False
    assert app.state.draft == Draft(title="Pay rent")
    assert app.save_note() is True
    assert app.state.tasks[0].due_date is None


def test_save_with_malformed_due_date_stays_in_editor(signed_in_app, repo):
    app = signed_in_app
    app.new_note()
    assert app.save_note(Draft.model_construct(title="x", description="", tag_id="1", due_date="tomorrow")) is False
    assert app.screen is Screen.EDIT_NOTE
    assert app.state.tasks == []
    assert repo.load_tasks() == []


def test_delete_from_editor(signed_in_app):
    app = signed_in_app
    app.new_note()
    app.save_note(Draft(title="Temp"))
    app.edit_task(app.state.tasks[0].id)
    assert app.delete_current_task() is True
    assert app.state.tasks == []
    assert app.screen is Screen.HOME


# -- tag editor --

def test_draft_survives_tag_editor_round_trip(signed_in_app, history):
    app = signed_in_app
    app.new_note()
    app.open_tag_editor(Draft(title="Gym session", description="legs", due_date="2026-11-02"))
    assert app.screen is Screen.EDIT_TAG
    assert isinstance(app.current_view(), TagEditorView)

    assert app.save_tag("Sport", "#14B8A6") is True
    assert app.screen is Screen.EDIT_NOTE
    new_tag = app.state.tags[-1]
    assert new_tag.label == "Sport"
    assert app.state.draft == Draft(title="Gym session", description="legs", tag_id=new_tag.id, due_date="2026-11-02")


def test_duplicate_tag_shows_notice(signed_in_app, prompter):
    app = signed_in_app
    app.new_note()
    app.open_tag_editor()
    assert app.save_tag("  boulot ") is False
    assert app.screen is Screen.EDIT_TAG
    assert len(app.state.tags) == 5
    assert prompter.notices == ["This tag already exists."]


def test_cancel_tag_returns_to_editor(signed_in_app):
    app = signed_in_app
    app.new_note()
    app.update_draft(title="keep me")
    app.open_tag_editor()
    app.cancel_tag()
    assert app.screen is Screen.EDIT_NOTE
    assert app.state.draft.title == "keep me"


def test_delete_protected_tag_rejected(signed_in_app, prompter):
    app = signed_in_app
    assert app.delete_tag("1") is False
    assert len(app.state.tags) == 5
    assert prompter.notices == ["Default tags cannot be deleted."]


def test_delete_tag_cascades_and_resets_draft_selection(signed_in_app):
    app = signed_in_app
    app.new_note()
    app.open_tag_editor(Draft(title="Run"))
    app.save_tag("Sport")
    sport_id = app.state.draft.tag_id
    app.save_note()
    app.new_note()
    app.update_draft(tag_id=sport_id)

    assert app.delete_tag(sport_id) is True
    assert app.state.find_tag(sport_id) is None
    assert app.state.tasks[0].tag_id == FALLBACK_TAG_ID
    assert app.state.draft.tag_id == FALLBACK_TAG_ID


# -- home --

def test_home_view_orders_filters_and_counts(store, make_app):
    store.set("mytask_email", "user@yopmail.com")
    app = make_app()
    app.state.tasks = [
        Task(id="1", title="done", tag_id="1", completed=True),
        Task(id="2", title="later", tag_id="4"),
        Task(id="3", title="soon", tag_id="2", due_date="2026-03-01"),
    ]
    view = app.home_view(today=date(2026, 3, 10))
    assert isinstance(view, HomeView)
    assert [c.task.id for c in view.cards] == ["3", "2", "1"]
    assert view.cards[0].overdue is True
    assert view.cards[0].tag.label == "Ecole"
    assert (view.completed_count, view.total_count) == (1, 3)
    assert view.show_empty_state is False

    filtered = app.search("BOULOT")
    assert [c.task.id for c in filtered.cards] == ["2"]
    assert filtered.total_count == 3


def test_empty_state_only_without_query(signed_in_app):
    assert signed_in_app.home_view().show_empty_state is True
    assert signed_in_app.search("zzz").show_empty_state is False


def test_search_resets_when_returning_home(signed_in_app):
    app = signed_in_app
    app.search("milk")
    app.new_note()
    app.cancel_note()
    assert app.query == ""


def test_toggle_and_delete_from_home(signed_in_app, prompter):
    app = signed_in_app
    app.new_note()
    app.save_note(Draft(title="x"))
    task_id = app.state.tasks[0].id

    assert app.toggle_task(task_id) is True
    assert app.state.tasks[0].completed is True

    prompter.answer = False
    assert app.delete_task(task_id) is False
    assert len(app.state.tasks) == 1
    prompter.answer = True
    assert app.delete_task(task_id) is True
    assert app.state.tasks == []
    assert prompter.questions == ["Do you really want to delete this note?"] * 2


def test_state_reloads_from_store(store, make_app, history, prompter, scheduler, repo):
    app = make_app()
    app.login("user@yopmail.com")
    scheduler.advance(3)
    app.new_note()
    app.save_note(Draft(title="persisted"))
    app.shutdown()

    again = AppController(repo, history, prompter, scheduler)
    assert again.state.identity == "user@yopmail.com"
    assert [t.title for t in again.state.tasks] == ["persisted"]
    assert isinstance(again.state.tags[0], Tag)
    assert again.start() is Screen.HOME
