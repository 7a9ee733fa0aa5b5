from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from pydantic import ValidationError

from mytask.core.errors import (
    DuplicateTagError,
    EmptyTagLabelError,
    EmptyTitleError,
    InvalidIdentityError,
    InvalidTransitionError,
    ProtectedTagError,
)
from mytask.core.models.screen import Screen
from mytask.core.models.tag import COLOR_PALETTE, FALLBACK_TAG_ID, PROTECTED_TAG_IDS
from mytask.core.schemas.draft import Draft
from mytask.core.schemas.views import (
    HomeView,
    LoginView,
    NoteEditorView,
    TagEditorView,
    TaskCard,
    WelcomeView,
)
from mytask.core.services.ordering import order_tasks, tag_resolver
from mytask.core.services.tag_service import TagService
from mytask.core.services.task_service import TaskService
from mytask.core.state import AppState
from mytask.navigation import Navigator, ScreenChange
from mytask.utils.ids import TimestampIdGenerator
from mytask.utils.logging import get_logger
from mytask.utils.validation import validate_email_format

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from mytask.core.models.tag import Tag
    from mytask.core.models.task import Task
    from mytask.core.repositories.state_repository import StateRepository
    from mytask.platform.history import HistoryPort
    from mytask.platform.prompts import Prompter
    from mytask.platform.scheduler import Scheduler, TimerHandle


logger = get_logger(__name__)

CONFIRM_DELETE_TASK = "Do you really want to delete this note?"
CONFIRM_DELETE_TAG = "Delete this tag?"
CONFIRM_LOGOUT = "Log out?"
NOTICE_DUPLICATE_TAG = "This tag already exists."
NOTICE_PROTECTED_TAG = "Default tags cannot be deleted."


class AppController:
    """Single owner of the application state.

    Screens read view models from the controller and request every change
    through its named operations. Each operation either applies its change
    completely (persisting it and moving the navigator) or returns False
    leaving state untouched.
    """

    def __init__(
        self,
        repo: StateRepository,
        history: HistoryPort,
        prompter: Prompter,
        scheduler: Scheduler,
        *,
        welcome_delay: float = 2.5,
        new_id: Callable[[], str] | None = None,
    ) -> None:
        self._repo = repo
        self._prompter = prompter
        self._scheduler = scheduler
        self._welcome_delay = welcome_delay
        self._welcome_timer: TimerHandle | None = None

        self.state = AppState(
            tasks=repo.load_tasks(),
            tags=repo.load_tags(),
            identity=repo.load_identity(),
        )
        id_source = new_id or TimestampIdGenerator()
        self.tasks = TaskService(self.state, repo, id_source)
        self.tags = TagService(self.state, repo, id_source)
        self.navigator = Navigator(
            history,
            is_signed_in=lambda: self.state.signed_in,
            on_change=self._on_screen_change,
        )
        self.query = ""
        self.login_error: str | None = None

    # -- lifecycle --

    @property
    def screen(self) -> Screen:
        return self.navigator.current

    def start(self) -> Screen:
        screen = self.navigator.start()
        logger.info("Started on %s", screen.value)
        return screen

    def shutdown(self) -> None:
        """Tear down: cancel a pending Welcome advance and stop listening to history."""
        self._cancel_welcome_timer()
        self.navigator.stop()

    def _on_screen_change(self, change: ScreenChange) -> None:
        if change.from_screen is Screen.WELCOME and change.to_screen is not Screen.WELCOME:
            self._cancel_welcome_timer()
        if change.to_screen is Screen.HOME:
            self.query = ""
            if change.from_screen is Screen.EDIT_NOTE:
                # leaving the editor by any route drops the unsaved note
                self.state.draft = Draft()
                self.state.editing_task_id = None

    def _cancel_welcome_timer(self) -> None:
        if self._welcome_timer is not None:
            self._welcome_timer.cancel()
            self._welcome_timer = None

    def _advance_from_welcome(self) -> None:
        self._welcome_timer = None
        if self.screen is Screen.WELCOME:
            self.navigator.navigate(Screen.HOME)

    # -- login / logout --

    def login(self, email: str) -> bool:
        """Remember the identity and show the Welcome screen.

        An invalid address leaves the user on Login with ``login_error`` set.
        The Welcome advance is scheduled before anything changes, so a
        scheduler error (e.g. no running event loop) propagates with the user
        still signed out on Login.
        """
        try:
            self._check_identity(email)
        except InvalidIdentityError as err:
            self.login_error = str(err)
            return False

        timer = self._scheduler.call_later(self._welcome_delay, self._advance_from_welcome)
        try:
            self.navigator.navigate(Screen.WELCOME)
        except InvalidTransitionError:
            timer.cancel()
            raise
        self._cancel_welcome_timer()
        self._welcome_timer = timer

        self.login_error = None
        self.state.identity = email
        self._repo.save_identity(email)
        logger.info("Signed in", extra={"email": email})
        return True

    @staticmethod
    def _check_identity(email: str) -> None:
        ok, error = validate_email_format(email)
        if not ok:
            raise InvalidIdentityError(error)

    def logout(self) -> bool:
        if not self._prompter.confirm(CONFIRM_LOGOUT):
            return False
        self.state.identity = ""
        self._repo.clear_identity()
        logger.info("Signed out")
        self.navigator.navigate(Screen.LOGIN)
        return True

    # -- home --

    def search(self, query: str) -> HomeView:
        self.query = query
        return self.home_view()

    def visible_tasks(self, query: str | None = None) -> list[Task]:
        """Filtered tasks in display order for ``query`` (default: current search)."""
        q = self.query if query is None else query
        return order_tasks(self.state.tasks, q, tag_resolver(self.state.tags))

    def toggle_task(self, task_id: str) -> bool:
        return self.tasks.toggle_task(task_id) is not None

    def delete_task(self, task_id: str) -> bool:
        if self.state.find_task(task_id) is None:
            return False
        if not self._prompter.confirm(CONFIRM_DELETE_TASK):
            return False
        return self.tasks.delete_task(task_id)

    def new_note(self) -> None:
        self.state.editing_task_id = None
        self.state.draft = Draft()
        self.navigator.navigate(Screen.EDIT_NOTE)

    def edit_task(self, task_id: str) -> bool:
        task = self.state.find_task(task_id)
        if task is None:
            return False
        self.state.editing_task_id = task.id
        self.state.draft = Draft.from_task(task)
        self.navigator.navigate(Screen.EDIT_NOTE)
        return True

    # -- note editor --

    def update_draft(self, **changes: object) -> bool:
        """Apply editor input to the draft (title, description, tag_id, due_date).

        Input that does not validate, such as a due date that is not
        YYYY-MM-DD, is rejected as a whole and the draft is left as it was.
        """
        try:
            draft = Draft.model_validate({**self.state.draft.model_dump(), **changes})
        except ValidationError as err:
            logger.debug("Rejected draft input: %s", err.errors(include_url=False))
            return False
        self.state.draft = draft
        return True

    def save_note(self, draft: Draft | None = None) -> bool:
        """Create or update the task being edited, then return to Home.

        An empty title or an invalid due date is rejected and nothing moves.
        """
        if draft is not None:
            self.state.draft = draft
        try:
            self.tasks.save(self.state.editing_task_id, self.state.draft)
        except (EmptyTitleError, ValidationError):
            return False
        self._leave_note_editor()
        return True

    def cancel_note(self) -> None:
        self._leave_note_editor()

    def delete_current_task(self) -> bool:
        task_id = self.state.editing_task_id
        if task_id is None:
            return False
        if not self._prompter.confirm(CONFIRM_DELETE_TASK):
            return False
        self.tasks.delete_task(task_id)
        self._leave_note_editor()
        return True

    def _leave_note_editor(self) -> None:
        self.state.draft = Draft()
        self.state.editing_task_id = None
        self.navigator.back()

    def open_tag_editor(self, draft: Draft | None = None) -> None:
        """Keep the in-progress note in the draft and open the tag editor."""
        if draft is not None:
            self.state.draft = draft
        self.navigator.navigate(Screen.EDIT_TAG)

    def delete_tag(self, tag_id: str) -> bool:
        try:
            self.tags.check_deletable(tag_id)
        except ProtectedTagError as err:
            self._prompter.notify(NOTICE_PROTECTED_TAG)
            logger.debug("Rejected delete of tag %s: %s", tag_id, err)
            return False
        if self.state.find_tag(tag_id) is None:
            return False
        if not self._prompter.confirm(CONFIRM_DELETE_TAG):
            return False

        self.tags.delete_tag(tag_id)
        if self.state.draft.tag_id == tag_id:
            self.state.draft = self.state.draft.model_copy(update={"tag_id": FALLBACK_TAG_ID})
        return True

    # -- tag editor --

    def save_tag(self, label: str, color: str = COLOR_PALETTE[0]) -> bool:
        """Create a tag, select it in the draft and return to the note editor."""
        try:
            tag = self.tags.create_tag(label, color)
        except EmptyTagLabelError:
            return False
        except DuplicateTagError:
            self._prompter.notify(NOTICE_DUPLICATE_TAG)
            return False

        self.state.draft = self.state.draft.model_copy(update={"tag_id": tag.id})
        self.navigator.back()
        return True

    def cancel_tag(self) -> None:
        self.navigator.back()

    # -- view models --

    def login_view(self) -> LoginView:
        return LoginView(email=self.state.identity, error=self.login_error)

    def welcome_view(self) -> WelcomeView:
        return WelcomeView(email=self.state.identity)

    def home_view(self, today: date | None = None) -> HomeView:
        resolve: Callable[[Task], Tag | None] = tag_resolver(self.state.tags)
        ordered = order_tasks(self.state.tasks, self.query, resolve)
        cards = [
            TaskCard(task=t, tag=resolve(t), overdue=t.is_overdue(today))
            for t in ordered
        ]
        return HomeView(
            email=self.state.identity,
            query=self.query,
            cards=cards,
            completed_count=sum(1 for t in self.state.tasks if t.completed),
            total_count=len(self.state.tasks),
            show_empty_state=not cards and self.query == "",
        )

    def note_editor_view(self) -> NoteEditorView:
        return NoteEditorView(
            is_editing=self.state.editing_task_id is not None,
            draft=self.state.draft,
            tags=list(self.state.tags),
            can_save=TaskService.can_save(self.state.draft),
            deletable_tag_ids=[t.id for t in self.state.tags if t.id not in PROTECTED_TAG_IDS],
        )

    def tag_editor_view(self) -> TagEditorView:
        return TagEditorView()

    def current_view(self) -> LoginView | WelcomeView | HomeView | NoteEditorView | TagEditorView:
        screen = self.screen
        match screen:
            case Screen.LOGIN:
                return self.login_view()
            case Screen.WELCOME:
                return self.welcome_view()
            case Screen.HOME:
                return self.home_view()
            case Screen.EDIT_NOTE:
                return self.note_editor_view()
            case Screen.EDIT_TAG:
                return self.tag_editor_view()
            case _:
                assert_never(screen)
