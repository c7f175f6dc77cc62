"""Application state machine: owns all UI state and turns events into transitions.

Only the event loop calls into `App`. External commands run in background jobs
started through the dispatcher; their results come back in `on_tick`.
"""

from __future__ import annotations

from typing import Any, Callable

from ..bootloader import LimineSync
from ..cache import ListingCache
from ..config import AppConfig, load_app_config
from ..jobs import ConfigListing, JobDispatcher, PendingOp, Slot, SnapshotListing
from ..logging import get_logger
from ..models import Config, ConfigField, Snapshot
from ..settings_service import Settings, SettingsService
from ..snapper import SnapperClient
from .events import Key, KeyEvent, MouseEvent
from .filtering import filter_snapshots
from .handlers import completion, config_form, navigation, operations
from .help import HELP_TEXT
from .input_buffer import InputBuffer
from .modes import LOADING, NORMAL, Focus, InputKind, Mode, ModeKind, plain_mode
from .scroll_view import ScrollView

logger = get_logger(__name__)

Action = Callable[["App"], None]

# Normal mode, plain characters.
NORMAL_CHAR_ACTIONS: dict[str, Action] = {
    "q": lambda app: app.quit(),
    "r": lambda app: app.refresh_all(),
    "c": operations.start_create,
    "e": operations.start_edit,
    "d": operations.start_delete_confirm,
    "g": operations.start_config_edit,
    "?": lambda app: app.open_help(),
    "F": operations.start_filter_input,
    "f": lambda app: app.toggle_fullscreen(),
    "x": operations.start_diff,
    "m": operations.start_mount,
    "U": operations.start_umount,
    "R": operations.start_rollback_confirm,
    "K": operations.start_cleanup_input,
    "C": operations.start_view_config,
    "Q": operations.start_setup_quota,
    "Y": operations.start_bootloader_sync,
    "u": lambda app: app.toggle_userdata(),
    "S": lambda app: app.toggle_elevated(),
    "o": navigation.toggle_focus,
    "[": navigation.select_prev_config,
    "]": navigation.select_next_config,
}

NORMAL_KEY_ACTIONS: dict[Key, Action] = {
    Key.TAB: navigation.select_next_config,
    Key.BACKTAB: navigation.select_prev_config,
    Key.LEFT: navigation.select_prev_config,
    Key.RIGHT: navigation.select_next_config,
    Key.UP: lambda app: navigation.move_selection(app, -1),
    Key.DOWN: lambda app: navigation.move_selection(app, 1),
    Key.PAGE_UP: lambda app: navigation.move_selection(app, -app.page_size),
    Key.PAGE_DOWN: lambda app: navigation.move_selection(app, app.page_size),
    Key.HOME: navigation.select_first,
    Key.END: navigation.select_last,
    Key.ENTER: operations.start_status,
}


class App:
    """Snapshot manager state: modes, two selectable lists, input buffer, jobs."""

    def __init__(
        self,
        client: SnapperClient | None = None,
        *,
        settings_service: SettingsService | None = None,
        bootloader: LimineSync | None = None,
        dispatcher: JobDispatcher | None = None,
        cache: ListingCache | None = None,
        app_config: AppConfig | None = None,
    ) -> None:
        self.app_config = app_config or load_app_config()
        self.client = client or SnapperClient(self.app_config)
        self.settings_service = settings_service or SettingsService()
        self.bootloader = bootloader or LimineSync()
        self.dispatcher = dispatcher or JobDispatcher()
        self.cache = cache if cache is not None else ListingCache(ttl_seconds=self.app_config.cache_ttl_seconds)
        self.page_size = self.app_config.page_size

        settings = self.settings_service.load()
        self.elevated = settings.elevated_mode
        self.fullscreen = settings.fullscreen_flag
        self.show_userdata = settings.show_userdata
        self.filter_text = settings.filter_text or ""
        self.preferred_config = settings.last_selected_configuration

        self.running = True
        self.mode: Mode = NORMAL
        self.focus = Focus.SNAPSHOTS
        self.status = ""
        self.tick_count = 0

        self.configs: list[Config] = []
        self.config_index: int | None = None
        self.snapshots: list[Snapshot] = []
        self.filtered: list[Snapshot] = []
        self.snapshot_index: int | None = None

        self.input = InputBuffer()
        self.details = ScrollView(title="Snapshot status")
        self.help = ScrollView(HELP_TEXT, title="Help")
        self.config_fields: list[ConfigField] = []
        self.field_index: int | None = None

        self._mode_handlers: dict[ModeKind, Callable[[KeyEvent], None]] = {
            ModeKind.NORMAL: self._key_normal,
            ModeKind.INPUT: self._key_input,
            ModeKind.CONFIRM_DELETE: self._key_confirm,
            ModeKind.CONFIRM_ROLLBACK: self._key_confirm,
            ModeKind.CONFIRM_CLEANUP: self._key_confirm,
            ModeKind.HELP: self._key_help,
            ModeKind.DETAILS: self._key_details,
            ModeKind.LOADING: self._key_loading,
            ModeKind.CONFIG_FORM: self._key_config_form,
        }

    # -- state queries -------------------------------------------------

    def selected_config_name(self) -> str | None:
        if self.config_index is None or not (0 <= self.config_index < len(self.configs)):
            return None
        return self.configs[self.config_index].name

    def selected_snapshot(self) -> Snapshot | None:
        if self.snapshot_index is None or not (0 <= self.snapshot_index < len(self.filtered)):
            return None
        return self.filtered[self.snapshot_index]

    @property
    def loading_message(self) -> str:
        return self.dispatcher.message(Slot.OPERATION)

    @property
    def pending(self) -> PendingOp | None:
        return self.dispatcher.pending(Slot.OPERATION)

    @property
    def snapshots_loading_for(self) -> str | None:
        op = self.dispatcher.pending(Slot.SNAPSHOTS)
        return op.config if isinstance(op, SnapshotListing) else None

    # -- event entry points ---------------------------------------------

    def start(self) -> None:
        """Kick off the initial configuration listing."""
        self.refresh_all()

    def on_key(self, event: KeyEvent) -> None:
        self._mode_handlers[self.mode.kind](event)

    def on_mouse(self, event: MouseEvent) -> None:
        navigation.on_mouse(self, event)

    def on_tick(self) -> None:
        self.tick_count += 1
        completion.poll_all(self)

    # -- jobs -----------------------------------------------------------

    def start_operation(self, op: PendingOp, work: Callable[[], Any], message: str) -> None:
        """Run `work` in the background and wait for it in Loading mode."""
        self.dispatcher.start(op, work, message=message, slot=Slot.OPERATION)
        self.status = ""
        self.mode = LOADING

    def refresh_all(self) -> None:
        """Drop every cached listing and re-read the configuration list."""
        # a listing already in flight predates the refresh; its result must not refill the cache
        self.dispatcher.cancel(Slot.SNAPSHOTS)
        self.cache.invalidate_all()
        client, elevated = self.client, self.elevated
        self.dispatcher.start(
            ConfigListing(),
            lambda: client.list_configs(elevated=elevated),
            message="Loading configs…",
            slot=Slot.CONFIGS,
        )
        self.status = "Refreshing configs…"

    def load_snapshots_for_selected(self) -> None:
        """Show the cached listing right away; refresh in background unless it is fresh."""
        name = self.selected_config_name()
        if name is None:
            self.show_snapshots([])
            return
        hit = self.cache.get(name)
        if hit is not None:
            snapshots, age = hit
            self.show_snapshots(snapshots)
            if self.cache.is_fresh_age(age):
                self.status = f"Cached snapshots for {name} ({int(age)}s old)"
                return
        else:
            self.show_snapshots([])
        client, elevated = self.client, self.elevated
        self.dispatcher.start(
            SnapshotListing(name),
            lambda: client.list_snapshots(name, elevated=elevated),
            message=f"Loading snapshots for {name}…",
            slot=Slot.SNAPSHOTS,
        )
        prefix = "Refreshing" if hit is not None else "Loading"
        self.status = f"{prefix} snapshots for {name}…"

    def show_snapshots(self, snapshots: list[Snapshot]) -> None:
        self.snapshots = list(snapshots)
        self.apply_filter()
        self.snapshot_index = 0 if self.filtered else None

    def apply_filter(self) -> None:
        self.filtered = filter_snapshots(self.snapshots, self.filter_text)
        if self.snapshot_index is not None and self.snapshot_index >= len(self.filtered):
            self.snapshot_index = len(self.filtered) - 1 if self.filtered else None

    def select_config(self, index: int) -> None:
        """Change the configuration selection, reload its snapshots and persist it."""
        if not self.configs:
            return
        index = max(0, min(index, len(self.configs) - 1))
        self.config_index = index
        self.preferred_config = self.configs[index].name
        self.load_snapshots_for_selected()
        self.persist()

    # -- toggles and persistence ----------------------------------------

    def persist(self) -> None:
        self.settings_service.save(
            Settings(
                elevated_mode=self.elevated,
                fullscreen_flag=self.fullscreen,
                last_selected_configuration=self.selected_config_name() or self.preferred_config,
                filter_text=self.filter_text.strip() or None,
                show_userdata=self.show_userdata,
            )
        )

    def quit(self) -> None:
        self.running = False

    def open_help(self) -> None:
        self.mode = plain_mode(ModeKind.HELP)

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self.persist()

    def toggle_userdata(self) -> None:
        self.show_userdata = not self.show_userdata
        self.persist()

    def toggle_elevated(self) -> None:
        self.elevated = not self.elevated
        self.persist()
        self.refresh_all()
        self.status = f"sudo: {'on' if self.elevated else 'off'}"

    # -- per-mode key handling ------------------------------------------

    def _key_normal(self, event: KeyEvent) -> None:
        if event.key is Key.CHAR:
            if event.ctrl:
                if event.char.lower() == "f":
                    operations.start_filter_input(self)
                return
            action = NORMAL_CHAR_ACTIONS.get(event.char)
        else:
            action = NORMAL_KEY_ACTIONS.get(event.key)
        if action is not None:
            action(self)

    def _key_input(self, event: KeyEvent) -> None:
        buf = self.input
        if event.key is Key.ESC:
            operations.cancel_input(self)
        elif event.key is Key.ENTER:
            operations.submit_input(self)
        elif event.key is Key.BACKSPACE:
            buf.backspace()
        elif event.key is Key.DELETE:
            buf.delete()
        elif event.key is Key.LEFT:
            buf.move_left()
        elif event.key is Key.RIGHT:
            buf.move_right()
        elif event.key is Key.HOME:
            buf.move_home()
        elif event.key is Key.END:
            buf.move_end()
        elif event.key is Key.CHAR and not event.ctrl:
            buf.insert(event.char)

    def _key_confirm(self, event: KeyEvent) -> None:
        if event.is_char("y"):
            operations.confirm(self)
        elif event.is_char("n") or event.key is Key.ESC:
            operations.decline(self)

    def _key_loading(self, event: KeyEvent) -> None:
        if event.key is Key.ESC or event.is_char("q"):
            operations.cancel_loading(self)

    def _key_help(self, event: KeyEvent) -> None:
        if event.key is Key.ESC or event.is_char("q") or event.is_char("?"):
            self.mode = NORMAL
            return
        self._scroll_keys(self.help, event, InputKind.HELP_SEARCH, ModeKind.HELP)

    def _key_details(self, event: KeyEvent) -> None:
        if event.key is Key.ESC or event.is_char("q"):
            self.mode = NORMAL
        elif event.is_char("e"):
            operations.start_config_edit(self)
        else:
            self._scroll_keys(self.details, event, InputKind.DETAILS_SEARCH, ModeKind.DETAILS)

    def _scroll_keys(self, view: ScrollView, event: KeyEvent, search: InputKind, back: ModeKind) -> None:
        if event.key is Key.UP:
            view.scroll_by(-1)
        elif event.key is Key.DOWN:
            view.scroll_by(1)
        elif event.key is Key.PAGE_UP:
            view.scroll_by(-self.page_size)
        elif event.key is Key.PAGE_DOWN:
            view.scroll_by(self.page_size)
        elif event.key is Key.HOME:
            view.home()
        elif event.key is Key.END:
            view.end()
        elif event.is_char("/"):
            self.input.clear()
            self.mode = Mode.input(search, previous=back)
        elif event.is_char("n"):
            view.find_next()
        elif event.is_char("N"):
            view.find_prev()

    def _key_config_form(self, event: KeyEvent) -> None:
        if event.key is Key.ESC:
            self.mode = NORMAL
            self.status = "Config edit cancelled"
        elif event.key is Key.UP:
            config_form.move_field(self, -1)
        elif event.key is Key.DOWN:
            config_form.move_field(self, 1)
        elif event.key is Key.HOME:
            config_form.first_field(self)
        elif event.key is Key.END:
            config_form.last_field(self)
        elif event.key is Key.ENTER or event.is_char("e"):
            config_form.start_field_edit(self)
        elif event.is_char("s") or event.is_char("y"):
            config_form.apply_changes(self)
