"""Main application window for TirTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QStatusBar, QMessageBox,
)

from .audio.announcer import StageAnnouncer
from .audio.sounds import SoundManager
from .presets.store import PresetStore
from .preferences import TimerPreferences
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.state import TimerStage, TimerState
from .ui.styles import PALETTE, build_stylesheet
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


STATUS_MESSAGES: dict[TimerStage, str] = {
    TimerStage.STAGE_ONE: "Preparation",
    TimerStage.STAGE_TWO: "Shooting",
    TimerStage.COMPLETED: "Completed!",
}


class TirTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        *,
        preset_store: PresetStore | None = None,
        timer_preferences: TimerPreferences | None = None,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("TirTimer")
        self.setMinimumSize(400, 560)

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings + stores ─────────────────────────────────────────
        self._settings: Settings = load_settings()
        self._presets = preset_store or PresetStore()
        self._timer_prefs = timer_preferences or TimerPreferences()

        # ── sound + announcements ─────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._announcer = StageAnnouncer(self._sound_manager.play)
        self._apply_settings()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self._current_configuration(),
            on_update=self._on_timer_update,
            on_complete=self._on_timer_complete,
            parent=self,
        )

        # ── central widget ────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet(PALETTE))
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)
        root_layout.setSpacing(8)

        self._preset_label = QLabel(central)
        self._preset_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preset_label.setObjectName("stageInfo")
        root_layout.addWidget(self._preset_label)

        self._timer_widget = TimerWidget(
            self._timer_engine, self._announcer, central,
        )
        root_layout.addWidget(self._timer_widget)
        root_layout.addStretch()

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready")

        self._build_menu_bar()
        self._refresh_preset_label()
        self._restore_geometry()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

    # ══════════════════════════════════════════════════════════════════
    #  CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    def _current_configuration(self):
        return self._presets.resolve_configuration(
            self._timer_prefs.get_timer_configuration()
        )

    def reload_configuration(self) -> None:
        """Pick up preset changes.  Never interrupts a running timer."""
        if self._timer_engine.current_state.is_running:
            logger.info("timer running; keeping current configuration")
            return
        self._timer_engine.update_configuration(self._current_configuration())
        self._announcer.reset()
        self._refresh_preset_label()

    def _refresh_preset_label(self) -> None:
        preset = self._presets.get_current_preset()
        self._preset_label.setText(preset.name if preset else "Custom")

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        app_menu = menu_bar.addMenu("TirTimer")

        about_action = QAction("About TirTimer", self)
        about_action.setMenuRole(QAction.MenuRole.AboutRole)
        about_action.triggered.connect(self._show_about)
        app_menu.addAction(about_action)

        prefs_action = QAction("Preferences…", self)
        prefs_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._open_settings)
        app_menu.addAction(prefs_action)

        quit_action = QAction("Quit TirTimer", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self._quit_with_confirm)
        app_menu.addAction(quit_action)

        timer_menu = menu_bar.addMenu("Timer")

        presets_action = QAction("Presets…", self)
        presets_action.setShortcut(QKeySequence("Ctrl+P"))
        presets_action.triggered.connect(self._open_presets)
        timer_menu.addAction(presets_action)

        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        timer_menu.addAction(self._aot_action)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About TirTimer",
            "<h3>TirTimer</h3>"
            "<p>A two-stage shooting timer: preparation, then shooting, "
            "with spoken-style cues at every change.</p>",
        )

    # ══════════════════════════════════════════════════════════════════
    #  TIMER CALLBACKS
    # ══════════════════════════════════════════════════════════════════

    def _on_timer_update(self, state: TimerState) -> None:
        self._announcer.observe(state)
        message = STATUS_MESSAGES[state.current_stage]
        if state.current_stage != TimerStage.COMPLETED and not state.is_running:
            message = "Ready" if state.is_fresh else f"{message} (paused)"
        self._status_bar.showMessage(message)

    def _on_timer_complete(self) -> None:
        logger.info("session complete")

    # ══════════════════════════════════════════════════════════════════
    #  DIALOGS
    # ══════════════════════════════════════════════════════════════════

    def _open_presets(self) -> None:
        from .ui.preset_dialog import PresetDialog

        PresetDialog(self._presets, parent=self).exec()
        self.reload_configuration()

    def _open_settings(self) -> None:
        from .ui.settings_dialog import SettingsDialog

        def _preview_click():
            self._apply_settings()
            self._sound_manager.play("click")

        dlg = SettingsDialog(
            self._settings,
            parent=self,
            sound_preview_callback=_preview_click,
        )
        dlg.exec()
        self._apply_settings()
        if self._aot_action.isChecked() != self._settings.always_on_top:
            self._aot_action.setChecked(self._settings.always_on_top)
            self._apply_always_on_top(self._settings.always_on_top)

    def _apply_settings(self) -> None:
        """Push current Settings into sound and announcements."""
        s = self._settings
        self._sound_manager.set_volume(s.sound_volume)
        self._sound_manager.set_enabled(s.sound_enabled)
        self._announcer.enabled = s.announcements_enabled

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves: restart the 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    def _toggle_always_on_top(self) -> None:
        new_val = not self._settings.always_on_top
        self._settings.always_on_top = new_val
        save_settings(self._settings)
        self._aot_action.setChecked(new_val)
        self._apply_always_on_top(new_val)

    def _apply_always_on_top(self, on_top: bool) -> None:
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.show()  # Required: setWindowFlags hides the window

    def _quit_with_confirm(self) -> None:
        """Quit, but ask first if a timer is running."""
        if self._timer_engine.current_state.is_running:
            reply = QMessageBox.question(
                self,
                "Quit TirTimer?",
                "A timer is still running. Quit anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        self.close()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD + WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, resume or reset, like the primary button."""
        self._timer_widget.toggle()

    def _on_escape(self) -> None:
        """Stop (no-op before the first start)."""
        if not self._timer_engine.current_state.is_fresh:
            self._timer_engine.stop()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._timer_engine.cleanup()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (stop) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
