"""Preset manager and editor dialogs.

``PresetDialog`` lists every preset (built-in and custom) and lets the
user select, add, edit and delete them.  Selecting a preset makes it
current in the :class:`~tirtimer.presets.store.PresetStore`; the main
window reloads the configuration after the dialog closes.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QSpinBox, QPushButton, QListWidget,
    QListWidgetItem, QMessageBox, QWidget,
)

from ..presets.models import TimerPreset
from ..presets.store import PresetStore
from ..timer.state import TimerConfiguration


def validate_preset_input(
    store: PresetStore,
    name: str,
    stage_one_seconds: int,
    stage_two_seconds: int,
    exclude_id: str | None = None,
) -> str | None:
    """Return a message describing the first problem, or None."""
    if not name.strip():
        return "Please enter a name for the preset."
    if store.is_preset_name_exists(name.strip(), exclude_id):
        return f"A preset named “{name.strip()}” already exists."
    if stage_one_seconds <= 0:
        return "Preparation time must be longer than zero."
    if stage_two_seconds <= 0:
        return "Shooting time must be longer than zero."
    return None


class _DurationInput(QWidget):
    """Minutes + seconds spin boxes."""

    def __init__(self, seconds: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(8)

        self._minutes = QSpinBox(self)
        self._minutes.setRange(0, 99)
        self._minutes.setSuffix(" min")
        self._seconds = QSpinBox(self)
        self._seconds.setRange(0, 59)
        self._seconds.setSuffix(" s")
        row.addWidget(self._minutes)
        row.addWidget(self._seconds)

        self.set_seconds(seconds)

    def set_seconds(self, total: int) -> None:
        minutes, seconds = divmod(max(0, total), 60)
        self._minutes.setValue(min(minutes, 99))
        self._seconds.setValue(seconds)

    def seconds(self) -> int:
        return self._minutes.value() * 60 + self._seconds.value()


class PresetEditorDialog(QDialog):
    """Create a preset, or edit one in place (same id)."""

    def __init__(
        self,
        store: PresetStore,
        preset: TimerPreset | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._original = preset
        self._result: TimerPreset | None = None

        self.setWindowTitle("Edit Preset" if preset else "New Preset")
        self.setMinimumWidth(360)
        self.setModal(True)

        config = preset.configuration if preset else TimerConfiguration()

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._name_edit = QLineEdit(preset.name if preset else "", self)
        self._name_edit.setPlaceholderText("e.g. Competition")
        self._name_edit.setMaxLength(40)
        form.addRow("Name:", self._name_edit)

        self._stage_one = _DurationInput(config.stage_one_duration_seconds, self)
        form.addRow("Preparation:", self._stage_one)

        self._stage_two = _DurationInput(config.stage_two_duration_seconds, self)
        form.addRow("Shooting:", self._stage_two)

        root.addLayout(form)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel", self)
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save", self)
        save_btn.setObjectName("primaryButton")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(save_btn)
        root.addLayout(btn_row)

    @property
    def result_preset(self) -> TimerPreset | None:
        return self._result

    def _on_save(self) -> None:
        name = self._name_edit.text()
        stage_one = self._stage_one.seconds()
        stage_two = self._stage_two.seconds()
        exclude_id = self._original.id if self._original else None

        problem = validate_preset_input(
            self._store, name, stage_one, stage_two, exclude_id,
        )
        if problem:
            QMessageBox.warning(self, "Invalid preset", problem)
            return

        configuration = TimerConfiguration(stage_one, stage_two)
        if self._original is None:
            preset = self._store.create_preset_from_configuration(
                name.strip(), configuration,
            )
        else:
            preset = TimerPreset(
                id=self._original.id,
                name=name.strip(),
                configuration=configuration,
                is_default=self._original.is_default,
            )

        if not self._store.save_preset(preset, is_editing=self._original is not None):
            QMessageBox.warning(self, "Preset", "The preset could not be saved.")
            return

        self._result = preset
        self.accept()


class PresetDialog(QDialog):
    """List, select, add, edit and delete presets."""

    def __init__(self, store: PresetStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Presets")
        self.setMinimumSize(420, 420)
        self.setModal(True)

        self._store = store
        self._build_ui()
        self.reload()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(12)

        hint = QLabel("Double-click a preset to use it.", self)
        hint.setObjectName("stageInfo")
        root.addWidget(hint)

        self._list = QListWidget(self)
        self._list.itemDoubleClicked.connect(lambda _item: self._on_use())
        self._list.currentItemChanged.connect(lambda *_: self._update_buttons())
        root.addWidget(self._list)

        row = QHBoxLayout()
        row.setSpacing(8)
        self._new_btn = QPushButton("New", self)
        self._new_btn.clicked.connect(self._on_new)
        self._edit_btn = QPushButton("Edit", self)
        self._edit_btn.clicked.connect(self._on_edit)
        self._delete_btn = QPushButton("Delete", self)
        self._delete_btn.setObjectName("dangerButton")
        self._delete_btn.clicked.connect(self._on_delete)
        row.addWidget(self._new_btn)
        row.addWidget(self._edit_btn)
        row.addWidget(self._delete_btn)
        root.addLayout(row)

        bottom = QHBoxLayout()
        self._restore_btn = QPushButton("Restore built-ins", self)
        self._restore_btn.clicked.connect(self._on_restore)
        bottom.addWidget(self._restore_btn)
        bottom.addStretch()
        self._use_btn = QPushButton("Use", self)
        self._use_btn.setObjectName("primaryButton")
        self._use_btn.clicked.connect(self._on_use)
        close_btn = QPushButton("Close", self)
        close_btn.clicked.connect(self.accept)
        bottom.addWidget(close_btn)
        bottom.addWidget(self._use_btn)
        root.addLayout(bottom)

    # ══════════════════════════════════════════════════════════════════
    #  LIST
    # ══════════════════════════════════════════════════════════════════

    def reload(self) -> None:
        current_id = self._store.get_current_preset_id()
        self._list.clear()
        for preset in self._store.get_all_presets():
            marker = "✓ " if preset.id == current_id else "   "
            item = QListWidgetItem(
                f"{marker}{preset.name}\n      {preset.timing_description}"
            )
            item.setData(Qt.ItemDataRole.UserRole, preset.id)
            self._list.addItem(item)
            if preset.id == current_id:
                self._list.setCurrentItem(item)
        self._restore_btn.setEnabled(
            bool(self._store.get_deleted_default_preset_ids())
        )
        self._update_buttons()

    def selected_preset(self) -> TimerPreset | None:
        item = self._list.currentItem()
        if item is None:
            return None
        return self._store.get_preset_by_id(item.data(Qt.ItemDataRole.UserRole))

    def _update_buttons(self) -> None:
        has_selection = self._list.currentItem() is not None
        self._edit_btn.setEnabled(has_selection)
        self._delete_btn.setEnabled(has_selection)
        self._use_btn.setEnabled(has_selection)

    # ══════════════════════════════════════════════════════════════════
    #  ACTIONS
    # ══════════════════════════════════════════════════════════════════

    def _on_use(self) -> None:
        preset = self.selected_preset()
        if preset is None:
            return
        self._store.set_current_preset(preset)
        self.accept()

    def _on_new(self) -> None:
        editor = PresetEditorDialog(self._store, parent=self)
        if editor.exec() == QDialog.DialogCode.Accepted:
            self.reload()

    def _on_edit(self) -> None:
        preset = self.selected_preset()
        if preset is None:
            return
        editor = PresetEditorDialog(self._store, preset, parent=self)
        if editor.exec() == QDialog.DialogCode.Accepted:
            self.reload()

    def _on_delete(self) -> None:
        preset = self.selected_preset()
        if preset is None:
            return
        reply = QMessageBox.question(
            self,
            "Delete preset?",
            f"Delete “{preset.name}”?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        self.delete_preset(preset.id)

    def delete_preset(self, preset_id: str) -> None:
        if not self._store.delete_preset(preset_id):
            QMessageBox.warning(self, "Preset", "The preset could not be deleted.")
        self.reload()

    def _on_restore(self) -> None:
        self._store.restore_default_presets()
        self.reload()
