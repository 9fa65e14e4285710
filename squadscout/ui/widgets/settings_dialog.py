from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from core.config import PLAYER_LIMIT, SELECTABLE_COUNTRIES, AppConfig
from i18n.i18n import get_i18n, tr


class SettingsDialog(QDialog):
    language_selected = Signal(str)

    def __init__(self, config: AppConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._config = config

        self.setObjectName("settingsDialog")
        self.setModal(True)
        self.setMinimumWidth(460)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        form = QFormLayout()
        form.setSpacing(10)

        self._language_label = QLabel()
        self._language_combo = QComboBox()
        form.addRow(self._language_label, self._language_combo)

        min_players, max_players = config.get_player_range()
        self._min_label = QLabel()
        self._min_spin = QSpinBox()
        self._min_spin.setRange(0, PLAYER_LIMIT)
        self._min_spin.setValue(min_players)
        form.addRow(self._min_label, self._min_spin)

        self._max_label = QLabel()
        self._max_spin = QSpinBox()
        self._max_spin.setRange(0, PLAYER_LIMIT)
        self._max_spin.setValue(max_players)
        form.addRow(self._max_label, self._max_spin)

        filters = config.get_text_filters()
        self._map_label = QLabel()
        self._map_input = QLineEdit(filters["map"])
        form.addRow(self._map_label, self._map_input)

        self._mode_label = QLabel()
        self._mode_input = QLineEdit(filters["mode"])
        form.addRow(self._mode_label, self._mode_input)

        self._name_label = QLabel()
        self._name_input = QLineEdit(filters["name"])
        form.addRow(self._name_label, self._name_input)

        layout.addLayout(form)

        self._countries_group = QGroupBox()
        countries_layout = QVBoxLayout(self._countries_group)
        self._countries_list = QListWidget()
        self._countries_list.setMaximumHeight(150)
        banned = config.get_banned_countries()
        for code, name in SELECTABLE_COUNTRIES:
            item = QListWidgetItem(f"{code} ({name})")
            item.setData(Qt.ItemDataRole.UserRole, code)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if code in banned else Qt.CheckState.Unchecked)
            self._countries_list.addItem(item)
        countries_layout.addWidget(self._countries_list)
        layout.addWidget(self._countries_group)

        button_row = QHBoxLayout()
        button_row.addStretch(1)

        self._cancel_button = QPushButton()
        self._cancel_button.clicked.connect(self.reject)
        button_row.addWidget(self._cancel_button)

        self._save_button = QPushButton()
        self._save_button.setObjectName("primaryButton")
        self._save_button.clicked.connect(self._apply_and_close)
        button_row.addWidget(self._save_button)

        layout.addLayout(button_row)

        get_i18n().language_changed.connect(self.retranslate_ui)
        self._populate_language_items(config.get_language())
        self.retranslate_ui()

    def _populate_language_items(self, current_language: str) -> None:
        self._language_combo.clear()
        selected_index = 0
        for index, code in enumerate(get_i18n().available_languages() or ["en"]):
            self._language_combo.addItem(tr(f"settings.language.{code}"), code)
            if code == current_language:
                selected_index = index
        self._language_combo.setCurrentIndex(selected_index)

    def _selected_countries(self) -> set[str]:
        selected: set[str] = set()
        for row in range(self._countries_list.count()):
            item = self._countries_list.item(row)
            if item.checkState() == Qt.CheckState.Checked:
                selected.add(str(item.data(Qt.ItemDataRole.UserRole)))
        return selected

    def _apply_and_close(self) -> None:
        min_players = self._min_spin.value()
        max_players = self._max_spin.value()
        if min_players > max_players:
            min_players, max_players = max_players, min_players

        self._config.set_player_range(min_players, max_players)
        self._config.set_banned_countries(self._selected_countries())
        self._config.set_text_filters(
            self._map_input.text(),
            self._mode_input.text(),
            self._name_input.text(),
        )

        language_code = str(self._language_combo.currentData() or self._config.get_language())
        if language_code != self._config.get_language():
            self.language_selected.emit(language_code)

        self.accept()

    def retranslate_ui(self, _language: str | None = None) -> None:
        self.setWindowTitle(tr("settings.title"))
        self._language_label.setText(tr("settings.language.label"))
        self._min_label.setText(tr("settings.min_players"))
        self._max_label.setText(tr("settings.max_players"))
        self._map_label.setText(tr("settings.filter_map"))
        self._mode_label.setText(tr("settings.filter_mode"))
        self._name_label.setText(tr("settings.filter_name"))
        self._countries_group.setTitle(tr("settings.banned_countries"))
        self._cancel_button.setText(tr("settings.cancel"))
        self._save_button.setText(tr("settings.save"))

        current = str(self._language_combo.currentData() or self._config.get_language())
        self._populate_language_items(current)
