# explorer/window.py
import math

from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QLabel,
    QComboBox,
    QFrame,
    QLineEdit,
    QCheckBox,
)
from PyQt6.QtCore import QTimer

from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas

from analysis.acoustic_ranges import SpeakerCategory
from analysis.playback import VoiceSourceMode
from analysis.vowel_catalog import NO_REFERENCE
from explorer.filter_plotter import update_filter_response
from explorer.vowel_space_view import VowelSpaceView


class VowelSpaceWindow(QMainWindow):
    """
    Speaker / source / reference selectors, F0-F4 fields and the vowel
    space canvas, all driving one VowelSpaceSession.
    """

    FIELDS = ("F0", "F1", "F2", "F3", "F4")

    def __init__(self, session, sample_rate=44100, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Vowel Space Synthesizer")

        self.session = session
        self.sample_rate = sample_rate
        self.fields = {}

        self._build_ui()
        self._setup_timers()
        self._refresh_fields()

    # ---------------------------------------------------------
    # UI construction
    # ---------------------------------------------------------
    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)

        # ================= Left: vowel space canvas =================
        self.view = VowelSpaceView(self.session)
        main_layout.addWidget(self.view, stretch=1)

        # ================= Right: controls =================
        control_frame = QFrame()
        control_frame.setMinimumWidth(260)
        control_frame.setStyleSheet(
            "QFrame { background-color: #f2f2f2; border: 1px solid #ccc; "
            "border-radius: 6px; padding: 8px; }"
        )
        control_layout = QVBoxLayout(control_frame)

        # ---- Selectors ----
        self.speaker_combo = QComboBox()
        for category in SpeakerCategory:
            self.speaker_combo.addItem(category.value, category.value)

        self.source_combo = QComboBox()
        for mode in VoiceSourceMode:
            self.source_combo.addItem(mode.value, mode.value)

        self.reference_combo = QComboBox()
        self.reference_combo.addItem(NO_REFERENCE, NO_REFERENCE)
        for key, name in self.session.catalog.languages():
            self.reference_combo.addItem(name, key)

        for title, combo in (
            ("Speaker", self.speaker_combo),
            ("Source", self.source_combo),
            ("Reference", self.reference_combo),
        ):
            label = QLabel(title)
            label.setStyleSheet("font-size: 12pt; font-weight: bold; border: none;")
            control_layout.addWidget(label)
            control_layout.addWidget(combo)

        self.source_label = QLabel("")
        self.source_label.setWordWrap(True)
        self.source_label.setStyleSheet("font-size: 8pt; color: gray; border: none;")
        control_layout.addWidget(self.source_label)

        self.colour_check = QCheckBox("Colour glyphs by vowel")
        control_layout.addWidget(self.colour_check)

        # ---- Numeric fields ----
        form = QFormLayout()
        for name in self.FIELDS:
            field = QLineEdit()
            field.setFixedWidth(80)
            field.editingFinished.connect(  # type: ignore
                lambda n=name: self._on_field_edited(n))
            self.fields[name] = field
            form.addRow(f"{name} (Hz):", field)
        control_layout.addLayout(form)
        control_layout.addStretch()

        # ---- Filter response plot ----
        self.fig = Figure(figsize=(4, 3))
        self.fig.subplots_adjust(bottom=0.18, left=0.18)
        self.ax_response = self.fig.add_subplot(111)
        self.canvas = FigureCanvas(self.fig)
        self.canvas.setMinimumHeight(220)
        control_layout.addWidget(self.canvas)

        main_layout.addWidget(control_frame)

        # ---- Signals ----
        self.speaker_combo.currentIndexChanged.connect(  # type: ignore
            self._on_speaker_changed)
        self.source_combo.currentIndexChanged.connect(  # type: ignore
            self._on_source_changed)
        self.reference_combo.currentIndexChanged.connect(  # type: ignore
            self._on_reference_changed)
        self.colour_check.toggled.connect(self._on_colour_toggled)  # type: ignore

    # ---------------------------------------------------------
    # Timers
    # ---------------------------------------------------------
    def _setup_timers(self):
        self.update_timer = QTimer(self)
        self.update_timer.timeout.connect(self._update_display)  # type: ignore
        self.update_timer.start(60)  # ~16 fps

    # ---------------------------------------------------------
    # Selector handlers
    # ---------------------------------------------------------
    def _select_speaker(self, category):
        idx = self.speaker_combo.findData(SpeakerCategory.coerce(category).value)
        if idx >= 0 and idx != self.speaker_combo.currentIndex():
            self.speaker_combo.blockSignals(True)
            self.speaker_combo.setCurrentIndex(idx)
            self.speaker_combo.blockSignals(False)

    def _on_speaker_changed(self, _index):
        effective = self.session.speaker_changed(self.speaker_combo.currentData())
        self._select_speaker(effective)
        self._refresh_fields()
        self.view.update()

    def _on_source_changed(self, _index):
        self.session.source_changed(self.source_combo.currentData())

    def _on_reference_changed(self, _index):
        key = self.reference_combo.currentData()
        effective = self.session.reference_changed(key)
        self._select_speaker(effective)
        self.source_label.setText(
            "" if key == NO_REFERENCE else self.session.catalog.source_for(key)
        )
        self._refresh_fields()
        self.view.update()

    def _on_colour_toggled(self, checked):
        self.view.colour_by_vowel = bool(checked)
        self.view.update()

    # ---------------------------------------------------------
    # Numeric fields
    # ---------------------------------------------------------
    def _field_value(self, name):
        active = self.session.active
        return getattr(active, name.lower())

    def _on_field_edited(self, name):
        field = self.fields[name]
        try:
            value = float(field.text())
            if not math.isfinite(value) or value <= 0:
                raise ValueError
        except ValueError:
            field.setText(f"{self._field_value(name):.0f}")
            return

        if name == "F0":
            self.session.f0_edited(value)
        else:
            self.session.formant_edited(name, value)
        self.view.update()

    def _refresh_fields(self):
        for name, field in self.fields.items():
            if field.hasFocus():
                continue
            field.setText(f"{self._field_value(name):.0f}")

    # ---------------------------------------------------------
    # Display update
    # ---------------------------------------------------------
    def _update_display(self):
        self._refresh_fields()
        try:
            update_filter_response(self, self.session.params())
        except Exception as e:
            print("[EXPLORER] update_filter_response error:", e)

    # ---------------------------------------------------------
    # Close handling
    # ---------------------------------------------------------
    def closeEvent(self, event):
        self.update_timer.stop()
        self.session.pointer_released()
        super().closeEvent(event)
