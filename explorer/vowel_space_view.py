# explorer/vowel_space_view.py
from PyQt6.QtWidgets import QWidget
from PyQt6.QtGui import QPainter, QColor, QPen, QFont, QPolygonF
from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal

from analysis.nearest import glyph_positions
from explorer.vowel_colors import CURSOR_COLOR, glyph_color


class VowelSpaceView(QWidget):
    """
    Canvas for the vowel quadrilateral. Pointer events go to the session;
    painting reads the session's geometry, reference set and last frame.
    """

    frame_updated = pyqtSignal(object)

    BACKGROUND = QColor(245, 245, 245)
    LINE = QColor(10, 10, 10)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.colour_by_vowel = False
        self.setMouseTracking(True)

        g = session.geometry
        self.setMinimumSize(int(g.back_x + 40), int(g.bottom_y + 70))

    # ------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------
    def _emit(self, result):
        self.frame_updated.emit(result)
        self.update()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self._emit(self.session.pointer_moved(pos.x(), pos.y()))

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self._emit(self.session.pointer_pressed(pos.x(), pos.y()))

    def mouseReleaseEvent(self, event):
        self.session.pointer_released()
        self.update()

    def leaveEvent(self, event):
        # Park the cursor off-canvas so the glyph disappears
        self._emit(self.session.pointer_moved(-1.0, -1.0))

    # ------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------
    def quadrilateral_polygon(self):
        return QPolygonF([QPointF(x, y) for x, y in self.session.geometry.corners()])

    def draw_quadrilateral(self, painter):
        painter.setPen(QPen(self.LINE, 1))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolygon(self.quadrilateral_polygon())

    def draw_overlay(self, painter):
        session = self.session
        if not session.vowel_set:
            return

        frame = session.last_frame
        snapped = frame.snapped if frame is not None else None

        font = QFont()
        font.setPointSize(18)
        painter.setFont(font)
        for vowel, x, y in glyph_positions(session.vowel_set, session.geometry,
                                           session.acoustic_range):
            color = glyph_color(vowel.label, highlighted=vowel is snapped,
                                by_vowel=self.colour_by_vowel)
            painter.setPen(QPen(QColor(color), 1))
            painter.drawText(QRectF(x - 15, y - 14, 30, 28),
                             Qt.AlignmentFlag.AlignCenter, vowel.label)

    def draw_cursor(self, painter):
        cursor = self.session.cursor
        if not cursor.inside:
            return
        font = QFont()
        font.setPointSize(22)
        painter.setFont(font)
        painter.setPen(QPen(QColor(CURSOR_COLOR), 1))
        painter.drawText(QPointF(cursor.screen_x - 7, cursor.screen_y + 7), "+")

    def draw_readout(self, painter):
        g = self.session.geometry
        line1, line2 = self.session.readout()
        font = QFont()
        font.setPointSize(12)
        painter.setFont(font)
        painter.setPen(QPen(self.LINE, 1))
        painter.drawText(QPointF(g.front_top_x, g.bottom_y + 30), line1)
        painter.drawText(QPointF(g.front_top_x, g.bottom_y + 50), line2)

    # ------------------------------------------------------------
    # Main paint event
    # ------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), self.BACKGROUND)

        self.draw_quadrilateral(painter)
        self.draw_overlay(painter)
        self.draw_cursor(painter)
        self.draw_readout(painter)
        painter.end()
