import pytest
from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QMouseEvent

from explorer.session import VowelSpaceSession
from explorer.vowel_space_view import VowelSpaceView


def _mouse(kind, x, y, button=Qt.MouseButton.NoButton):
    pos = QPointF(x, y)
    return QMouseEvent(kind, pos, pos, button, button,
                       Qt.KeyboardModifier.NoModifier)


@pytest.fixture
def view(qtbot, fake_synth, catalog):
    session = VowelSpaceSession(synth=fake_synth, catalog=catalog)
    w = VowelSpaceView(session)
    qtbot.addWidget(w)
    return w


def test_minimum_size_fits_quadrilateral(view):
    size = view.minimumSize()
    assert size.width() >= 500
    assert size.height() >= 500


def test_polygon_matches_geometry(view):
    poly = view.quadrilateral_polygon()
    points = [(poly[i].x(), poly[i].y()) for i in range(poly.count())]
    assert points == view.session.geometry.corners()


def test_mouse_move_emits_frame(view, qtbot):
    with qtbot.waitSignal(view.frame_updated, timeout=1000) as blocker:
        view.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 300, 300))
    frame = blocker.args[0]
    assert frame.cursor.inside
    assert frame.formants == pytest.approx((500.0, 1500.0))


def test_left_press_starts_synth(view, fake_synth):
    view.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 300, 300,
                                Qt.MouseButton.LeftButton))
    fake_synth.start.assert_called_once()
    view.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, 300, 300,
                                  Qt.MouseButton.LeftButton))
    fake_synth.stop.assert_called_once()


def test_right_press_ignored(view, fake_synth):
    view.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 300, 300,
                                Qt.MouseButton.RightButton))
    fake_synth.start.assert_not_called()


def test_leave_hides_cursor(view):
    view.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 300, 300))
    assert view.session.cursor.inside
    view.leaveEvent(QEvent(QEvent.Type.Leave))
    assert not view.session.cursor.inside


def test_paint_with_overlay_does_not_crash(view):
    view.session.reference_changed("english_pb")
    view.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 145, 118))
    view.colour_by_vowel = True
    view.resize(view.minimumSize())
    pixmap = view.grab()
    assert not pixmap.isNull()
