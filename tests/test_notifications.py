import pytest
from PySide6.QtCore import QObject

from drummer.core.notifications import NotificationCenter


def test_show_sets_single_current_notification(qtbot):
    center = NotificationCenter(lifetime_ms=1000)
    with qtbot.waitSignal(center.changed) as blocker:
        center.show("Song deleted successfully", "success")

    assert blocker.args[0].text == "Song deleted successfully"
    assert center.current.severity == "success"


def test_new_notification_replaces_previous(qtbot):
    center = NotificationCenter(lifetime_ms=1000)
    center.show("first", "info")
    center.show("second", "error")

    assert center.current.text == "second"
    assert center.current.severity == "error"


def test_notification_expires(qtbot):
    center = NotificationCenter(lifetime_ms=50)
    center.show("bye", "info")

    qtbot.waitUntil(lambda: center.current is None, timeout=1000)


def test_stale_expiry_does_not_clear_newer_message(qtbot):
    center = NotificationCenter(lifetime_ms=300)
    center.show("first", "info")
    qtbot.wait(200)
    center.show("second", "success")

    # first's timer fires here; second must survive it
    qtbot.wait(180)
    assert center.current is not None
    assert center.current.text == "second"

    qtbot.waitUntil(lambda: center.current is None, timeout=1000)


def test_generations_increase(qtbot):
    center = NotificationCenter(lifetime_ms=1000)
    a = center.show("a")
    b = center.show("b")
    assert b.generation > a.generation


def test_unknown_severity_rejected(qtbot):
    center = NotificationCenter()
    with pytest.raises(ValueError):
        center.show("oops", "warning")


def test_dismiss_clears_slot(qtbot):
    center = NotificationCenter(lifetime_ms=1000)
    center.show("x", "info")
    with qtbot.waitSignal(center.changed) as blocker:
        center.dismiss()
    assert blocker.args == [None]
    assert center.current is None


def test_pending_expiry_dies_with_center(qtbot):
    owner = QObject()
    center = NotificationCenter(lifetime_ms=30, parent=owner)
    center.show("bye", "info")
    destroyed = []
    center.destroyed.connect(lambda: destroyed.append(True))

    owner.deleteLater()
    qtbot.waitUntil(lambda: destroyed, timeout=1000)
    # past the lifetime; the timer must not call into the deleted center
    qtbot.wait(100)
