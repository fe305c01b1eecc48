"""Tests for rendering the suggestion popup from the session state."""

from types import SimpleNamespace

from notechat.ui.main_window import MainWindow


class RecordingPopup:
    """Stands in for SuggestionPopup and records what it was asked to show."""

    def __init__(self) -> None:
        self.visible = False
        self.shown = []
        self.highlighted = []

    def isVisible(self) -> bool:
        return self.visible

    def show_items(self, items, selected_count) -> None:
        self.visible = True
        self.shown.append([item.document.id for item in items])

    def set_highlighted(self, index: int) -> None:
        self.highlighted.append(index)

    def close_popup(self) -> None:
        self.visible = False


def _window(session) -> SimpleNamespace:
    return SimpleNamespace(_session=session, suggestion_popup=RecordingPopup(), _popup_instance=0)


def test_open_popup_is_rendered_once(session) -> None:
    window = _window(session)
    session.on_input_changed("@", 1)

    MainWindow._sync_popup(window)
    MainWindow._sync_popup(window)

    assert len(window.suggestion_popup.shown) == 1
    assert window._popup_instance == session.overlay.instance


def test_reopened_popup_is_rendered_again(session, vault) -> None:
    window = _window(session)
    session.on_input_changed("@", 1)
    MainWindow._sync_popup(window)

    (vault / "c.md").write_text("Gamma notes", encoding="utf-8")
    session.on_input_changed("@ @", 3)
    MainWindow._sync_popup(window)

    shown = window.suggestion_popup.shown
    assert len(shown) == 2
    assert "c.md" in shown[1]
    assert window.suggestion_popup.visible


def test_closed_overlay_hides_popup(session) -> None:
    window = _window(session)
    session.on_input_changed("@", 1)
    MainWindow._sync_popup(window)

    session.on_key("Escape")
    MainWindow._sync_popup(window)

    assert not window.suggestion_popup.visible
