"""Tests for the Pager controller: event dispatch, help overlay and drawing."""

import pytest

from peruse.constants import PagerConstants
from peruse.errors import UnsupportedEventError
from peruse.events import END_OF_EVENTS, MouseEvent, ResizeEvent
from peruse.geometry import Geometry
from peruse.keyboard import KeyEvent, KeyType, parse_keystroke
from peruse.pager import pane_size


def press(pager, *keys):
    for key in keys:
        pager.handle_event(parse_keystroke(key))


def feed(pager, *lines):
    for line in lines:
        pager.handle_line(line)


def test_pane_size_leaves_room_for_status_bar():
    assert pane_size(Geometry(80, 24)) == Geometry(78, 22)
    assert pane_size(Geometry(1, 1)) == Geometry(0, 0)


def test_initial_sizes(pager):
    assert pager.size == Geometry(80, 24)
    assert pager.document_view.size == Geometry(78, 22)
    assert pager.document_view.offset == Geometry(0, 0)
    assert not pager.help_visible
    assert pager.active_view is pager.document_view


def test_short_document_never_scrolls(pager, screen):
    """Three lines in a 22-row pane: 25 scroll-downs leave the offset at 0."""
    feed(pager, "a", "b", "c")
    press(pager, *["j"] * 25)
    assert pager.document_view.offset.y == 0
    assert screen()[:3] == ["a", "b", "c"]


def test_lines_on_screen_are_drawn_as_they_arrive(pager, screen):
    feed(pager, "first")
    assert screen()[0] == "first"
    feed(pager, "second")
    assert screen()[:2] == ["first", "second"]


def test_lines_below_the_pane_are_stored_but_not_drawn(pager):
    feed(pager, *[f"line {i}" for i in range(22)])
    before = pager.terminal.stream.getvalue()
    feed(pager, "hidden")
    assert pager.terminal.stream.getvalue() == before
    assert len(pager.document_view.document) == 23


def test_scrolling_reveals_stored_lines(pager, screen):
    feed(pager, *[f"line {i}" for i in range(30)])
    press(pager, "j", "j")
    assert pager.document_view.offset.y == 2
    rows = screen()
    assert rows[0] == "line 2"
    assert rows[21] == "line 23"


def test_paging_keys(pager):
    feed(pager, *[str(i) for i in range(100)])
    press(pager, " ")
    assert pager.document_view.offset.y == 11
    pager.handle_event(KeyEvent(KeyType.SPECIAL, "page_down", "\x1b[6~", is_sequence=True))
    assert pager.document_view.offset.y == 22
    pager.handle_event(KeyEvent(KeyType.SPECIAL, "page_up", "\x1b[5~", is_sequence=True))
    assert pager.document_view.offset.y == 11


def test_unbound_keys_are_ignored(pager):
    feed(pager, *[str(i) for i in range(100)])
    before = pager.terminal.stream.getvalue()
    press(pager, "x", "\x1b", "\x03")
    assert pager.document_view.offset == Geometry(0, 0)
    assert not pager.should_exit
    assert pager.terminal.stream.getvalue() == before


@pytest.mark.parametrize("key", ["q", "Q"])
def test_quit_keys(pager, key):
    press(pager, key)
    assert pager.should_exit


def test_end_of_events_exits(pager):
    pager.handle_event(END_OF_EVENTS)
    assert pager.should_exit


def test_end_of_events_exits_while_help_is_shown(pager):
    press(pager, "?")
    pager.handle_event(END_OF_EVENTS)
    assert pager.should_exit


def test_mouse_event_is_fatal(pager):
    with pytest.raises(UnsupportedEventError):
        pager.handle_event(MouseEvent("MOUSE_LEFT", "\x1b[<0;1;1M"))


def test_help_then_quit_restores_document(pager, screen):
    feed(pager, *[f"line {i}" for i in range(40)])
    press(pager, "j", "j", "j")
    press(pager, "?")
    assert pager.help_visible
    assert screen()[0] == PagerConstants.HELP_LINES[0]
    assert screen()[23] == PagerConstants.HELP_STATUS_TEXT

    press(pager, "q")
    assert not pager.help_visible
    assert not pager.should_exit
    assert pager.document_view.offset.y == 3
    rows = screen()
    assert rows[0] == "line 3"
    assert rows[23] == PagerConstants.STATUS_TEXT


def test_navigation_moves_help_not_document(pager):
    pager.handle_resize(Geometry(80, 8))
    feed(pager, *[str(i) for i in range(40)])
    press(pager, "?", "j", "j")
    assert pager.help_view.offset.y == 2
    assert pager.document_view.offset.y == 0


def test_show_help_twice_keeps_help_position(pager):
    pager.handle_resize(Geometry(80, 8))
    press(pager, "?", "j", "?")
    assert pager.help_view.offset.y == 1


def test_lines_arriving_during_help_appear_after_dismissal(pager, screen):
    feed(pager, "before")
    press(pager, "?")
    before = pager.terminal.stream.getvalue()
    feed(pager, "during")
    assert pager.terminal.stream.getvalue() == before
    assert len(pager.document_view.document) == 2

    press(pager, "q")
    assert screen()[:2] == ["before", "during"]


def test_status_bar_is_drawn_reversed_on_last_row(pager):
    pager.redraw_screen()
    output = pager.terminal.stream.getvalue()
    assert f"{{MOVE 23,0}}{{REVERSE}}{PagerConstants.STATUS_TEXT}{{NORMAL}}" in output


def test_status_bar_is_truncated_to_width(pager, screen):
    pager.handle_resize(Geometry(10, 5))
    assert screen()[4] == PagerConstants.STATUS_TEXT[:10]


def test_resize_event_updates_views_and_redraws(pager, screen):
    feed(pager, *[f"line {i}" for i in range(100)])
    press(pager, *["j"] * 90)
    assert pager.document_view.offset.y == 78

    pager.terminal.term.width, pager.terminal.term.height = 100, 30
    pager.handle_event(ResizeEvent(100, 30))
    assert pager.size == Geometry(100, 30)
    assert pager.document_view.size == Geometry(98, 28)
    assert pager.document_view.offset.y == 78
    rows = screen()
    assert rows[0] == "line 78"
    assert rows[21] == "line 99"
    assert rows[22] == ""
    assert rows[29] == PagerConstants.STATUS_TEXT


def test_resize_while_help_is_shown_resizes_both_views(pager):
    press(pager, "?")
    pager.handle_event(ResizeEvent(50, 10))
    assert pager.help_view.size == Geometry(48, 8)
    assert pager.document_view.size == Geometry(48, 8)


def test_tiny_terminal_does_not_crash(pager):
    pager.handle_resize(Geometry(1, 1))
    feed(pager, "a", "b")
    press(pager, "j", "l", " ", "?", "q")
    assert pager.document_view.offset.y <= 2
    assert pager.document_view.offset.x <= 1
    assert not pager.should_exit
