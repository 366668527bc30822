"""Tests for TailViewer rendering, toggling and truncation."""

import pytest

from tracetail import TailViewer, ViewerConfig
from tracetail.buffer import LineBuffer
from tracetail.wrap import strip_escapes

WIDTH = 60
HEIGHT = 5


def trace_block(n):
    return [
        f"[2024-05-01 10:00:{n:02d}] local.ERROR: Failure number {n} "
        f'{{"exception":"[object] (RuntimeException(code: 0): Failure number {n} at /srv/app/app/Jobs/Run.php:12)',
        "[stacktrace]",
        "#0 /srv/app/vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(36): App\\Jobs\\Run->handle()",
        "#1 /srv/app/vendor/laravel/framework/src/Illuminate/Container/Util.php(41): Illuminate\\Container\\BoundMethod::Illuminate\\Container\\{closure}()",
        "#2 /srv/app/vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(93): Illuminate\\Container\\Util::unwrapIfClosure()",
        "#3 /srv/app/vendor/laravel/framework/src/Illuminate/Container/Container.php(662): Illuminate\\Container\\BoundMethod::call()",
        "#4 /srv/app/app/Console/Kernel.php(20): Illuminate\\Foundation\\Console\\Kernel->handle()",
        "#5 /srv/app/vendor/symfony/console/Application.php(1047): Symfony\\Component\\Console\\Command\\Command->run()",
        "#6 /srv/app/artisan(37): Illuminate\\Foundation\\Console\\Kernel->handle()",
        "#7 {main}",
        '"}',
        f"[2024-05-01 10:01:{n:02d}] local.INFO: Recovered from failure {n}",
    ]


LOG = [line for n in range(6) for line in trace_block(n)]


def make_viewer(hide_vendor, path=None):
    config = ViewerConfig(base_path="/srv/app", hide_vendor=hide_vendor)
    viewer = TailViewer(path, config)
    viewer.buffer.extend(LOG)
    viewer.render(WIDTH, HEIGHT)
    return viewer


def test_render_hidden_has_fewer_rows():
    hidden = make_viewer(True)
    shown = make_viewer(False)

    assert len(hidden.lines) < len(shown.lines)
    assert all(row.compressed is not None for row in hidden.lines if row.is_vendor)
    assert all(row.compressed is None for row in shown.lines)


def test_render_is_idempotent():
    viewer = make_viewer(True)
    first = list(viewer.lines)
    assert viewer.render(WIDTH, HEIGHT) == first


def test_window():
    viewer = make_viewer(False)
    viewer.scroll.index = 3
    assert viewer.window(HEIGHT) == viewer.lines[3 : 3 + HEIGHT]


def test_toggle_sets_pending_until_render():
    viewer = make_viewer(False)
    viewer.scroll.index = 20

    viewer.toggle_vendor()
    assert viewer.hide_vendor
    assert viewer.scroll.pending_index is not None

    viewer.render(WIDTH, HEIGHT)
    assert viewer.scroll.pending_index is None


@pytest.mark.parametrize("start_hidden", [False, True])
def test_round_trip_restores_anchor(start_hidden):
    """Test toggling twice returns to the same row when nothing is clamped."""
    checked = 0
    rows = len(make_viewer(start_hidden).lines)

    for anchor in range(rows):
        viewer = make_viewer(start_hidden)
        anchor_line = viewer.lines[anchor]
        if anchor_line.is_vendor:
            continue
        viewer.scroll.index = anchor

        viewer.toggle_vendor()
        pending = viewer.scroll.pending_index
        viewer.render(WIDTH, HEIGHT)
        if pending is not None and pending != viewer.scroll.index:
            continue
        # The row at the top of the view is the same one
        assert viewer.lines[viewer.scroll.index] == anchor_line

        viewer.toggle_vendor()
        pending = viewer.scroll.pending_index
        viewer.render(WIDTH, HEIGHT)
        if pending is not None and pending != viewer.scroll.index:
            continue
        assert viewer.scroll.index == anchor
        checked += 1

    assert checked > 10


def test_toggle_clamps_to_bottom():
    viewer = make_viewer(False)
    viewer.scroll.index = len(viewer.lines) - 1

    viewer.toggle_vendor()
    viewer.render(WIDTH, HEIGHT)

    assert viewer.scroll.index == len(viewer.lines) - HEIGHT


def test_toggle_on_empty_buffer():
    viewer = TailViewer(config=ViewerConfig(base_path=""))
    viewer.render(WIDTH, HEIGHT)

    viewer.toggle_vendor()
    viewer.render(WIDTH, HEIGHT)
    viewer.toggle_vendor()
    viewer.render(WIDTH, HEIGHT)

    assert viewer.lines == []
    assert viewer.scroll.index == 0


def test_vendor_label_and_hotkeys(tmp_path):
    viewer = TailViewer(tmp_path / "app.log", ViewerConfig(base_path=""))
    assert viewer.vendor_label == "Show Vendor"
    assert [hotkey.key for hotkey in viewer.hotkeys()] == ["v", "t"]

    viewer.hotkeys()[0].callback()
    assert not viewer.hide_vendor
    assert viewer.hotkeys()[0].label == "Hide Vendor"


def test_no_truncate_hotkey_without_file():
    viewer = TailViewer(config=ViewerConfig(base_path=""))
    assert [hotkey.key for hotkey in viewer.hotkeys()] == ["v"]
    assert not viewer.truncate()


def test_truncate(tmp_path):
    path = tmp_path / "laravel.log"
    path.write_text("\n".join(LOG) + "\n")
    viewer = make_viewer(True, path)
    viewer.scroll.index = 10

    assert viewer.truncate()

    assert path.stat().st_size == 0
    assert len(viewer.buffer) == 0
    assert viewer.scroll.index == 0
    assert viewer.render(WIDTH, HEIGHT) == []


def test_truncate_creates_missing_file(tmp_path):
    path = tmp_path / "missing.log"
    viewer = make_viewer(True, path)

    assert viewer.truncate()
    assert path.exists()
    assert path.stat().st_size == 0
    assert len(viewer.buffer) == 0


def test_truncate_failure_keeps_buffer(tmp_path):
    viewer = make_viewer(True, tmp_path)

    assert not viewer.truncate()
    assert len(viewer.buffer) == len(LOG)


def test_buffer_limit_from_config():
    viewer = TailViewer(config=ViewerConfig(base_path="", max_lines=3))
    viewer.buffer.extend(["a", "b", "c", "d"])
    assert list(viewer.buffer) == ["b", "c", "d"]


def test_custom_buffer_and_base_path():
    buffer = LineBuffer(["#0 /srv/app/vendor/foo/Bar.php(1): baz()"])
    viewer = TailViewer(config=ViewerConfig(base_path="/srv/app", hide_vendor=False), buffer=buffer)

    lines = viewer.render(WIDTH, HEIGHT)

    assert len(lines) == 1
    assert lines[0].is_vendor
    assert "#00 /vendor/foo/Bar.php(1)" in strip_escapes(lines[0].text)


LONG_LOG = [f"line {i:03d} " + "x" * 120 for i in range(200)]


def make_long_viewer(width, hide_vendor=True):
    viewer = TailViewer(None, ViewerConfig(base_path="/srv/app", hide_vendor=hide_vendor))
    viewer.buffer.extend(LONG_LOG)
    viewer.render(width, 20)
    return viewer


def test_rows_record_their_raw_line():
    viewer = make_long_viewer(100)

    assert len(viewer.lines) == 400
    assert viewer.line_at_row(50) == (25, 0)
    assert viewer.line_at_row(51) == (25, 1)
    assert viewer.line_at_row(400) is None
    assert viewer.row_for_line(25) == 50
    assert viewer.row_for_line(25, 1) == 51


def test_narrowing_keeps_top_line():
    viewer = make_long_viewer(100)
    viewer.scroll.index = 51

    viewer.render(40, 20)

    # 129 columns wrap to four rows at 40
    assert viewer.scroll.index == 25 * 4 + 1
    assert viewer.line_at_row(viewer.scroll.index) == (25, 1)
    assert strip_escapes(viewer.lines[viewer.scroll.index - 1].text).startswith("line 025")


def test_widening_clamps_offset_to_the_line():
    viewer = make_long_viewer(40)
    viewer.scroll.index = 25 * 4 + 3

    viewer.render(100, 20)

    assert viewer.scroll.index == 25 * 2 + 1
    assert viewer.line_at_row(viewer.scroll.index) == (25, 1)


def test_same_width_leaves_index_alone():
    viewer = make_long_viewer(100)
    viewer.scroll.index = 51
    viewer.render(100, 20)
    assert viewer.scroll.index == 51


def test_pending_toggle_wins_over_reflow():
    viewer = make_viewer(False)
    viewer.scroll.index = 0
    viewer.scroll.pending_index = 7
    viewer.render(WIDTH + 20, HEIGHT)
    assert viewer.scroll.index == 7


def test_reflow_in_hidden_mode_keeps_trace_line():
    viewer = make_viewer(True)
    anchor = viewer.lines.index(next(row for row in viewer.lines if "Kernel.php(20)" in row.text))
    viewer.scroll.index = anchor
    line_no, offset = viewer.line_at_row(anchor)

    viewer.render(WIDTH + 40, HEIGHT)

    assert viewer.line_at_row(viewer.scroll.index) == (line_no, offset)
    assert "Kernel.php(20)" in viewer.lines[viewer.scroll.index].text


def test_folded_vendor_line_maps_to_next_shown_row():
    viewer = make_viewer(True)
    # "#2" of the first trace sits inside a vendor run folded into one summary
    folded = 4
    assert all(row.line_no != folded for row in viewer.lines)
    assert viewer.lines[viewer.row_for_line(folded)].line_no > folded
