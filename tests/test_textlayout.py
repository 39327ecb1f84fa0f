import pytest

from morphmania.textlayout import TextLayout, split_lines


def ten_px(_ch):
    return 640.0


def make(width=100, height=200, margin=0.0, space=5.0, font_size=20):
    return TextLayout(font_size, ten_px, (width, height), margin, space)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\n\nb", ["a", "", "b"]),
        ("a\nb\n\n", ["a", "b", ""]),
    ],
)
def test_split_lines(text, expected):
    assert split_lines(text) == expected


def test_get_screen_pos_scales_by_drawable():
    layout = make(width=100, height=200)
    assert layout.get_screen_pos((0.5, 0.25)) == (50.0, 50.0)


def test_line_spacing_uses_font_size_and_gap():
    layout = make(font_size=20, space=5.0)
    assert layout.line_spacing(1.0) == 25.0
    assert layout.line_spacing(0.5) == 15.0


def test_line_origins_stack_upwards_ending_at_y():
    layout = make()
    origins = layout.line_origins(["a", "b", "c"], 3.0, 10.0, 1.0)
    assert [o[0] for o in origins] == ["a", "b", "c"]
    assert all(o[1] == 3.0 for o in origins)
    assert origins[-1][2] == 10.0
    spacing = layout.line_spacing(1.0)
    assert origins[0][2] - origins[1][2] == pytest.approx(spacing)


def test_wrap_line_short_text_unchanged():
    layout = make()
    assert layout.wrap_line("hello", 1.0) == "hello"
    assert layout.wrap_line("", 1.0) == ""


def test_wrap_line_exact_fit_not_wrapped():
    layout = make()
    assert layout.wrap_line("a" * 10, 1.0) == "a" * 10


def test_wrap_line_breaks_at_last_space():
    layout = make()
    assert layout.wrap_line("aaaaa bbbbb", 1.0) == "aaaaa\nbbbbb"


def test_wrap_line_matches_vector_form():
    layout = make()
    text = "one two three four five six seven"
    assert layout.wrap_line(text, 1.0).split("\n") == layout.wrap_line_vector([text], 1.0)


def test_wrapped_pieces_fit_between_margins():
    layout = make(width=200, margin=0.1)
    text = "the quick brown fox jumps over the lazy dog again"
    for piece in layout.wrap_line_vector([text], 1.0):
        width = sum(ten_px(c) / 64.0 for c in piece)
        assert layout.x_start + width <= layout.x_end


def test_wrap_line_vector_only_wraps_last_and_keeps_input():
    layout = make()
    lines = ["x" * 30, "aaaaa bbbbb"]
    result = layout.wrap_line_vector(lines, 1.0)
    assert result == ["x" * 30, "aaaaa", "bbbbb"]
    assert lines == ["x" * 30, "aaaaa bbbbb"]


def test_wrap_line_vector_empty():
    assert make().wrap_line_vector([], 1.0) == []


def test_wrap_text_handles_newlines_and_wrapping():
    layout = make()
    assert layout.wrap_text("aaaaa bbbbb\nhi", 1.0) == ["aaaaa", "bbbbb", "hi"]


def test_wrapped_layout_bottom_origin():
    layout = make(margin=0.1)
    placed = layout.wrapped_layout("hi\nyo", 30.0, 1.0)
    assert [p[0] for p in placed] == ["hi", "yo"]
    assert all(p[1] == layout.x_start for p in placed)
    assert placed[-1][2] == 30.0


def test_wrapped_layout_top_origin_measures_from_top():
    layout = make(height=200)
    placed = layout.wrapped_layout("hi", 10.0, 1.0, top_origin=True)
    assert placed[0][2] == pytest.approx(200 - 10.0 - layout.line_spacing(1.0))


def test_wrapped_layout_top_origin_clamps_to_drawable():
    layout = make(height=200)
    low = layout.wrapped_layout("hi", 1000.0, 1.0, top_origin=True)
    assert low[-1][2] == 0.0
    high = layout.wrapped_layout("hi", -1000.0, 1.0, top_origin=True)
    assert high[-1][2] == 200.0