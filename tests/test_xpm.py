import pytest

from solong.xpm import (
    XpmError,
    XpmImage,
    load_xpm,
    parse_xpm,
    parse_xpm_text,
    split_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1 ",
"r c red",
"b c #0000FF",
". c None",
/* pixels */
"rb.",
".br"
};
"""


def test_split_words_on_spaces_and_tabs():
    assert split_words("  16 \t16  2\t1 ") == ["16", "16", "2", "1"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_comments_keeps_length_and_quotes():
    text = 'a /* gone */ "keep /* this */" // tail\n"x"'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert "gone" not in stripped
    assert "tail" not in stripped
    assert '"keep /* this */"' in stripped
    assert stripped.endswith('"x"')


def test_text_to_rgb_hex():
    assert text_to_rgb("#FF0000") == 0xFF0000


def test_text_to_rgb_named_case_insensitive():
    assert text_to_rgb("RED") == 0xFF0000


def test_text_to_rgb_with_suffix():
    assert text_to_rgb("ghost", "white") == 0xF8F8FF


def test_text_to_rgb_none_and_unknown():
    assert text_to_rgb("None") == -1
    assert text_to_rgb("nosuchcolour") == 0


def test_text_to_rgb_full_hex_wraps_to_none():
    assert text_to_rgb("#FFFFFFFF") == -1


def test_parse_sample():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert image.pixels == (0xFF0000, 0x0000FF, 0xFF000000,
                            0xFF000000, 0x0000FF, 0xFF0000)


def test_rgba_bytes_layout():
    image = parse_xpm_text(SAMPLE)
    data = image.to_rgba_bytes()
    assert len(data) == image.width * image.height * 4
    assert data[0:4] == bytes((0xFF, 0, 0, 0xFF))
    assert data[8:12][3] == 0


def test_rgba_from_constructed_image():
    image = XpmImage(1, 1, (0x0000FF,))
    assert image.to_rgba_bytes() == bytes((0, 0, 0xFF, 0xFF))


def test_two_char_keys_last_definition_wins():
    image = parse_xpm(["2 1 2 2", "aa c red", "aa c blue", "aaaa"])
    assert image.pixels == (0x0000FF, 0x0000FF)


def test_long_keys_first_definition_wins():
    image = parse_xpm(["1 1 2 3", "aaa c red", "aaa c blue", "aaa"])
    assert image.pixels == (0xFF0000,)


def test_undefined_key_is_black():
    image = parse_xpm(["2 1 1 1", "r c red", "rz"])
    assert image.pixels == (0xFF0000, 0)


def test_suffixed_name_in_definition():
    image = parse_xpm(["1 1 1 1", "g c ghost white", "g"])
    assert image.pixels == (0xF8F8FF,)


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["1 1 1"],
        ["0 1 1 1", "r c red", "r"],
        ["1 1 1 1"],
        ["1 1 1 1", "r s red", "r"],
        ["1 1 1 1", "r c", "r"],
        ["1 2 1 1", "r c red", "r"],
    ],
)
def test_malformed_data_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_load_xpm_round_trip(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE)
    assert load_xpm(path) == parse_xpm_text(SAMPLE)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "absent.xpm")