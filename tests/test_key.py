import pytest

from spotterm.key import Key, KeyCode


def test_from_f_covers_all_function_keys():
    codes = [Key.from_f(n).code for n in range(13)]
    assert codes == [KeyCode[f"F{n}"] for n in range(13)]


@pytest.mark.parametrize("n", [13, 20, -1])
def test_from_f_rejects_unknown(n):
    with pytest.raises(ValueError, match=f"unknown function key: F{n}"):
        Key.from_f(n)


def test_space_variants():
    assert str(Key.alt(" ")) == "<Alt+Space>"
    assert str(Key.ctrl(" ")) == "<Ctrl+Space>"
    assert str(Key.char(" ")) == "<Space>"


def test_plain_char_displays_itself():
    assert str(Key.char("q")) == "q"


def test_modifier_display_wraps_character():
    text = str(Key.ctrl("x"))
    assert text.startswith("<Ctrl+") and text.endswith("x>")
    text = str(Key.alt("y"))
    assert text.startswith("<Alt+") and text.endswith("y>")


def test_arrow_and_named_keys():
    assert str(Key(KeyCode.LEFT)) == "<Left Arrow Key>"
    assert str(Key(KeyCode.PAGE_UP)) == "<PageUp>"
    assert str(Key.from_f(5)) == "F5"


def test_equality_and_hashing():
    keys = {Key.ctrl("c"), Key.ctrl("c"), Key.char("c"), Key.alt("c")}
    assert len(keys) == 3
    assert Key.ctrl("c") == Key(KeyCode.CTRL, "c")
    assert Key.ctrl("c") != Key.char("c")


@pytest.mark.parametrize(
    "code, ch",
    [(KeyCode.CHAR, "ab"), (KeyCode.CHAR, None), (KeyCode.ENTER, "x"), (KeyCode.ALT, "")],
)
def test_invalid_character_payload(code, ch):
    with pytest.raises(ValueError):
        Key(code, ch)