import pytest

from akiutils.errors import BasicStringError, new


def test_error_text_has_file_and_line():
    err = new("boom", "x.py", 7)
    assert err.error() == "x.py:7 boom"


def test_str_matches_error():
    err = new("something failed", "module.py", 42)
    assert str(err) == err.error()


def test_attributes_are_kept():
    err = BasicStringError("message", "file.py", 3)
    assert (err.text, err.file, err.line) == ("message", "file.py", 3)


def test_error_can_be_raised_and_caught():
    err = new("bad thing", "here.py", 1)
    assert err.error() == "here.py:1 bad thing"
    assert err.text == "bad thing"
    with pytest.raises(BasicStringError, match=r"^here\.py:1 bad thing$") as info:
        raise err
    assert info.value is err


def test_default_location_is_caller():
    err = new("oops")
    assert err.file == __file__
    assert err.line > 0
    assert err.error().endswith(" oops")


def test_is_exception():
    err = new("x", "f", 1)
    assert isinstance(err, Exception)
    assert err.args == (err.error(),)