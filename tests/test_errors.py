import pytest

from semweaver.errors import WeaverError, format_errors, handle_errors


class SampleError(WeaverError):
    pass


class MergedError(WeaverError):
    def __init__(self, parts):
        self.parts = list(parts)
        super().__init__("merged")

    @classmethod
    def compound(cls, errors):
        return cls(errors)


def test_handle_errors_with_no_errors_returns_none():
    assert handle_errors([]) is None


def test_handle_errors_single_error_is_raised_unchanged():
    error = SampleError("boom")
    with pytest.raises(SampleError) as info:
        handle_errors([error])
    assert info.value is error


def test_handle_errors_many_errors_raises_compound():
    first, second = SampleError("one"), SampleError("two")
    with pytest.raises(WeaverError) as info:
        handle_errors([first, second])
    assert info.value.errors == [first, second]
    assert str(info.value) == "one\n\ntwo"


def test_compound_flattens_nested_compounds():
    a, b, c = SampleError("a"), SampleError("b"), SampleError("c")
    inner = WeaverError.compound([a, b])
    outer = WeaverError.compound([inner, c])
    assert outer.errors == [a, b, c]


def test_handle_errors_uses_subclass_compound():
    first, second = MergedError([]), MergedError([])
    with pytest.raises(MergedError) as info:
        handle_errors([first, second])
    assert info.value.parts == [first, second]


def test_format_errors_joins_with_blank_lines():
    rendered = format_errors([SampleError("first"), SampleError("second")])
    assert rendered == "first\n\nsecond"


def test_format_errors_empty_is_empty_string():
    assert format_errors([]) == ""


def test_format_errors_single_error():
    assert format_errors([SampleError("only")]) == "only"