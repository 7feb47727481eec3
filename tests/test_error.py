import io

import pytest

from pulsar.utils.error import (
    CompilationFailed,
    Error,
    ErrorBuilder,
    ErrorCode,
    ErrorManager,
    Level,
    Style,
    check_errors,
)
from pulsar.utils.span import Loc, Source, Span


def _span_on_x():
    source = Source.file("test", "func f()\nlet x = 5\nend\n")
    return Span.unit(Loc(line=2, col=5, pos=13, source=source))


def _error(code=ErrorCode.UNEXPECTED_TOKEN, message="bad"):
    return ErrorBuilder().with_code(code).message(message).build()


def test_error_code_from_value():
    assert ErrorCode.from_value(0) is ErrorCode.WOMP_WOMP
    assert ErrorCode.from_value(12) is ErrorCode.AFFINE_RESOURCE
    assert ErrorCode.from_value(13) is None
    assert ErrorCode.from_value(-1) is None


def test_error_code_description_and_display():
    assert ErrorCode.UNEXPECTED_TOKEN.description() == (
        "A different token was encountered than expected."
    )
    assert str(ErrorCode.UNBOUND_NAME) == str(int(ErrorCode.UNBOUND_NAME))


def test_form_header():
    assert Level.ERROR.form_header(ErrorCode.UNEXPECTED_TOKEN) == "error[E0003]"
    assert Level.WARNING.form_header(ErrorCode.WOMP_WOMP).startswith("warning[W")


def test_form_header_color_adds_escapes():
    colored = Level.ERROR.form_header(ErrorCode.UNEXPECTED_TOKEN, True)
    assert "\x1b[" in colored
    assert "error[E0003]" in colored


def test_render_without_span():
    error = _error(ErrorCode.UNEXPECTED_EOF, "eof here")
    assert error.render() == Level.ERROR.form_header(ErrorCode.UNEXPECTED_EOF) + ": eof here\n"


def test_secondary_error_has_no_header():
    error = ErrorBuilder().of_style(Style.SECONDARY).message("more").build()
    assert error.render() == "more\n"


def test_render_with_span_and_explain():
    span = _span_on_x()
    error = (
        ErrorBuilder()
        .with_code(ErrorCode.UNBOUND_NAME)
        .span(span)
        .message("unbound")
        .explain("not bound")
        .fix("bind it")
        .build()
    )
    text = error.render()
    assert f"{span.start}: unbound" in text
    assert "   2 │  let x = 5" in text
    assert "   1 │  func f()" in text
    assert "   3 │  end" in text
    assert "     │  " + " " * 4 + "└ not bound" in text
    assert text.endswith("Suggestion: bind it")


def test_render_color_only_adds_escapes():
    span = _span_on_x()
    error = ErrorBuilder().span(span).message("m").build()
    assert "\x1b[" not in error.render(False)
    assert "\x1b[" in error.render(True)


def test_continues_requires_secondary():
    with pytest.raises(ValueError):
        ErrorBuilder().continues()
    error = ErrorBuilder().of_style(Style.SECONDARY).continues().build()
    assert error.message == "   ..."


def test_maybe_fix_and_without_loc():
    error = ErrorBuilder().span(_span_on_x()).without_loc().maybe_fix(None).build()
    assert error.span is None
    assert error.fix is None
    assert ErrorBuilder().maybe_fix("x").build().fix == "x"


def test_build_defaults():
    error = ErrorBuilder().build()
    assert error == Error()
    assert error.level is Level.ERROR
    assert error.code is ErrorCode.WOMP_WOMP


def test_manager_counts_primary_errors_only():
    manager = ErrorManager(5)
    assert not manager.has_items()
    manager.record(ErrorBuilder().at_level(Level.WARNING).message("w").build())
    assert manager.has_items()
    assert not manager.has_errors()
    manager.record(_error())
    assert manager.has_errors()


def test_manager_full():
    manager = ErrorManager(1)
    assert manager.record(_error())
    assert manager.is_full()
    assert not manager.record(_error())


def test_consume_and_write():
    manager = ErrorManager(10)
    manager.record(_error(ErrorCode.UNEXPECTED_TOKEN, "first"))
    manager.record(ErrorBuilder().of_style(Style.SECONDARY).message("detail").build())
    manager.record(_error(ErrorCode.WOMP_WOMP, "second"))
    out = io.StringIO()
    manager.consume_and_write(out)
    text = out.getvalue()
    assert text.count("For more information, pass `--explain") == 1
    assert "For more information, pass `--explain 3`" in text
    assert text.index("detail") < text.index("--explain")
    assert text.index("--explain") < text.index("second")
    assert not manager.has_items()
    assert not manager.has_errors()


def test_check_errors_passes_value_through():
    manager = ErrorManager(10)
    assert check_errors([1, 2], manager, io.StringIO()) == [1, 2]


def test_check_errors_raises_on_none_and_writes():
    manager = ErrorManager(10)
    manager.record(_error(ErrorCode.UNEXPECTED_TOKEN, "oops"))
    out = io.StringIO()
    with pytest.raises(CompilationFailed):
        check_errors(None, manager, out)
    assert "oops" in out.getvalue()
    assert not manager.has_errors()