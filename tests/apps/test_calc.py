"""Tests for the Calculator app."""

import pytest

from upsicron.apps.calc import Calculator, ExpressionError, evaluate, format_number


class TestEvaluate:
    """The restricted arithmetic evaluator."""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2+2", 4),
            ("2*(3+4)", 14),
            ("7/2", 3.5),
            ("-3+1", -2),
            (".5*4", 2.0),
            ("10/4*2", 5.0),
            ("2**3", 8),
            ("2**-1", 0.5),
        ],
    )
    def test_arithmetic(self, expression, expected):
        """Plain arithmetic evaluates like Python would."""
        assert evaluate(expression) == expected

    @pytest.mark.parametrize("expression", ["", "2+", "()", "2(3)", "1..2"])
    def test_invalid(self, expression):
        """Malformed input raises ExpressionError."""
        with pytest.raises(ExpressionError):
            evaluate(expression)

    def test_division_by_zero(self):
        """Division by zero is left as an arithmetic error."""
        with pytest.raises(ZeroDivisionError):
            evaluate("1/0")

    def test_rejects_names(self):
        """Nothing but arithmetic characters gets near the parser."""
        with pytest.raises(ExpressionError):
            evaluate("__import__")

    @pytest.mark.parametrize("expression", ["2**101", "9**100**2", "(2**64)**100", "(-8)**(1/3)"])
    def test_power_limits(self, expression):
        """Oversized exponents, huge integer powers and complex results are rejected."""
        with pytest.raises(ExpressionError):
            evaluate(expression)

    @pytest.mark.parametrize("expression", ["1" + "+1" * 1500, "-" * 1200 + "1", "(" * 300 + "1" + ")" * 300])
    def test_deeply_chained_input(self, expression):
        """Chains too deep for the parser or tree walk become ExpressionError."""
        with pytest.raises(ExpressionError):
            evaluate(expression)

    def test_format_number(self):
        """Integral floats print without a decimal part."""
        assert format_number(4.0) == "4"
        assert format_number(3.5) == "3.5"
        assert format_number(7) == "7"


class TestCalculatorApp:
    """Key handling and rendering of the app."""

    def test_result_scenario(self, ctx, press):
        """``2+2`` then Enter shows a preserved green result."""
        app = Calculator()
        press(app, ctx, "2", "+", "2", "Enter")
        line = ctx.display.lines[2]
        assert line.text.startswith("Result: 4")
        assert "$@color=green$" in line.text
        assert line.preserve_on_clear
        assert ctx.session.input_buffer == ""

    def test_error_scenario(self, ctx, press):
        """``2+`` then Enter shows the error marker instead of crashing."""
        app = Calculator()
        press(app, ctx, "2", "+", "Enter")
        assert ctx.display.lines[2].text.startswith("Error: Invalid expression")
        assert ctx.session.input_buffer == "2+"

    def test_power_typed_with_star_key(self, ctx, press):
        """Two ``*`` keys form the power operator."""
        app = Calculator()
        press(app, ctx, "2", "*", "*", "3", "Enter")
        assert ctx.display.lines[2].text.startswith("Result: 8 ")

    @pytest.mark.parametrize("expression", ["1" + "+1" * 1500, "-" * 1200 + "1"])
    def test_long_chain_shows_error(self, ctx, press, expression):
        """A held-down key producing a huge chain never escapes the handler."""
        app = Calculator()
        for ch in expression:
            press(app, ctx, ch)
        assert ctx.session.input_buffer == expression
        press(app, ctx, "Enter")
        assert ctx.display.lines[2].text.startswith("Error: Invalid expression")
        assert ctx.session.input_buffer == expression

    def test_overflowing_float_shows_error(self, ctx, press):
        """Float overflow is reported like any other invalid expression."""
        app = Calculator()
        ctx.session.input_buffer = "(10.0**100)**100"
        press(app, ctx, "Enter")
        assert ctx.display.lines[2].text.startswith("Error: Invalid expression")

    def test_only_arithmetic_characters_appended(self, ctx, press):
        """Letters, spaces and named keys are ignored."""
        app = Calculator()
        press(app, ctx, "1", "a", " ", "+", "x", "(", "ArrowUp")
        assert ctx.session.input_buffer == "1+("

    def test_backspace(self, ctx, press):
        """Backspace drops the last character."""
        app = Calculator()
        press(app, ctx, "1", "2", "Backspace")
        assert ctx.session.input_buffer == "1"

    def test_escape_returns_to_idle(self, make_ctx, press):
        """Escape goes back to the menu with an empty buffer."""
        ctx = make_ctx("app.calc")
        ctx.session.input_buffer = "12"
        press(Calculator(), ctx, "Escape")
        assert ctx.session.current_state == "idle"
        assert ctx.session.input_buffer == ""

    def test_render_keeps_result_line(self, ctx, press):
        """The result line survives the next render."""
        app = Calculator()
        press(app, ctx, "3", "*", "3", "Enter")
        press(app, ctx, "1")
        app.render(ctx)
        texts = ctx.display.texts()
        assert texts[0] == "=== Calculator ==="
        assert texts[1] == "Input: 1"
        assert texts[2].startswith("Result: 9")
