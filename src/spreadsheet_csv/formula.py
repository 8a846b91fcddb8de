"""
Formula cell values.

A formula is any cell whose source text started with ``=`` (or ``{=`` for
array formulas). The leading marker is stripped on construction and added
back when the value is rendered.
"""


class FormulaValue:
    """Represents a spreadsheet formula string.

    Args:
        value: Formula text, with or without the leading ``=``.

    Raises:
        ValueError: When value is None
    """

    __slots__ = ("_value",)

    def __init__(self, value: str):
        if value is None:
            raise ValueError("value may not be None")

        if value.startswith("="):
            self._value = value[1:].strip()
        elif value.startswith("{="):
            # Array formula: keep the brace, drop the marker
            self._value = "{" + value[2:].strip()
        else:
            self._value = value.strip()

    @property
    def value(self) -> str:
        """Formula text without the leading ``=``."""
        return self._value

    def __str__(self) -> str:
        return "=" + self._value

    def __repr__(self) -> str:
        return f"FormulaValue({self._value!r})"

    def __eq__(self, other) -> bool:
        if other is self:
            return True
        if isinstance(other, FormulaValue):
            return other._value == self._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)
