from typing import get_args
from .globals import (
    VALID_MARKERS,
    COMMENT_PREFIX,
    KEY_VALUE_DELIMITER,
    ORDER_STEP,
)


class Parameters:
    """Parameters for parsing and rendering."""

    def __init__(
        self,
        comment_prefixes: VALID_MARKERS | tuple[VALID_MARKERS, ...] = COMMENT_PREFIX,
        key_value_delimiter: VALID_MARKERS = KEY_VALUE_DELIMITER,
        order_step: int = ORDER_STEP,
    ) -> None:
        """
        Args:
            comment_prefixes (VALID_MARKERS | tuple[VALID_MARKERS, ...], optional):
                Prefix character(s) that denote a comment line. Defaults to "#".
            key_value_delimiter (VALID_MARKERS, optional): Delimiter that separates an
                entry key from its value. Used for splitting parsed lines and for
                writing synthesized lines. Defaults to "=".
            order_step (int, optional): Distance between the order keys of two
                successive substantive lines. Defaults to 10.
        """
        # because comment_prefixes and key_value_delimiter check each other on setting
        self._comment_prefixes = ()
        self._key_value_delimiter = ""

        self.comment_prefixes = comment_prefixes
        self.key_value_delimiter = key_value_delimiter
        self.order_step = order_step

    @property
    def comment_prefixes(self) -> tuple[VALID_MARKERS, ...]:
        return self._comment_prefixes

    @comment_prefixes.setter
    def comment_prefixes(
        self, value: VALID_MARKERS | tuple[VALID_MARKERS, ...]
    ) -> None:
        if not isinstance(value, tuple):
            value = (value,)
        if not value:
            raise ValueError("At least one comment prefix is required.")
        self.verify_marker(value, "comment prefix")
        self.verify_between_markers(value, self._key_value_delimiter)
        self._comment_prefixes = value

    @property
    def key_value_delimiter(self) -> VALID_MARKERS:
        return self._key_value_delimiter

    @key_value_delimiter.setter
    def key_value_delimiter(self, value: VALID_MARKERS) -> None:
        self.verify_marker((value,), "key-value delimiter")
        self.verify_between_markers(self._comment_prefixes, value)
        self._key_value_delimiter = value

    @property
    def order_step(self) -> int:
        return self._order_step

    @order_step.setter
    def order_step(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"Order step must be a positive integer, got {value!r}.")
        self._order_step = value

    def verify_marker(self, marker: tuple[str, ...], name: str) -> None:
        valid = get_args(VALID_MARKERS)
        for val in marker:
            if val not in valid:
                raise ValueError(
                    f"{val!r} is not allowed as a {name}. Choose one of {valid}."
                )

    def verify_between_markers(
        self, comment_prefixes: tuple[str, ...], key_value_delimiter: str
    ) -> None:
        if key_value_delimiter in comment_prefixes:
            raise ValueError(
                "Comment prefixes and key-value delimiter have to be distinct from each other."
            )

    def update(self, **kwargs) -> None:
        """Update parameters with kwargs

        Args:
            **kwargs: Keyword-arguments to update the parameters with.
        """
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __repr__(self) -> str:
        return (
            f"Parameters(comment_prefixes={self.comment_prefixes!r}, "
            f"key_value_delimiter={self.key_value_delimiter!r}, "
            f"order_step={self.order_step!r})"
        )
