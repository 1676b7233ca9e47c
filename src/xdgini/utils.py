from typing import Callable
from .globals import LINE_TERMINATOR


def split_lines(text: str) -> list[str]:
    """Split text into physical lines, keeping their terminators.

    Only "\\n" terminates a line. The last line has no terminator if the text doesn't
    end with one.

    Args:
        text (str): The text to split.

    Returns:
        list[str]: The physical lines. Empty if text is empty.
    """
    lines: list[str] = []
    pos = 0
    while pos < len(text):
        end = text.find(LINE_TERMINATOR, pos)
        end = len(text) if end < 0 else end + len(LINE_TERMINATOR)
        lines.append(text[pos:end])
        pos = end
    return lines


def copy_doc[
    **P, T
](doc_source: Callable[P, T], annotations: bool = False) -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Decorator to copy the docstring of doc_source to another.
    Inspired by Trevor (stackoverflow.com/users/13905088/trevor)
    from: stackoverflow.com/questions/68901049/
        copying-the-docstring-of-function-onto-another-function-by-name

    Args:
        doc_source (Callable): The source function to copy the docstring from.
        annotations (bool, optional): Whether to also copy annotations. Defaults to False.

    Returns:
        Callable: The decorated function.

    """

    def wrapped(doc_target: Callable[P, T]) -> Callable[P, T]:
        doc_target.__doc__ = doc_source.__doc__
        if annotations:
            doc_target.__annotations__ = doc_source.__annotations__
        return doc_target

    return wrapped
