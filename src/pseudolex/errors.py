"""Error type with formatted source context."""

from __future__ import annotations


class PseudocodeSyntaxError(Exception):
    """Raised on the first line that matches no statement shape.

    Diagnostics are line-granular: ``line`` is the 1-based source line and
    ``raw_text`` the comment-stripped, trimmed text that failed to classify.
    """

    def __init__(self, message: str, line: int, raw_text: str) -> None:
        self.message = message
        self.line = line
        self.raw_text = raw_text
        super().__init__(self.format())

    def format(self, filename: str = "input.pseudo") -> str:
        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"
        carets = "^" * max(1, len(self.raw_text))

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {self.raw_text}\n"
            f"{blank_gutter} {carets}"
        )
