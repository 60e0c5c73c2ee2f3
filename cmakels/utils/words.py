"""Identifier extraction from a line of CMake source."""


def is_word_char(char: str) -> bool:
    # Angle brackets belong to placeholder names such as <LANG>_FLAGS.
    return char.isalnum() or char in "_<>"


def get_word_at_position(line: str, character: int) -> str:
    """
    Extract the whole word touching the given character position.

    Returns an empty string when the position is not on a word.
    """
    if character > len(line):
        return ""

    start = character
    end = character

    while start > 0 and is_word_char(line[start - 1]):
        start -= 1

    while end < len(line) and is_word_char(line[end]):
        end += 1

    return line[start:end]


def get_word_before_position(line: str, character: int) -> str:
    """The part of the word under the cursor that lies before it."""
    character = min(character, len(line))
    start = character
    while start > 0 and is_word_char(line[start - 1]):
        start -= 1
    return line[start:character]
