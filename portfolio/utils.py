from typing import List


def split_list(text: str, delimiter: str = ",") -> List[str]:
    """Split delimiter-separated free text, trimming items and dropping blanks."""
    if not text:
        return []
    return [item.strip() for item in text.split(delimiter) if item.strip()]


def first_sentence(text: str) -> str:
    # Matches the page header: everything before the first period, re-terminated
    return text.split(".")[0] + "."
