# sports_venues/utils/misc_utils.py
import re

# Footnote references such as "[1]" or "[note 2]"; greedy, so "[a][b]" goes in one pass
ANNOTATION_RE = re.compile(r"\[.*\]")
THOUSANDS_SEPARATOR = ","


def strip_annotations(text: str) -> str:
    """Removes bracketed footnote markers and surrounding whitespace."""
    return ANNOTATION_RE.sub("", text).strip()


def strip_thousands_separators(text: str) -> str:
    return text.replace(THOUSANDS_SEPARATOR, "")
