"""Date extraction from file names and probe output."""

import re

from fcarch.timestamp import SEPARATOR

# Separator between date/time groups: one of . _ space - or nothing
_SEP = r"[._ \-]?"

# YYYY MM DD HH MM SS, anywhere in the name
TIMESTAMP_PATTERN = re.compile(r"(\d{4})" + "".join(rf"{_SEP}(\d{{2}})" for _ in range(5)))


def extract_filename_timestamp(name: str) -> str | None:
    """
    Extract a date/time from a file name.

    Matches names like:
    - clip_2021.03.15_14.30.00.mov
    - VID_20210315_143000.mp4
    - 2021-03-15 14-30-00.wav

    Returns the first match with separators normalized to underscores
    (YYYY_MM_DD_HH_MM_SS), or None when the name carries no timestamp.
    Field ranges are not checked here.
    """
    match = TIMESTAMP_PATTERN.search(name)
    if not match:
        return None
    return SEPARATOR.join(match.groups())
