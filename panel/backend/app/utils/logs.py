"""Parse proxy server log lines (timestamp, ANSI-coloured level, message)."""
import re
from typing import Optional

from pydantic import BaseModel

# Lines arrive either raw or JSON-escaped, so accept both forms of the
# tab separators and the escape sequence around the level.
_TAB = r"(?:\t|\\t)"
_ESC = r"(?:\x1b|\\u001b)"
LOG_PATTERN = re.compile(rf"^(.+?){_TAB}{_ESC}\[.*?m(.*?){_ESC}\[0m{_TAB}(.+)$")


class ParsedLog(BaseModel):
    timestamp: str
    level: str
    message: str


def parse_log(line: str) -> Optional[ParsedLog]:
    m = LOG_PATTERN.match(line)
    if not m:
        return None
    return ParsedLog(timestamp=m.group(1), level=m.group(2), message=m.group(3))
