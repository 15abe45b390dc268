import sys
from typing import Any, TextIO

_ERRORS = "backslashreplace"
RULE_WIDTH = 60


def _encoding_of(stream) -> str:
    return getattr(stream, "encoding", None) or "utf-8"


def safe_str(value: Any, encoding: str = "utf-8") -> str:
    """Text form of ``value`` that is guaranteed to encode with ``encoding``."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors=_ERRORS)
    text = str(value)
    try:
        text.encode(encoding)
        return text
    except (UnicodeEncodeError, LookupError):
        return text.encode("ascii", errors=_ERRORS).decode("ascii")


def safe_print(*args: Any, sep: str = " ", end: str = "\n", file: TextIO = None) -> None:
    out = file if file is not None else sys.stdout
    encoding = _encoding_of(out)
    out.write(sep.join(safe_str(a, encoding) for a in args) + end)


def rule(char: str = "-", file: TextIO = None) -> None:
    safe_print(char * RULE_WIDTH, file=file)


def heading(title: str, file: TextIO = None) -> None:
    safe_print("", file=file)
    rule("=", file=file)
    safe_print(title.center(RULE_WIDTH), file=file)
    rule("=", file=file)
