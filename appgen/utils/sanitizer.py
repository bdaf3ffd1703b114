from __future__ import annotations

from typing import List

FENCE_MARKER = "```"


def split_lines(text: str) -> List[str]:
    """Split on "\\n" only, dropping a "\\r" that directly precedes it.

    Other characters str.splitlines() treats as breaks (form feed, lone CR,
    U+2028 ...) stay inside their line. A trailing newline does not produce
    an empty last line.
    """
    lines = text.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences a model may wrap its answer in.

    Marker lines are dropped and toggle the fence state. Blank lines inside a
    fence are dropped too; everything outside a fence is kept verbatim. An
    unterminated fence simply leaves the state toggled until the end.
    """
    cleaned: List[str] = []
    in_code_block = False

    for line in split_lines(text):
        stripped = line.strip()
        if stripped.startswith(FENCE_MARKER):
            in_code_block = not in_code_block
            continue
        if not in_code_block or stripped:
            cleaned.append(line)

    return "\n".join(cleaned)
