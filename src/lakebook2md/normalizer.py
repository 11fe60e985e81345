"""Post-process rendered Markdown."""

from __future__ import annotations

MAX_COLLAPSE_PASSES = 50


def normalize_markdown(text: str) -> str:
    """Trim trailing whitespace on every line and collapse runs of blank lines.

    Every run of three or more newlines ends up as exactly two. Each pass
    replaces non-overlapping ``\\n\\n\\n`` triples, so a run of length ``n``
    needs about ``log(n)`` passes; the pass cap only bounds pathological input.
    """
    output = "\n".join(line.rstrip() for line in text.split("\n"))
    for _ in range(MAX_COLLAPSE_PASSES):
        output = output.replace("\n\n\n", "\n\n")
        if "\n\n\n" not in output:
            break
    return output
