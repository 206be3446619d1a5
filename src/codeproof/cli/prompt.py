"""Yes/no confirmation capability used by interactive commands."""

from __future__ import annotations

from collections.abc import Callable

from codeproof.constants.remediation import CONFIRM_ANSWER


def prompt_yes_no(question: str, *, read: Callable[[str], str] = input) -> bool:
    """Ask ``question`` and return True only for an explicit ``y`` answer.

    End of input and interrupts count as a refusal.
    """
    try:
        answer = read(question)
    except (EOFError, KeyboardInterrupt):
        return False
    return str(answer).strip().lower() == CONFIRM_ANSWER
