from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Label(str, Enum):
    TOTAL = "total"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    METADATA_ERROR = "metadata_error"
    HARNESS_ERROR = "harness_error"
    TIMEOUT_ERROR = "timeout_error"
    PROCESS_ERROR = "process_error"
    RUNNER_EXCEPTION = "runner_exception"
    TODO_ERROR = "todo_error"
    PERCENTAGE_PASSING = "percentage_passing"


_FIXED_ICONS: dict[Label, str] = {
    Label.TOTAL: "🧪",
    Label.PASSED: "✅",
    Label.FAILED: "❌",
    Label.SKIPPED: "⚠️",
    Label.METADATA_ERROR: "📄",
    Label.HARNESS_ERROR: "⚙️",
    Label.TIMEOUT_ERROR: "💀",
    Label.PROCESS_ERROR: "💥️",
    Label.RUNNER_EXCEPTION: "🐍",
    Label.TODO_ERROR: "📝",
}

CELEBRATORY_TOTAL_FALLBACK = "🎉"
SAD_CARET_FALLBACK = ":^("


@dataclass(frozen=True)
class CustomEmojis:
    """Platform custom emojis resolved for a single invocation.

    Each entry is the chat markup for the emoji (``<:name:id>``), or ``None``
    when the emoji is unavailable.
    """

    ladybird: str | None = None
    makemore: str | None = None
    sadcaret: str | None = None

    @property
    def sad_caret(self) -> str:
        return self.sadcaret or SAD_CARET_FALLBACK

    @property
    def celebratory_total(self) -> str:
        # Falls back to a plain emoji instead of the total icon so growth stays visible.
        return self.makemore or CELEBRATORY_TOTAL_FALLBACK


NO_CUSTOM_EMOJIS = CustomEmojis()


def status_icon_for_label(label: str, emojis: CustomEmojis = NO_CUSTOM_EMOJIS) -> str:
    try:
        known = Label(label)
    except ValueError:
        return label

    if known is Label.PERCENTAGE_PASSING:
        return emojis.ladybird or label
    return _FIXED_ICONS[known]
