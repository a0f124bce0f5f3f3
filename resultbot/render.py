"""Embed rendering for test result runs.

Every function here is pure: the same run records and emojis always render
the same strings. Numbers with a fractional part are rounded half away from
zero on their exact binary value, to two decimals.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from .feeds import TestVariant
from .icons import NO_CUSTOM_EMOJIS, CustomEmojis, Label, status_icon_for_label
from .models import CommitInfo, Embed, EmbedAuthor, EmbedField, EmbedFooter, RunRecord, TestGroupResult

PRIMARY_REPOSITORY_KEY = "serenity"
PRIMARY_REPOSITORY_NAME = "ladybird"
SHORT_HASH_LENGTH = 7
FIELD_SEPARATOR = " | "

REPOSITORY_URL_BY_NAME: Mapping[str, str] = MappingProxyType(
    {
        "ladybird": "https://github.com/LadybirdBrowser/ladybird/",
        "libjs-test262": "https://github.com/LadybirdBrowser/libjs-test262/",
        "test262": "https://github.com/tc39/test262/",
        "test262-parser-tests": "https://github.com/tc39/test262-parser-tests/",
    }
)

_CENTS = Decimal("0.01")


def to_fixed(value: float) -> Decimal:
    return Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _sign(difference) -> str:
    return "+" if difference > 0 else ""


def pass_percentage(test: TestGroupResult) -> float:
    total = test.results.get(Label.TOTAL.value, 0)
    if not total:
        return 0.0
    return test.results.get(Label.PASSED.value, 0) / (total / 100)


def percentage_difference(percentage: float, previous_percentage: float) -> Decimal:
    """Rounded change in pass percentage; compares equal to 0 when unchanged."""
    return to_fixed(percentage - previous_percentage)


def render_percentage_field(
    test: TestGroupResult,
    previous_test: TestGroupResult | None,
    emojis: CustomEmojis = NO_CUSTOM_EMOJIS,
) -> str:
    percentage = pass_percentage(test)
    previous_percentage = pass_percentage(previous_test) if previous_test is not None else 0.0
    difference = percentage_difference(percentage, previous_percentage)

    icon = status_icon_for_label(Label.PERCENTAGE_PASSING.value, emojis)
    field = f"{icon} {to_fixed(percentage)}%"
    if difference != 0:
        field += f" ({_sign(difference)}{difference})"
    return field


def render_label_fields(
    test: TestGroupResult,
    previous_test: TestGroupResult | None,
    emojis: CustomEmojis = NO_CUSTOM_EMOJIS,
) -> list[str]:
    previous_results = previous_test.results if previous_test is not None else {}
    fields = []

    for label, value in test.results.items():
        icon = status_icon_for_label(label, emojis)
        difference = value - previous_results.get(label, 0)

        if difference == 0:
            fields.append(f"{icon} {value}")
            continue

        # More tests than last time.
        if label == Label.TOTAL.value and difference > 0:
            icon = emojis.celebratory_total
        fields.append(f"{icon} {value} ({_sign(difference)}{difference})")

    for label, value in previous_results.items():
        if label not in test.results:
            fields.append(f"{status_icon_for_label(label, emojis)} 0 (-{value})")

    return fields


def render_section_name(name: str, test: TestGroupResult, previous_test: TestGroupResult | None) -> str:
    previous_duration = previous_test.duration if previous_test is not None else 0
    section_name = f"{name} ({to_fixed(test.duration)}s)"
    if test.duration != previous_duration:
        difference = test.duration - previous_duration
        section_name += f" ({_sign(difference)}{to_fixed(difference)}s)"
    return section_name


def render_sections(
    result: RunRecord,
    previous_result: RunRecord | None,
    emojis: CustomEmojis = NO_CUSTOM_EMOJIS,
) -> list[EmbedField]:
    sections = []
    for name, test in result.tests.items():
        previous_test = previous_result.tests.get(name) if previous_result is not None else None
        fields = [render_percentage_field(test, previous_test, emojis)]
        fields.extend(render_label_fields(test, previous_test, emojis))
        sections.append(
            EmbedField(
                name=render_section_name(name, test, previous_test),
                value=FIELD_SEPARATOR.join(fields),
                inline=False,
            )
        )
    return sections


def render_description(versions: Mapping[str, str]) -> str:
    lines = []
    for repository, commit_hash in versions.items():
        if repository == PRIMARY_REPOSITORY_KEY:
            repository = PRIMARY_REPOSITORY_NAME
        short_hash = commit_hash[:SHORT_HASH_LENGTH]
        tree_url = REPOSITORY_URL_BY_NAME.get(repository)
        if tree_url:
            lines.append(f"{repository}: [{short_hash}]({tree_url}tree/{commit_hash})")
        else:
            lines.append(f"{repository}: {short_hash}")
    return "\n".join(lines)


def embed_for_result(
    commit: CommitInfo,
    result: RunRecord,
    previous_result: RunRecord | None,
    emojis: CustomEmojis = NO_CUSTOM_EMOJIS,
) -> Embed:
    return Embed(
        author=EmbedAuthor(name=commit.author_name, url=commit.author_url, icon_url=commit.avatar_url),
        title=commit.title,
        description=render_description(result.versions),
        timestamp=datetime.fromtimestamp(result.run_timestamp, tz=UTC).isoformat(),
        footer=EmbedFooter(text="Tests started"),
        fields=render_sections(result, previous_result, emojis),
    )


def commit_error_embed(variant: TestVariant, commit_hash: str, emojis: CustomEmojis = NO_CUSTOM_EMOJIS) -> Embed:
    return Embed(
        title="Error",
        description=(
            f"Could not fetch the matching commit ('{commit_hash}') for the "
            f"{variant.name_for_commit_error} run from github {emojis.sad_caret}"
        ),
    )


def not_found_embed(variant: TestVariant, commit: str | None, emojis: CustomEmojis = NO_CUSTOM_EMOJIS) -> Embed:
    if not commit:
        description = f"There are no {variant.name_for_commit_error} runs yet {emojis.sad_caret}"
    else:
        description = (
            f"Could not find a commit that ran {variant.name_for_commit_error} "
            f"matching '{commit}' {emojis.sad_caret}"
        )
    return Embed(title="Not found", description=description)


def labels_embed(result: RunRecord, emojis: CustomEmojis = NO_CUSTOM_EMOJIS) -> Embed:
    """List every label with its icon, feed labels first."""
    labels = []
    first_test = next(iter(result.tests.values()), None)
    if first_test is not None:
        labels.extend(first_test.results)
    labels.extend(label.value for label in Label if label.value not in labels)

    lines = [f"{status_icon_for_label(label, emojis)}: {label}" for label in labels]
    return Embed(description="\n".join(lines))
