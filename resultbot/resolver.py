from __future__ import annotations

from collections.abc import Sequence

from .models import RunRecord


class RunNotFound(LookupError):
    def __init__(self, commit: str | None):
        self.commit = commit
        if commit:
            super().__init__(f"no run matches commit '{commit}'")
        else:
            super().__init__("results feed is empty")


def resolve_run(
    results: Sequence[RunRecord],
    commit: str | None = None,
) -> tuple[RunRecord, RunRecord | None]:
    """Return the run to report on and the run it is compared against.

    Without ``commit`` the latest run is picked. Otherwise the oldest run whose
    primary commit hash starts with ``commit`` wins.
    """
    if not results:
        raise RunNotFound(commit)

    if not commit:
        previous = results[-2] if len(results) >= 2 else None
        return results[-1], previous

    for index, result in enumerate(results):
        if result.primary_commit.startswith(commit):
            previous = results[index - 1] if index > 0 else None
            return result, previous

    raise RunNotFound(commit)
