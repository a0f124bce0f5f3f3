from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TestGroupResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration: float
    results: dict[str, int] = Field(default_factory=dict)


class RunRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    commit_timestamp: int
    run_timestamp: int
    versions: dict[str, str]
    tests: dict[str, TestGroupResult] = Field(default_factory=dict)

    @property
    def primary_commit(self) -> str:
        return self.versions.get("serenity", "")


class CommitInfo(BaseModel):
    sha: str
    author_name: str
    author_url: str | None = None
    avatar_url: str | None = None
    title: str


class EmbedAuthor(BaseModel):
    name: str
    url: str | None = None
    icon_url: str | None = None


class EmbedFooter(BaseModel):
    text: str


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    title: str | None = None
    description: str | None = None
    author: EmbedAuthor | None = None
    timestamp: str | None = None
    footer: EmbedFooter | None = None
    fields: list[EmbedField] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)
