# src/harvest/models.py — v1
"""Harvest domain models: Target, EvidenceKind, EvidenceSource, DocBundle."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

SNIPPET_MAX_CHARS = 80


class Target(BaseModel):
    """A validated target: raw string plus its safe tokens."""

    model_config = ConfigDict(frozen=True)

    raw: str
    tokens: tuple[str, ...] = Field(min_length=1)

    @property
    def command(self) -> str:
        """Base command (first token)."""
        return self.tokens[0]

    @property
    def rest(self) -> tuple[str, ...]:
        """Subcommand and argument tokens."""
        return self.tokens[1:]


class TargetValidation(BaseModel):
    """Non-raising outcome of target validation."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    tokens: tuple[str, ...] = ()
    reason: str | None = None


class EvidenceKind(str, Enum):
    """Kind of local documentation lookup."""

    MAN = "man"
    MAN_SUBCOMMAND = "man-subcommand"
    HELP = "help"
    INFO = "info"
    BASH_HELP = "bash-help"
    GIT_HELP = "git-help"


class EvidenceSource(BaseModel):
    """Provenance of one successful lookup.

    Only ``kind`` is kept outside debug mode; see ``redacted()``.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: EvidenceKind
    cmd: str | None = None
    args: list[str] | None = None
    chars: int | None = None
    snippet: str | None = Field(default=None, max_length=SNIPPET_MAX_CHARS)

    def redacted(self) -> EvidenceSource:
        """Copy without invocation details."""
        return EvidenceSource(kind=self.kind)

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class DocBundle(BaseModel):
    """Evidence gathered for one target."""

    model_config = ConfigDict(frozen=True)

    docs: str = ""
    sources: list[EvidenceSource] = Field(default_factory=list)
    skipped: str | None = None

    @model_validator(mode="after")
    def _docs_xor_skipped(self) -> DocBundle:
        if self.skipped is not None and self.docs:
            raise ValueError("a skipped bundle cannot carry evidence text")
        return self

    @classmethod
    def skip(cls, reason: str) -> DocBundle:
        """Empty bundle explaining why no evidence is available."""
        return cls(docs="", sources=[], skipped=reason)

    @property
    def has_docs(self) -> bool:
        return bool(self.docs)
