"""GitLab CI Lint API payloads and the normalized validation outcome."""

from dataclasses import dataclass
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cilint.enums import ValidationStatus
from cilint.exceptions import CilintError


class LintRequest(BaseModel):
    """JSON body of a CI Lint request."""

    content: str


class LintResponse(BaseModel):
    """CI Lint response of GitLab 13.6 and later (``valid`` flag)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    merged_yaml: str | None = None

    @field_validator("errors", "warnings", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class LegacyLintResponse(BaseModel):
    """CI Lint response of older GitLab versions (``status`` string)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    status: str
    errors: list[str] = Field(default_factory=list)
    error: str = ""
    merged_yaml: str | None = None

    @field_validator("errors", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("error", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Normalized result of a lint request.

    Exactly one state holds: VALID, INVALID (with its messages, possibly
    none) or FAILED (with the error that prevented an answer).

    Attributes:
        status: The outcome state.
        messages: Error messages returned by the API for an invalid file.
        warnings: Warning messages returned by the API.
        merged_yaml: Merged configuration, when requested and returned.
        error: The failure cause for FAILED outcomes.
    """

    status: ValidationStatus
    messages: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    merged_yaml: str | None = None
    error: CilintError | None = None

    @classmethod
    def valid(
        cls, *, warnings: tuple[str, ...] = (), merged_yaml: str | None = None
    ) -> Self:
        return cls(
            status=ValidationStatus.VALID, warnings=warnings, merged_yaml=merged_yaml
        )

    @classmethod
    def invalid(
        cls,
        messages: list[str] | tuple[str, ...],
        *,
        warnings: tuple[str, ...] = (),
        merged_yaml: str | None = None,
    ) -> Self:
        return cls(
            status=ValidationStatus.INVALID,
            messages=tuple(messages),
            warnings=warnings,
            merged_yaml=merged_yaml,
        )

    @classmethod
    def failed(cls, error: CilintError) -> Self:
        return cls(status=ValidationStatus.FAILED, error=error)

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID
