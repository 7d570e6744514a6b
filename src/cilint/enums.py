"""Enumeration types for cilint."""

from enum import StrEnum


class HookState(StrEnum):
    """Classification of a git hook path before and after a link operation."""

    CREATED = "created"
    ALREADY_CREATED = "already_created"
    ALREADY_EXISTS = "already_exists"
    DELETED = "deleted"
    NOT_EXISTING = "not_existing"
    NOT_MATCHING = "not_matching"
    ERROR = "error"


class ValidationStatus(StrEnum):
    """State of a lint request."""

    VALID = "valid"
    INVALID = "invalid"
    FAILED = "failed"


class ProjectSource(StrEnum):
    """Where the GitLab project identifier was taken from, by precedence."""

    PROJECT_ID = "project_id"
    PROJECT_PATH = "project_path"
    REMOTE = "remote"
