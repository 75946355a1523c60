"""Commit message validation against the recognized conventional types."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from bumper.core.commits import STRICT_COMMIT_PATTERN, Commit

DEFAULT_MAX_LENGTH = 72
SQUASH_MARKERS = {"wip": "WIP", "fixup": "fixup"}


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommitValidation:
    commit: Commit
    result: ValidationResult


@dataclass(frozen=True)
class ValidationReport:
    """Validation results for a range of commits."""

    results: list[CommitValidation]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def invalid_count(self) -> int:
        return sum(1 for r in self.results if not r.result.is_valid)

    @property
    def valid_count(self) -> int:
        return self.total - self.invalid_count

    @property
    def error_count(self) -> int:
        return sum(len(r.result.errors) for r in self.results)

    @property
    def warning_count(self) -> int:
        return sum(len(r.result.warnings) for r in self.results)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0


def validate_commit_message(message: str, max_length: int = DEFAULT_MAX_LENGTH) -> ValidationResult:
    """Validate one commit header.

    Errors make the message invalid; warnings are advisory.
    """
    errors: list[str] = []
    warnings: list[str] = []

    match = STRICT_COMMIT_PATTERN.match(message)
    if match is None:
        errors.append("Commit message does not follow conventional commit format")
        errors.append("Invalid commit type")
        subject = message
    else:
        subject = message[message.index(":") + 1 :].strip()

    if len(message) > max_length:
        warnings.append(f"Commit message is longer than {max_length} characters")

    lowered = message.lower()
    for marker, label in SQUASH_MARKERS.items():
        if marker in lowered:
            warnings.append(f'Commit message contains "{label}" - consider squashing before release')

    if not subject:
        errors.append("Commit subject is empty")
    if subject.endswith("."):
        warnings.append("Commit subject ends with a period")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def validate_commits(
    commits: Iterable[Commit],
    max_length: int = DEFAULT_MAX_LENGTH,
) -> ValidationReport:
    """Validate every commit's header line."""
    return ValidationReport(
        results=[
            CommitValidation(
                commit,
                validate_commit_message(
                    (commit.message or commit.subject).partition("\n")[0], max_length
                ),
            )
            for commit in commits
        ]
    )
