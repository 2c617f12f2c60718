"""Exception hierarchy shared by the devprofile bricks.

Every fatal error raised while provisioning derives from DevprofileError so
the CLI can report it uniformly and exit non-zero.
"""


class DevprofileError(Exception):
    """Base exception for fatal provisioning errors."""

    pass


class ProfileNotFoundError(DevprofileError):
    """Raised when no profile document can be resolved from a selector."""

    pass


class MalformedProfileError(DevprofileError):
    """Raised when a profile document cannot be parsed."""

    pass


class ProfileValidationError(DevprofileError):
    """Raised when a profile violates the schema.

    Carries every violation found, never just the first one.
    """

    def __init__(self, source: str, violations: list[str]):
        self.source = source
        self.violations = list(violations)
        super().__init__(
            f"Profile validation failed for {source} ({len(self.violations)} problem(s))"
        )


class MissingVaultNameError(DevprofileError):
    """Raised when 1Password is configured but no vault name is available."""

    pass


__all__ = [
    "DevprofileError",
    "MalformedProfileError",
    "MissingVaultNameError",
    "ProfileNotFoundError",
    "ProfileValidationError",
]
