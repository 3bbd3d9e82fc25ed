"""
Error taxonomy for gg.

Command handlers raise these; cli.main() is the only place that catches
them and turns them into an exit code.
"""


class GGError(Exception):
    """Base class for every error gg reports to the user."""


class UsageError(GGError):
    """Caller violated a precondition (bad flags, missing arguments)."""


class ConfigError(GGError):
    """Configuration file or environment is invalid."""


def git_subcommand(args: list[str]) -> str:
    """Name of the git subcommand in args, skipping global options like -c."""
    skip = False
    for a in args:
        if skip:
            skip = False
        elif a in ("-c", "-C"):
            skip = True
        elif not a.startswith("-"):
            return a
    return ""


class GitError(GGError):
    """A git invocation failed."""

    def __init__(self, args: list[str], returncode: int, stderr: str = "", message: str | None = None):
        self.git_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            subcommand = git_subcommand(args)
            message = f"git {subcommand}: exit status {returncode}"
            detail = stderr.strip()
            if detail:
                message += f"\n{detail}"
        super().__init__(message)


class StatusQueryError(GitError):
    """git status/diff failed or emitted a record that could not be parsed."""

    def __init__(self, message: str, args: list[str] | None = None, returncode: int = 0, stderr: str = ""):
        super().__init__(args or [], returncode, stderr, message=message)


class PolicyViolation(GGError):
    """Working copy state blocks the requested operation."""


class PathResolutionError(GGError):
    """A file argument could not be resolved to a pathspec."""

    def __init__(self, argument: str, reason: str):
        self.argument = argument
        self.reason = reason
        super().__init__(f"{argument}: {reason}")


class OutsideRepositoryError(PathResolutionError):
    """A file argument lies outside the working copy, or its location can't be determined."""

    def __init__(self, argument: str, reason: str = "outside the working copy"):
        super().__init__(argument, reason)


class BackupError(GGError):
    """Creating .orig backups failed partway through.

    Files already renamed are listed in `backed_up` and are left in place.
    """

    def __init__(self, path: str, cause: OSError, backed_up: list[str]):
        self.path = path
        self.backed_up = list(backed_up)
        super().__init__(f"backing up files: {path}: {cause.strerror or cause}")
