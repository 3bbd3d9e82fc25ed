"""Shared constants for gg."""

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE = 64  # EX_USAGE from sysexits.h

# Suffix appended to files saved by `gg revert`
BACKUP_SUFFIX = ".orig"

# Revision used when none is given
HEAD = "HEAD"

# Pathspec magic prefixes (see gitglossary(7))
LITERAL_MAGIC = ":(literal)"
TOP_LITERAL_MAGIC = ":(top,literal)"

# Places GitHub looks for a pull request template, relative to the repository top
PR_TEMPLATE_PATHS = (
    "pull_request_template.md",
    "PULL_REQUEST_TEMPLATE/pull_request_template.md",
    "docs/pull_request_template.md",
    "docs/PULL_REQUEST_TEMPLATE/pull_request_template.md",
    ".github/pull_request_template.md",
    ".github/PULL_REQUEST_TEMPLATE/pull_request_template.md",
)
