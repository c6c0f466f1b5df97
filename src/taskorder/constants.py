"""Named constants for the task dependency resolver."""

# -----------------------------------------------------------------------------
# Rule List Limits
# -----------------------------------------------------------------------------

# Maximum number of tasks (N) a header may declare
MAX_TASKS: int = 100

# Maximum number of rules (M) a header may declare
MAX_RULES: int = 100

# Smallest valid task id; ids are assigned densely from here to N
MIN_TASK_ID: int = 1


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

# Lines starting with this prefix are ignored by the parser
COMMENT_PREFIX: str = "#"

# Minimum tokens on a rule line: child id, parent count, one parent id
MIN_RULE_TOKENS: int = 3


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

# Conventional traversal root
DEFAULT_ROOT_ID: int = 1

# Separator used when printing a resolved order
DEFAULT_SEPARATOR: str = " "
