"""Rule list parser with schema validation.

Overview:
--------
The RuleListParser reads the line-oriented rule list format and converts it
into validated Pydantic models (RuleHeader, Rule, RuleList). The parse is
one-shot and deterministic: the first problem aborts it.

Format:
------
```
# N tasks, M rules
5 4
# task 3 depends on 2 tasks: 1 and 5
3 2 1 5
2 2 5 3
4 1 3
5 1 1
```

- Tokens are whitespace-separated integers.
- Blank lines and lines starting with '#' are ignored until the last rule.
- Exactly M rule lines must follow the header; any line after the M-th rule
  is an error, blank and comment lines included.

Error Handling:
--------------
- MalformedHeaderError: header missing, not two integers, or over the caps
- MalformedRuleError: too few tokens, non-integers, parent count mismatch
- OutOfRangeIdError: child or parent id outside [1, N]
- RuleCountMismatchError: more or fewer rule lines than declared
Line numbers refer to the physical line in the input, starting at 1.
"""

import re

import structlog
from pydantic import ValidationError

from ..constants import COMMENT_PREFIX, MIN_RULE_TOKENS, MIN_TASK_ID
from ..models.rules import Rule, RuleHeader, RuleList
from ..utils.exceptions import (
    MalformedHeaderError,
    MalformedRuleError,
    OutOfRangeIdError,
    RuleCountMismatchError,
)

logger = structlog.get_logger(__name__)

# Optional sign and ASCII digits; no underscores or non-ASCII digits
_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")


def _to_int(token: str) -> int:
    if not _INTEGER_TOKEN.fullmatch(token):
        raise ValueError(f"invalid integer literal: {token!r}")
    return int(token)


class RuleListParser:
    """
    Parse rule list text into validated models.

    Features:
    - Any whitespace separates tokens
    - Comment and blank lines are skipped
    - Errors carry the physical line number
    """

    def __init__(self, comment_prefix: str = COMMENT_PREFIX) -> None:
        """
        Initialize parser.

        Args:
            comment_prefix: Lines starting with this prefix are ignored
        """
        self.comment_prefix = comment_prefix
        self.rules_parsed = 0

    def parse(self, text: str) -> RuleList:
        """
        Parse a complete rule list.

        Args:
            text: Rule list contents

        Returns:
            Validated RuleList

        Raises:
            MalformedHeaderError: If the header line is missing or invalid
            MalformedRuleError: If a rule line is invalid
            RuleCountMismatchError: If the rule count differs from the header
        """
        self.rules_parsed = 0
        header: RuleHeader | None = None
        rules: list[Rule] = []

        for line_number, line in enumerate(text.splitlines(), start=1):
            if header is not None and len(rules) >= header.rule_count:
                raise RuleCountMismatchError(
                    expected=header.rule_count,
                    actual=len(rules) + 1,
                    line_number=line_number,
                )

            stripped = line.strip()
            if not stripped or stripped.startswith(self.comment_prefix):
                continue

            if header is None:
                header = self._parse_header(stripped.split(), line_number)
                continue

            rules.append(self._parse_rule(stripped.split(), line_number, header.task_count))
            self.rules_parsed = len(rules)

        if header is None:
            raise MalformedHeaderError("Rule list is empty: expected header <NumTasks> <NumRules>")

        if len(rules) < header.rule_count:
            raise RuleCountMismatchError(expected=header.rule_count, actual=len(rules))

        logger.info(
            "Parsed rule list",
            task_count=header.task_count,
            rule_count=len(rules),
        )

        return RuleList(header=header, rules=rules)

    def _parse_header(self, tokens: list[str], line_number: int) -> RuleHeader:
        """
        Parse the `N M` header.

        Args:
            tokens: Header tokens
            line_number: Physical line number

        Returns:
            Validated RuleHeader
        """
        if len(tokens) != 2:
            raise MalformedHeaderError(
                f"Header is not of form <NumTasks> <NumRules>: {' '.join(tokens)}",
                line_number=line_number,
            )

        try:
            task_count, rule_count = (_to_int(token) for token in tokens)
        except ValueError as e:
            raise MalformedHeaderError(
                f"Header values must be integers: {' '.join(tokens)}",
                line_number=line_number,
                original_error=e,
            ) from e

        try:
            header = RuleHeader(task_count=task_count, rule_count=rule_count)
        except ValidationError as e:
            messages = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise MalformedHeaderError(
                f"Invalid header: {messages}",
                line_number=line_number,
                original_error=e,
            ) from e

        logger.debug("Parsed header", task_count=task_count, rule_count=rule_count)
        return header

    def _parse_rule(self, tokens: list[str], line_number: int, task_count: int) -> Rule:
        """
        Parse a `T0 k T1 .. Tk` rule line.

        Args:
            tokens: Rule tokens
            line_number: Physical line number
            task_count: Declared number of tasks (N)

        Returns:
            Validated Rule
        """
        line = " ".join(tokens)

        if len(tokens) < MIN_RULE_TOKENS:
            raise MalformedRuleError(
                f"Rule line is not of form <TaskID> <NumParents> <ParentTaskID>...: {line}",
                line_number=line_number,
            )

        try:
            child_id, parent_count, *parent_ids = (_to_int(token) for token in tokens)
        except ValueError as e:
            raise MalformedRuleError(
                f"Rule values must be integers: {line}",
                line_number=line_number,
                original_error=e,
            ) from e

        self._check_range(child_id, task_count, "child", line_number)

        if parent_count < 1:
            raise MalformedRuleError(
                f"Parent count must be at least 1, got {parent_count}: {line}",
                line_number=line_number,
            )

        if parent_count != len(parent_ids):
            raise MalformedRuleError(
                f"Rule declares {parent_count} parents but lists {len(parent_ids)}: {line}",
                line_number=line_number,
            )

        for parent_id in parent_ids:
            self._check_range(parent_id, task_count, "parent", line_number)

        try:
            return Rule(child_id=child_id, parent_ids=tuple(parent_ids), line_number=line_number)
        except ValidationError as e:
            raise MalformedRuleError(
                f"Invalid rule: {line}", line_number=line_number, original_error=e
            ) from e

    @staticmethod
    def _check_range(task_id: int, task_count: int, role: str, line_number: int) -> None:
        if not MIN_TASK_ID <= task_id <= task_count:
            raise OutOfRangeIdError(task_id, task_count, role=role, line_number=line_number)
