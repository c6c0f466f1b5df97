"""Rule list models with Pydantic v2 validation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import MAX_RULES, MAX_TASKS, MIN_TASK_ID


class RuleHeader(BaseModel):
    """
    First line of a rule list: `N M`.

    Attributes:
        task_count: Number of tasks (N); tasks get ids 1..N
        rule_count: Number of rule lines that follow (M)
    """

    model_config = ConfigDict(frozen=True)

    task_count: int = Field(ge=MIN_TASK_ID, le=MAX_TASKS)
    rule_count: int = Field(ge=0, le=MAX_RULES)


class Rule(BaseModel):
    """
    A single `T0 k T1 .. Tk` statement: task T0 depends on tasks T1..Tk.

    Consumed once during graph construction, adding an edge
    `parent -> child_id` for every parent.

    Attributes:
        child_id: The dependent task (T0)
        parent_ids: Prerequisite tasks (T1..Tk), in input order
        line_number: Source line in the rule list, if known
    """

    model_config = ConfigDict(frozen=True)

    child_id: int = Field(ge=MIN_TASK_ID)
    parent_ids: tuple[int, ...] = Field(min_length=1)
    line_number: int | None = None

    @property
    def parent_count(self) -> int:
        """Number of prerequisites (k)."""
        return len(self.parent_ids)


class RuleList(BaseModel):
    """Parsed rule list: header plus its rules in input order."""

    header: RuleHeader
    rules: list[Rule] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ids_in_range(self) -> "RuleList":
        """Reject rules referencing ids outside 1..task_count."""
        limit = self.header.task_count
        for rule in self.rules:
            for task_id in (rule.child_id, *rule.parent_ids):
                if not MIN_TASK_ID <= task_id <= limit:
                    raise ValueError(
                        f"task id {task_id} is outside declared range [{MIN_TASK_ID}, {limit}]"
                    )
        return self

    @property
    def task_count(self) -> int:
        return self.header.task_count

    @property
    def edge_count(self) -> int:
        return sum(rule.parent_count for rule in self.rules)
