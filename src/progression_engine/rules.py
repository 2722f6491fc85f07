"""Progression rules — which strategy applies to which exercise of a program."""

from __future__ import annotations

from dataclasses import dataclass, field

from progression_engine.models.strategy_config import ValidatedConfig


@dataclass(frozen=True)
class ProgressionRule:
    """A validated strategy, scoped to one exercise or to the whole program."""

    config: ValidatedConfig
    exercise_id: str | None = None  # None = program-wide default

    @property
    def is_program_wide(self) -> bool:
        return self.exercise_id is None


@dataclass(frozen=True)
class ProgressionRuleSet:
    """All progression rules attached to one program."""

    rules: tuple[ProgressionRule, ...] = field(default_factory=tuple)

    def rule_for(self, exercise_id: str) -> ProgressionRule | None:
        """Find the rule governing *exercise_id*.

        An exercise-specific rule wins over a program-wide one. Among rules
        of the same scope the first one listed wins.
        """
        fallback = None
        for rule in self.rules:
            if rule.exercise_id == exercise_id:
                return rule
            if rule.is_program_wide and fallback is None:
                fallback = rule
        return fallback

    def config_for(self, exercise_id: str) -> ValidatedConfig | None:
        rule = self.rule_for(exercise_id)
        return rule.config if rule is not None else None
