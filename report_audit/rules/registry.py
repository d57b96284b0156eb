import uuid
from collections.abc import Iterable
from dataclasses import replace

from report_audit.logging.logger import Log
from report_audit.rules.models import DEFAULT_RULES, Rule, RuleCategory, RuleDraft


class RuleRegistry:
    """Ordered, in-memory collection of audit rules.

    Insertion order is preserved everywhere: it is the order in which the
    enabled rules are listed in the judgment prompt.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: dict[str, Rule] = {rule.id: rule for rule in rules}

    @classmethod
    def with_defaults(cls) -> "RuleRegistry":
        registry = cls()
        registry.import_batch(DEFAULT_RULES)
        return registry

    def add(self, text: str, category: RuleCategory) -> Rule | None:
        """Append a new enabled rule. Blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        rule = Rule(id=self._new_id(), text=text, category=category)
        self._rules[rule.id] = rule
        return rule

    def remove(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)

    def toggle(self, rule_id: str) -> None:
        rule = self._rules.get(rule_id)
        if rule is None:
            return
        self._rules[rule_id] = replace(rule, enabled=not rule.enabled)

    def import_batch(self, drafts: Iterable[RuleDraft]) -> list[Rule]:
        """Append pre-validated rules, each with a fresh id and enabled."""
        added: list[Rule] = []
        for draft in drafts:
            rule = Rule(id=self._new_id(), text=draft.text, category=draft.category)
            self._rules[rule.id] = rule
            added.append(rule)
        Log.info(f"Imported {len(added)} rules ({len(self._rules)} total)")
        return added

    def active_texts(self) -> list[str]:
        return [rule.text for rule in self._rules.values() if rule.enabled]

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def all(self) -> list[Rule]:
        return list(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex
