"""Dosage rule registry with auto-discovery of DosageRule subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from training_engine.models.enums import PrescriptionType
from training_engine.rules.base import DosageRule

logger = logging.getLogger(__name__)


class DosageRegistry:
    """Discovers and manages all DosageRule implementations.

    Auto-discovers rules by scanning the rules/ package tree for concrete
    subclasses of DosageRule. A new workout type is added by placing a .py
    file in the appropriate subdirectory — no manual registration needed.
    """

    def __init__(self) -> None:
        self._rules: dict[str, DosageRule] = {}

    def discover_rules(self) -> None:
        """Scan the rules package tree and register all DosageRule subclasses."""
        import training_engine.rules as rules_pkg

        rules_path = Path(rules_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(rules_pkg.__name__, str(rules_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        """Recursively import all modules under a package and register rules."""
        for _importer, module_name, _is_pkg in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            module = importlib.import_module(module_name)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, DosageRule)
                    and attr is not DosageRule
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, rule: DosageRule) -> None:
        """Register a rule instance by its rule_id."""
        if rule.rule_id in self._rules:
            return
        logger.debug("Registered dosage rule %s v%s", rule.rule_id, rule.version)
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> DosageRule | None:
        """Retrieve a rule by its rule_id."""
        return self._rules.get(rule_id)

    def for_type(self, prescription_type: PrescriptionType) -> DosageRule | None:
        """The rule that doses a prescription type, if one is registered."""
        for rule in self._rules.values():
            if rule.prescription_type == prescription_type:
                return rule
        return None

    def get_all_rules(self) -> list[DosageRule]:
        """Return all registered rules sorted by rule_id."""
        return sorted(self._rules.values(), key=lambda r: r.rule_id)

    @property
    def rule_ids(self) -> list[str]:
        """List all registered rule IDs."""
        return list(self._rules.keys())
