"""Create tables and load routing rules from a JSON file.

Usage:
    python -m routedesk.tools.seed_rules
    python -m routedesk.tools.seed_rules --rules-file data/routing_rules.json
    python -m routedesk.tools.seed_rules --drop  # replace existing rules
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from sqlalchemy import delete

from routedesk.adapters.persistence.database import Base, async_session_factory, engine
from routedesk.adapters.persistence.models import RoutingRuleModel
from routedesk.adapters.persistence.repositories import SqlRuleRepository
from routedesk.application.use_cases.manage_rules import ManageRulesUseCase, validate_rule
from routedesk.domain.entities.routing_rule import DEFAULT_RULE_ORDER, RoutingRule
from routedesk.domain.exceptions import InvalidRule

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def load_rules_file(path: Path) -> list[RoutingRule]:
    """Parse a JSON array of rule objects into RoutingRule entities.

    Each object needs ``assignees``; ``predicate``, ``active`` and ``order``
    are optional. Every rule is validated as it is read. Raises InvalidRule
    on malformed input.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidRule(f"{path}: not valid JSON ({e})") from e
    if not isinstance(raw, list):
        raise InvalidRule(f"{path}: expected a JSON array of rules")

    rules = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or "assignees" not in item:
            raise InvalidRule(f"{path}: rule #{index} must be an object with 'assignees'")
        rule = RoutingRule(
            id=None,
            predicate=item.get("predicate", {}),
            assignees=item["assignees"],
            active=item.get("active", True),
            order=item.get("order", DEFAULT_RULE_ORDER),
        )
        try:
            validate_rule(rule)
        except InvalidRule as e:
            raise InvalidRule(f"{path}: rule #{index}: {e}") from e
        rules.append(rule)
    return rules


async def seed(rules_file: Path, drop: bool = False) -> int:
    """Create tables if needed and insert rules; returns the number inserted."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    rules = load_rules_file(rules_file)
    async with async_session_factory() as session:
        if drop:
            await session.execute(delete(RoutingRuleModel))
            logger.info("Existing routing rules deleted")

        use_case = ManageRulesUseCase(SqlRuleRepository(session))
        for rule in rules:
            await use_case.create_rule(rule)
        await session.commit()

    logger.info("Loaded %d routing rules from %s", len(rules), rules_file)
    return len(rules)


def main():
    parser = argparse.ArgumentParser(description="Seed routedesk routing rules")
    parser.add_argument(
        "--rules-file", type=str, default="data/routing_rules.json",
        help="JSON file with routing rules (default: data/routing_rules.json)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Delete existing rules before seeding",
    )
    args = parser.parse_args()

    rules_file = Path(args.rules_file)
    if not rules_file.exists():
        logger.error("Rules file not found: %s", rules_file)
        sys.exit(1)

    try:
        asyncio.run(seed(rules_file, drop=args.drop))
    except InvalidRule as e:
        logger.error("Invalid rules file: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
