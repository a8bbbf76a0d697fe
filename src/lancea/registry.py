from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from lancea.schemas.envelope import ResolvedCommand
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

SLASH_COMMAND = "slash-command"


@dataclass(frozen=True)
class CommandRule:
    aliases: Tuple[str, ...]
    provider_id: str
    command_id: str

    def matches(self, text: str) -> bool:
        return any(text.startswith(a) for a in self.aliases)


# evaluated in order; aliases longest first within each rule
DEFAULT_RULES: Tuple[CommandRule, ...] = (
    CommandRule(aliases=("/emoji", "/em"), provider_id="emoji", command_id="emoji"),
    CommandRule(aliases=("/apps", "/ap"), provider_id="apps", command_id="apps"),
)


class CommandRegistry:
    """Maps raw input text to a provider/command intent.

    Stateless and safe to share across threads. Matching is a literal prefix
    test against the trimmed input; the first rule that matches wins.
    """

    def __init__(self, rules: Tuple[CommandRule, ...] = DEFAULT_RULES):
        self._rules = tuple(
            CommandRule(tuple(sorted(r.aliases, key=len, reverse=True)), r.provider_id, r.command_id)
            for r in rules
        )

    @property
    def rules(self) -> Tuple[CommandRule, ...]:
        return self._rules

    def aliases_for(self, provider_id: str) -> Tuple[str, ...]:
        out: list[str] = []
        for r in self._rules:
            if r.provider_id == provider_id:
                out.extend(r.aliases)
        return tuple(sorted(out, key=len, reverse=True))

    def resolve(self, text: str) -> ResolvedCommand:
        trimmed = (text or "").strip()
        for rule in self._rules:
            if rule.matches(trimmed):
                logger.debug("resolved %r -> %s/%s", trimmed, rule.provider_id, rule.command_id)
                return ResolvedCommand(
                    matched=True,
                    provider_id=rule.provider_id,
                    command_id=rule.command_id,
                    reason=SLASH_COMMAND,
                )
        return ResolvedCommand.unmatched()
