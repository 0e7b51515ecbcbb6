import logging
from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar, Union

logger = logging.getLogger(__name__)

F = TypeVar("F")
R = TypeVar("R")


@dataclass(frozen=True)
class Rule(Generic[F, R]):
    """
    One entry of a priority-ordered rule chain.

    `outcome` is either the result itself or a callable computing it from the facts.
    `reachable=False` marks a rule that earlier rules in the same chain always shadow;
    it is kept so the declared precedence stays intact if the chain is reordered.
    """
    name: str
    predicate: Callable[[F], bool]
    outcome: Union[R, Callable[[F], R]]
    reachable: bool = True

    def matches(self, facts: F) -> bool:
        return bool(self.predicate(facts))

    def resolve(self, facts: F) -> R:
        if callable(self.outcome):
            return self.outcome(facts)
        return self.outcome


def first_match(rules: Sequence[Rule[F, R]], facts: F) -> R:
    """Evaluates `rules` in order and returns the outcome of the first matching rule."""
    for rule in rules:
        if rule.matches(facts):
            if not rule.reachable:
                logger.warning(f"Rule '{rule.name}' flagged unreachable has matched for {facts}")
            result = rule.resolve(facts)
            logger.debug(f"Rule '{rule.name}' matched -> {result}")
            return result
    raise LookupError(f"No rule matched for {facts}; rule chains must end with a catch-all")


def find_matching_rule(rules: Sequence[Rule[F, R]], facts: F) -> Rule[F, R]:
    """Returns the first matching rule itself, for callers that need to know which one fired."""
    for rule in rules:
        if rule.matches(facts):
            return rule
    raise LookupError(f"No rule matched for {facts}")
