import logging
from typing import Optional

from .dateutil_strategy import DateutilStrategy
from .grammars import GrammarStrategy
from .strategy import PeriodNormalizationStrategy
from .tokens import FormatError
from .types import AtomicPeriod, sort_periods

STRATEGIES: dict[str, type[PeriodNormalizationStrategy]] = {
    GrammarStrategy.name: GrammarStrategy,
    DateutilStrategy.name: DateutilStrategy,
}


class PeriodNormalizer:
    """
    Turns one active-period string into an ordered list of AtomicPeriod.

    Always returns at least one period: text the strategy does not recognize
    (or, unless strict, text with a malformed date/time token) comes back as a
    single degenerate period carrying the original text as both bounds.
    """

    def __init__(
        self,
        strategy: Optional[PeriodNormalizationStrategy] = None,
        *,
        strict: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.strategy = strategy or GrammarStrategy()
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)

    def normalize(self, period_text: str, assumed_year: int) -> list[AtomicPeriod]:
        try:
            periods = self.strategy.expand(period_text, assumed_year)
        except FormatError as e:
            if self.strict:
                raise
            self.logger.warning("Malformed token in active period %r: %s", period_text, e)
            periods = None

        if not periods:
            self.logger.info("Active period not normalized (strategy=%s): %r", self.strategy.name, period_text)
            return [AtomicPeriod.degenerate(period_text)]

        return sort_periods(periods)


def build_normalizer(
    name: str = GrammarStrategy.name,
    *,
    strict: bool = False,
    logger: Optional[logging.Logger] = None,
) -> PeriodNormalizer:
    cls = STRATEGIES.get(name)
    if cls is None:
        raise ValueError(f"Unknown period strategy {name!r} (expected one of {sorted(STRATEGIES)})")
    return PeriodNormalizer(cls(), strict=strict, logger=logger)


def normalize(period_text: str, assumed_year: int, *, strict: bool = False) -> list[AtomicPeriod]:
    return PeriodNormalizer(GrammarStrategy(), strict=strict).normalize(period_text, assumed_year)
