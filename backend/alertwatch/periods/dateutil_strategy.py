import logging
import re
from datetime import datetime
from typing import Optional

from dateutil import parser

from .strategy import PeriodNormalizationStrategy
from .time import roll_if_next_day
from .types import AtomicPeriod

logger = logging.getLogger(__name__)

_TO_RE = re.compile(r"\s+to\s+", re.IGNORECASE)


class DateutilStrategy(PeriodNormalizationStrategy):
    """
    Alternate strategy for simple "<when> to <when>" phrases, e.g.
      "Mar 3 10:00 PM to Mar 4 5:00 AM"
      "Mar 3 10:00 PM to 5:00 AM"
    Each side is handed to dateutil with Jan 1 of the assumed year as the default,
    so missing fields come from there (the end side defaults to the start's date).
    """

    name = "dateutil"

    def expand(self, period_text: str, assumed_year: int) -> Optional[list[AtomicPeriod]]:
        parts = _TO_RE.split(period_text.strip())
        if len(parts) != 2 or not all(parts):
            return None

        try:
            start = parser.parse(parts[0], default=datetime(assumed_year, 1, 1))
            end = parser.parse(parts[1], default=start.replace(hour=0, minute=0, second=0, microsecond=0))

            start = start.replace(second=0, microsecond=0, tzinfo=None)
            end = roll_if_next_day(start, end.replace(second=0, microsecond=0, tzinfo=None))
        except (parser.ParserError, ValueError, OverflowError) as e:
            logger.debug("dateutil could not parse %r: %s", period_text, e)
            return None

        return [AtomicPeriod(start=start, end=end)]
