from abc import ABC, abstractmethod
from typing import Optional

from .types import AtomicPeriod


class PeriodNormalizationStrategy(ABC):
    name: str = ""

    @abstractmethod
    def expand(self, period_text: str, assumed_year: int) -> Optional[list[AtomicPeriod]]:
        """
        Expand period_text into atomic periods.
        Return None when the text is not recognized; raise FormatError when it is
        recognized but a token inside it is malformed.
        """
        raise NotImplementedError
