from abc import ABC, abstractmethod

from alertwatch.jobs.monitor.types import RawAlert

class BaseFeedSource(ABC):
    @abstractmethod
    def fetch(self) -> list[RawAlert]:
        """
        Implement fetch -> decode. Return every alert in the feed; selection happens downstream.
        """
        raise NotImplementedError
