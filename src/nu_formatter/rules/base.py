from abc import ABC, abstractmethod

from ..models import FormatterConfig


class FormattingRule(ABC):
    """A single formatting policy consulted by the layout engine."""

    def __init__(self, config: FormatterConfig):
        self.config = config

    @property
    @abstractmethod
    def rule_id(self) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
