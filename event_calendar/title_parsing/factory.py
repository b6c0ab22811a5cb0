"""Factory for creating title field extraction strategies."""

from enum import Enum, auto

from event_calendar.config import ExtractionConfig
from event_calendar.title_parsing.strategy import TitleFieldStrategy


class TitleStrategies(Enum):
    """Enumeration of available title field extraction strategies."""
    PREFIX_SUFFIX = auto()
    TITLE_PATTERN = auto()


class TitleStrategyFactory:
    """Factory for creating TitleFieldStrategy instances."""

    @staticmethod
    def select(config: ExtractionConfig) -> TitleStrategies:
        """Pick the strategy implied by a config: the pattern one whenever a title pattern is set."""
        if config.title_pattern is not None:
            return TitleStrategies.TITLE_PATTERN
        return TitleStrategies.PREFIX_SUFFIX

    @staticmethod
    def get_strategy(strategy: TitleStrategies, config: ExtractionConfig) -> TitleFieldStrategy:
        """Get a strategy instance configured from ``config``.

        Args:
            strategy: The type of strategy to create
            config: Extraction config supplying prefix, suffix and pattern

        Returns:
            An instance of the requested strategy

        Raises:
            ValueError: If the strategy is unknown or the config lacks a title pattern
        """
        from event_calendar.title_parsing.pattern_strategy import TitlePatternStrategy
        from event_calendar.title_parsing.prefix_suffix_strategy import PrefixSuffixStrategy

        if strategy == TitleStrategies.PREFIX_SUFFIX:
            return PrefixSuffixStrategy(config.prefix, config.suffix)
        elif strategy == TitleStrategies.TITLE_PATTERN:
            if config.title_pattern is None:
                raise ValueError("TITLE_PATTERN strategy requires a title pattern")
            return TitlePatternStrategy(config.title_pattern, config.prefix, config.suffix)
        else:
            raise ValueError(f"Unknown strategy: {strategy}")

    @classmethod
    def for_config(cls, config: ExtractionConfig) -> TitleFieldStrategy:
        return cls.get_strategy(cls.select(config), config)
