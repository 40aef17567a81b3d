"""
Label extraction registry.

Resolves, for every (data type, label name) pair, the single extractor that
computes the label. When several extractors target the same pair the one
with the highest priority wins, which lets a deployment override a built-in
label such as SKILLS by registering a higher priority extractor for it.
Two extractors sharing the winning priority are a configuration conflict and
are reported when the set is registered.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


LabelKey = tuple[type, str]


class ExtractorResolutionConflict(ValueError):
    """Raised when two extractors tie on priority for the same (type, label) pair."""

    def __init__(self, data_type: type, label_name: str, extractors: list):
        self.data_type = data_type
        self.label_name = label_name
        self.extractors = extractors
        names = ", ".join(e.name for e in extractors)
        super().__init__(
            f"Extractors [{names}] share priority {extractors[0].priority} "
            f"for label '{label_name}' on {data_type.__name__}"
        )


@dataclass(frozen=True)
class LabelExtractor:
    """A strategy computing the values of one label from one record."""

    data_type: type
    label_name: str
    priority: int
    function: Callable[[Any], Optional[set]]
    name: str = ""

    def __post_init__(self):
        if not self.name:
            object.__setattr__(
                self, "name", getattr(self.function, "__name__", repr(self.function))
            )

    @property
    def key(self) -> LabelKey:
        return (self.data_type, self.label_name)

    def extract(self, record: Any) -> Optional[frozenset]:
        values = self.function(record)
        return frozenset(values) if values is not None else None


class ExtractionRegistry:
    """Immutable-after-registration lookup of the active extractor per label."""

    def __init__(self, extractors: Iterable[LabelExtractor] = ()):
        self._resolved: Mapping[LabelKey, LabelExtractor] = MappingProxyType({})
        extractors = list(extractors)
        if extractors:
            self.register(extractors)

    def register(self, extractors: Iterable[LabelExtractor]) -> None:
        """
        Replace the registry contents with the resolution of a full extractor set.

        Args:
            extractors: Every discovered extractor, built-in and custom

        Raises:
            ExtractorResolutionConflict: If two extractors tie on the highest
                priority for the same (type, label) pair. The previous
                resolution is kept in that case.
        """
        candidates: dict[LabelKey, list[LabelExtractor]] = {}
        for extractor in extractors:
            candidates.setdefault(extractor.key, []).append(extractor)

        resolved: dict[LabelKey, LabelExtractor] = {}
        for (data_type, label_name), group in candidates.items():
            top_priority = max(e.priority for e in group)
            winners = [e for e in group if e.priority == top_priority]
            if len(winners) > 1:
                logger.error(
                    f"❌ Conflicting extractors for {data_type.__name__}/{label_name}: "
                    f"{[e.name for e in winners]}"
                )
                raise ExtractorResolutionConflict(data_type, label_name, winners)

            winner = winners[0]
            resolved[(data_type, label_name)] = winner
            for overridden in group:
                if overridden is not winner:
                    logger.info(
                        f"Extractor '{overridden.name}' (priority {overridden.priority}) "
                        f"overridden by '{winner.name}' (priority {winner.priority}) "
                        f"for {data_type.__name__}/{label_name}"
                    )
            logger.debug(
                f"Resolved {data_type.__name__}/{label_name} -> {winner.name}"
            )

        self._resolved = MappingProxyType(resolved)
        logger.info(f"✅ Registered {len(resolved)} label extractor(s)")

    def resolve(self, data_type: type, label_name: str) -> Optional[LabelExtractor]:
        """Return the active extractor for the pair, or None."""
        return self._resolved.get((data_type, label_name))

    def extract(
        self, data_type: type, label_name: str, record: Any
    ) -> Optional[frozenset]:
        """
        Compute a label for a record.

        Returns:
            The label values, or None when no extractor is registered for the
            pair or the extractor found nothing.
        """
        extractor = self.resolve(data_type, label_name)
        if extractor is None:
            return None
        values = extractor.extract(record)
        return values or None

    def extract_all(self, record: Any) -> dict[str, frozenset]:
        """Compute every label registered for the record's type, skipping empty ones."""
        labels = {}
        for label_name in self.registered_labels(type(record)):
            values = self.extract(type(record), label_name, record)
            if values is not None:
                labels[label_name] = values
        return labels

    def registered_labels(self, data_type: type) -> list[str]:
        return sorted(label for t, label in self._resolved if t is data_type)

    @property
    def extractors(self) -> Mapping[LabelKey, LabelExtractor]:
        return self._resolved
