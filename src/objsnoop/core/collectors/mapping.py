from __future__ import annotations

"""
Mapping Entry Collector.

Presents dictionaries and other mappings as one record per entry rather than
as the attributes of the mapping object itself.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from objsnoop.core.collectors.base import Collector
from objsnoop.core.formatting.failures import failure_message
from objsnoop.core.formatting.formatter import ValueFormatter, is_collection_value
from objsnoop.core.scope import Scope
from objsnoop.domain.config import IntrospectionSettings
from objsnoop.domain.models import CollectionHandle, CollectResult, PropertyRecord, create_error_record

logger = logging.getLogger(__name__)

ENTRY_CATEGORY = "Entry"


class MappingCollector(Collector):
    """Collector for `collections.abc.Mapping` subjects."""

    name = "Mapping Collector"

    def __init__(
            self,
            settings: Optional[IntrospectionSettings] = None,
            formatter: Optional[ValueFormatter] = None,
    ) -> None:
        self.settings = settings or IntrospectionSettings()
        self.formatter = formatter or ValueFormatter(self.settings)

    def can_handle(self, subject: Any) -> bool:
        return isinstance(subject, Mapping)

    def collect(self, subject: Any, scope: Optional[Scope]) -> CollectResult:
        properties: List[PropertyRecord] = []
        collections: Dict[str, CollectionHandle] = {}
        used: set = set()

        try:
            for key, value in subject.items():
                name = str(key)
                if name in used:
                    # Distinct keys with equal text, e.g. 1 and "1"
                    name = repr(key)
                    suffix = 2
                    while name in used:
                        name = f"{repr(key)} #{suffix}"
                        suffix += 1
                used.add(name)
                is_collection = is_collection_value(value)
                if is_collection:
                    value = self.formatter.retain(value)

                properties.append(PropertyRecord(
                    name=name,
                    declared_type=type(value).__name__,
                    display_value=self.formatter.format(value, scope),
                    raw_value=value,
                    is_collection=is_collection,
                    category=ENTRY_CATEGORY,
                    declaring_type=type(subject).__qualname__,
                ))
                if is_collection:
                    collections[name] = CollectionHandle(name, value)

        except Exception as e:
            message = failure_message(e)
            logger.debug(f"Mapping iteration failed for {type(subject).__name__}: {message}")
            properties.append(create_error_record("[entries]", message, type(subject).__name__))

        return CollectResult(properties=properties, collections=collections)
