"""Process-wide read cache for translation lookups and exports.

Two independent maps are kept:
- Point lookups: (translation key, language code) -> translation
- Exports: language code -> nested export tree

Invalidation is coarse. Any successful write clears both maps at once by
swapping in a fresh snapshot, so a reader sees either the complete old state
or the empty new one, never a half-cleared mix. Entries have no TTL.

A generation counter guards fills: a value loaded before an invalidation is
dropped instead of being stored into the newer, empty snapshot.
"""

from collections.abc import Callable
import copy
from dataclasses import dataclass, field
import threading
from typing import Any, TypeVar

from lexicon.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

TranslationCacheKey = tuple[str, str]


@dataclass(frozen=True)
class _CacheSnapshot:
    """One generation of cached state. Replaced wholesale on invalidation."""

    generation: int
    translations: dict[TranslationCacheKey, Any] = field(default_factory=dict)
    exports: dict[str, dict[str, Any]] = field(default_factory=dict)


class TranslationCache:
    """Memoizes translation point lookups and per-language exports.

    Thread-safe: reads take no lock and work against whichever snapshot is
    current; fills and invalidation serialize on an internal lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = _CacheSnapshot(generation=0)

    @property
    def generation(self) -> int:
        return self._snapshot.generation

    def get_translation(self, key: str, language_code: str) -> Any | None:
        return self._snapshot.translations.get((key, language_code))

    def get_export(self, language_code: str) -> dict[str, Any] | None:
        tree = self._snapshot.exports.get(language_code)
        if tree is None:
            return None
        return copy.deepcopy(tree)

    def get_or_load_translation(
        self, key: str, language_code: str, loader: Callable[[], T]
    ) -> T:
        """Return the cached translation or load, store and return it.

        Exceptions raised by ``loader`` propagate and nothing is cached.
        """
        generation = self.generation
        cached = self.get_translation(key, language_code)
        if cached is not None:
            logger.debug("translation_cache_hit", key=key, language=language_code)
            return cached

        value = loader()
        logger.debug("translation_cache_miss", key=key, language=language_code)
        self._store(
            generation,
            lambda snapshot: snapshot.translations.__setitem__(
                (key, language_code), value
            ),
        )
        return value

    def get_or_load_export(
        self, language_code: str, loader: Callable[[], dict[str, Any]]
    ) -> dict[str, Any]:
        """Return a copy of the cached export tree, building it on a miss."""
        generation = self.generation
        cached = self.get_export(language_code)
        if cached is not None:
            logger.debug("export_cache_hit", language=language_code)
            return cached

        tree = loader()
        logger.debug("export_cache_miss", language=language_code)
        stored = copy.deepcopy(tree)
        self._store(
            generation,
            lambda snapshot: snapshot.exports.__setitem__(language_code, stored),
        )
        return tree

    def invalidate_all(self) -> None:
        """Drop every cached translation and export."""
        with self._lock:
            previous = self._snapshot
            self._snapshot = _CacheSnapshot(generation=previous.generation + 1)
        logger.debug(
            "translation_cache_cleared",
            generation=previous.generation + 1,
            translations_evicted=len(previous.translations),
            exports_evicted=len(previous.exports),
        )

    def stats(self) -> dict[str, int]:
        snapshot = self._snapshot
        return {
            "generation": snapshot.generation,
            "translations": len(snapshot.translations),
            "exports": len(snapshot.exports),
        }

    def _store(
        self, generation: int, write: Callable[[_CacheSnapshot], None]
    ) -> None:
        with self._lock:
            snapshot = self._snapshot
            if snapshot.generation != generation:
                logger.debug(
                    "translation_cache_stale_fill_dropped",
                    loaded_generation=generation,
                    current_generation=snapshot.generation,
                )
                return
            write(snapshot)
