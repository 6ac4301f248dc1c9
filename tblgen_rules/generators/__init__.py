"""Generator mode classification for llvm-min-tblgen outputs."""

from tblgen_rules.generators.catalog import (
    CatalogEntry,
    GeneratorMode,
    SuffixRule,
    catalog_entries,
    classify,
    is_recognized,
)

__all__ = [
    "CatalogEntry",
    "GeneratorMode",
    "SuffixRule",
    "catalog_entries",
    "classify",
    "is_recognized",
]
