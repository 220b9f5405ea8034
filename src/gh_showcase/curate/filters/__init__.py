"""Basic repository filters.

Cheap, local exclusion pass run before any enrichment request is made.
"""

from gh_showcase.curate.filters.base import BaseFilter, FilterResult
from gh_showcase.curate.filters.chain import FilterChain
from gh_showcase.curate.filters.denylist import DenylistFilter
from gh_showcase.curate.filters.description import DescriptionFilter
from gh_showcase.curate.filters.fork import ForkFilter
from gh_showcase.curate.filters.visibility import VisibilityFilter
from gh_showcase.curate.filters.zero_signal import SignalFilter

__all__ = [
    "BaseFilter",
    "DenylistFilter",
    "DescriptionFilter",
    "FilterChain",
    "FilterResult",
    "ForkFilter",
    "SignalFilter",
    "VisibilityFilter",
]
