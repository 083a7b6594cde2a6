"""pi-bufferline: grouping, ordering and pick letters for an editor's buffer strip."""

from pi.bufferline.classifier import Classification, Classifier
from pi.bufferline.config import (
    BufferlineOptions,
    GroupOptions,
    deep_merge_options,
    parse_options,
)
from pi.bufferline.engine import Bufferline, RenderResult
from pi.bufferline.errors import BufferlineError, ClassificationWarning, ConfigError
from pi.bufferline.host import ComponentFactory, ElementSource, HighlightResolver
from pi.bufferline.matchers import (
    ExtensionMatcher,
    GlobMatcher,
    Matcher,
    PredicateMatcher,
    RegexMatcher,
    coerce_matcher,
)
from pi.bufferline.notify import Notifier, notify
from pi.bufferline.overrides import OverrideStore
from pi.bufferline.pick import DEFAULT_ALPHABET, PickAssigner, PickPolicy
from pi.bufferline.registry import MatcherRegistry
from pi.bufferline.render import (
    ElementComponent,
    GroupEndMarker,
    GroupStartMarker,
    RenderComponent,
    describe,
    render,
)
from pi.bufferline.sorter import by_comparator, by_key, sort_by_groups
from pi.bufferline.text import is_truthy, measure, truncate_name, visible_width
from pi.bufferline.types import PINNED, UNGROUPED, Element, Group, GroupKey, GroupSpec

__all__ = [
    # Types
    "Element",
    "Group",
    "GroupKey",
    "GroupSpec",
    "PINNED",
    "UNGROUPED",
    # Errors
    "BufferlineError",
    "ClassificationWarning",
    "ConfigError",
    # Matchers
    "ExtensionMatcher",
    "GlobMatcher",
    "Matcher",
    "PredicateMatcher",
    "RegexMatcher",
    "coerce_matcher",
    # Core
    "Classification",
    "Classifier",
    "MatcherRegistry",
    "OverrideStore",
    "by_comparator",
    "by_key",
    "sort_by_groups",
    # Rendering
    "ElementComponent",
    "GroupEndMarker",
    "GroupStartMarker",
    "RenderComponent",
    "describe",
    "render",
    # Pick letters
    "DEFAULT_ALPHABET",
    "PickAssigner",
    "PickPolicy",
    # Engine and host
    "Bufferline",
    "ComponentFactory",
    "ElementSource",
    "HighlightResolver",
    "RenderResult",
    # Configuration
    "BufferlineOptions",
    "GroupOptions",
    "deep_merge_options",
    "parse_options",
    # Utilities
    "Notifier",
    "is_truthy",
    "measure",
    "notify",
    "truncate_name",
    "visible_width",
]
