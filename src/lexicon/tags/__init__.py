from lexicon.tags.models import Tag, TagBase, TranslationTagLink
from lexicon.tags.resolver import find_tags_by_name, get_tag_by_name, resolve_tags

__all__ = [
    # Models
    "Tag",
    "TagBase",
    "TranslationTagLink",
    # Resolution
    "find_tags_by_name",
    "get_tag_by_name",
    "resolve_tags",
]
