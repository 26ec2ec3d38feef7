"""Fluent builders for compound and list tags."""

from __future__ import annotations

from celerity.nbt.tags import NamedTag, Tag, TagCompound, TagList, TagType


class TagCompoundBuilder:
    """Builds a :class:`TagCompound` one named entry at a time."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._compound = TagCompound()

    def add(self, name: str, item: Tag) -> TagCompoundBuilder:
        """Add ``item`` under ``name`` and return the builder."""
        if item is None or item.type == TagType.END:
            raise ValueError(
                "Can't add null or TagEnd explicitly to TagCompound; "
                "it will be added automatically"
            )
        self._compound.add(name, item)
        return self

    def build_compound(self) -> TagCompound:
        """Hand over the compound built so far; the builder starts afresh."""
        compound, self._compound = self._compound, TagCompound()
        return compound

    def build_named(self) -> NamedTag:
        """Hand over the compound together with the builder's name."""
        return NamedTag(self.name or "", self.build_compound())


class TagListBuilder:
    """Builds a :class:`TagList` whose child type is that of its first item."""

    def __init__(self, first_item: Tag, name: str | None = None) -> None:
        if first_item is None or first_item.type == TagType.END:
            raise ValueError("A TagList cannot be built from TagEnd items")
        self.name = name
        self._child_type = first_item.type
        self._list = TagList(first_item.type, [first_item])

    def add(self, item: Tag) -> TagListBuilder:
        """Append ``item``, which must match the list's child type."""
        self._list.add(item)
        return self

    def build_list(self) -> TagList:
        """Hand over the list built so far; the builder starts afresh."""
        built, self._list = self._list, TagList(self._child_type)
        return built

    def build_named(self) -> NamedTag:
        """Hand over the list together with the builder's name."""
        return NamedTag(self.name or "", self.build_list())