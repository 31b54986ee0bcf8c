"""Bidirectional mapping between enum members and their menu labels."""

from enum import Enum
from typing import Dict, Generic, List, Type, TypeVar

from ..errors import UnknownLabelError

E = TypeVar("E", bound=Enum)


class LabelRegistry(Generic[E]):
    """Registry of the canonical display label of every member of an enum.

    Building a registry fails unless each member has exactly one label and no
    label is shared, so adding a variant without a label breaks at import.

    Examples:
        >>> class Color(Enum):
        ...     RED = "red"
        >>> colors = LabelRegistry("color", Color, {Color.RED: "Red"})
        >>> colors.label_of(Color.RED)
        'Red'
        >>> colors.member_of("Red")
        <Color.RED: 'red'>
    """

    def __init__(self, kind: str, enum_type: Type[E], labels: Dict[E, str]):
        missing = [member.name for member in enum_type if member not in labels]
        if missing:
            raise TypeError(f"{enum_type.__name__} members without label: {', '.join(missing)}")
        if len(set(labels.values())) != len(labels):
            raise TypeError(f"{enum_type.__name__} labels must be unique")

        self.kind = kind
        self.enum_type = enum_type
        self._labels = dict(labels)
        self._members = {label: member for member, label in labels.items()}

    def label_of(self, member: E) -> str:
        return self._labels[member]

    def member_of(self, label: str) -> E:
        """Return the member registered under label.

        Raises:
            UnknownLabelError: If label is not registered
        """
        try:
            return self._members[label]
        except KeyError:
            raise UnknownLabelError(self.kind, label) from None

    def labels(self) -> List[str]:
        """All labels in enum declaration order."""
        return [self._labels[member] for member in self.enum_type]
