"""Field markers read by the derive decorators."""

from typing import Annotated, TypeVar

T = TypeVar("T")


class LabelTag:
    "Marks a field as the display label of a record."

    def __repr__(self) -> str:
        return "Label"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LabelTag)

    def __hash__(self) -> int:
        return hash(LabelTag)


LABEL = LabelTag()

Label = Annotated[T, LABEL]
