"""Records exchanged with the resource service and their JSON codecs.

Field names on the wire are the service's own (``userId``, ``postId``);
python code uses snake_case and either spelling is accepted when building
a record. Absent fields decode to the zero value of their type.
"""

from functools import lru_cache
from typing import List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import DecodeError

R = TypeVar("R", bound="Record")


class Record(BaseModel):
    """Base class for service records."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_json(cls: Type[R], text: str) -> R:
        """Decode a single record from a JSON object.

        Raises:
            DecodeError: If the text is not JSON or not shaped like the record
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise DecodeError(f"Failed to decode {cls.__name__}: {e}") from e

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class User(Record):
    """A user of the service. ``id`` 0 means not yet created."""

    model_config = ConfigDict(frozen=False)

    id: int = 0
    name: str = ""
    username: str = ""
    email: str = ""

    def __str__(self) -> str:
        return f"User(id={self.id}, name={self.name!r}, username={self.username!r}, email={self.email!r})"


class Post(Record):
    id: int = 0
    user_id: int = Field(default=0, alias="userId")
    title: str = ""
    body: str = ""

    def __str__(self) -> str:
        return f"Post(id={self.id}, userId={self.user_id}, title={self.title!r})"


class Comment(Record):
    id: int = 0
    post_id: int = Field(default=0, alias="postId")
    name: str = ""
    email: str = ""
    body: str = ""

    def __str__(self) -> str:
        return f"Comment(id={self.id}, postId={self.post_id}, name={self.name!r}, email={self.email!r})"


class Todo(Record):
    id: int = 0
    user_id: int = Field(default=0, alias="userId")
    title: str = ""
    completed: bool = False

    def __str__(self) -> str:
        return f"Todo(id={self.id}, userId={self.user_id}, title={self.title!r}, completed={self.completed})"


@lru_cache(maxsize=None)
def _list_adapter(model: Type[Record]) -> TypeAdapter:
    return TypeAdapter(List[model])


def decode_list(model: Type[R], text: str) -> List[R]:
    """Decode a JSON array into records, keeping the order the service returned.

    Args:
        model: Record class of the array elements
        text: JSON array text

    Returns:
        List of decoded records

    Raises:
        DecodeError: If the text is not a JSON array of ``model`` objects
    """
    try:
        return _list_adapter(model).validate_json(text)
    except ValidationError as e:
        raise DecodeError(f"Failed to decode list of {model.__name__}: {e}") from e


def encode_list(records: Sequence[Record], indent: Optional[int] = None) -> str:
    """Encode records as a JSON array using the service field names."""
    records = list(records)
    model = type(records[0]) if records else Record
    return _list_adapter(model).dump_json(records, indent=indent, by_alias=True).decode("utf-8")
