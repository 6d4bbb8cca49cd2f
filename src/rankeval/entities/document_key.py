"""DocumentKey entity identifying one document in a collection partition."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from rankeval.errors import MalformedDocumentError
from rankeval.wire.stream import StreamInput, StreamOutput


class DocumentKey(BaseModel):
    """
    A (collection, partition, document_id) triple.

    Keys are immutable and hashable so they can be used in sets and as
    dictionary keys. Equality is structural over all three fields; any of
    them may be empty.
    """

    collection: str
    partition: str
    document_id: str = Field(..., alias="documentId")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    def write_to(self, out: StreamOutput) -> None:
        out.write_string(self.collection)
        out.write_string(self.partition)
        out.write_string(self.document_id)

    @classmethod
    def read_from(cls, stream: StreamInput, field: str = "document_key") -> "DocumentKey":
        return cls(
            collection=stream.read_string(f"{field}.collection"),
            partition=stream.read_string(f"{field}.partition"),
            document_id=stream.read_string(f"{field}.documentId"),
        )

    def render(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_rendered(cls, data: Any) -> "DocumentKey":
        """Build a key from its rendered ``{collection, partition, documentId}`` form."""
        if not isinstance(data, dict):
            raise MalformedDocumentError(
                "Document key must be an object",
                details={"got": type(data).__name__},
            )
        try:
            return cls.model_validate(data, strict=True)
        except ValidationError as e:
            raise MalformedDocumentError(
                "Invalid document key",
                details={"errors": [err["msg"] for err in e.errors()]},
                original_error=e,
            ) from e
