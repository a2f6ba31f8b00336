"""
Book model for the InfoBooks loan service.

A book is a catalog title with a number of physical copies. The lifecycle
engine is the only writer of ``available_qty``: it takes a copy when a loan
is created and puts one back when a loan is returned. Books are exposed as
resources via:
- library://books/list
- library://books/{book_id}
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..errors import NoCopiesAvailableError
from ..utils import new_identifier


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    Invariant: ``0 <= available_qty <= total_qty``. Assignments are validated,
    so a mutation that would break the invariant raises instead of being
    stored.
    """

    id: str = Field(
        default_factory=new_identifier,
        description="Unique identifier for the book (UUID4)",
    )

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        max_length=500,
        examples=["Moby Dick", "A Divina Comédia"],
    )

    author: str = Field(
        ...,
        description="Author of the book",
        min_length=1,
        max_length=200,
        examples=["Herman Melville", "Dante Alighieri"],
    )

    category: str = Field(
        ...,
        description="Shelf category of the book",
        examples=["Clássicos", "Suspense", "Filosofia"],
    )

    year: int = Field(
        ...,
        description="Year the book was published",
        le=datetime.now().year + 1,
        examples=[1851, 1320, 2018],
    )

    description: str = Field(
        default="",
        description="Brief description or summary of the book",
        max_length=2000,
    )

    total_qty: int = Field(
        ...,
        description="Total number of copies owned by the library",
        ge=0,
        examples=[1, 2, 4],
    )

    available_qty: int = Field(
        ...,
        description="Number of copies currently available for rent",
        ge=0,
        examples=[0, 1, 2],
    )

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def validate_copies(self) -> "Book":
        """Ensure available copies doesn't exceed total copies."""
        if self.available_qty > self.total_qty:
            raise ValueError("Available copies cannot exceed total copies")
        return self

    @property
    def is_available(self) -> bool:
        return self.available_qty > 0

    @property
    def rented_qty(self) -> int:
        """Number of copies currently out on loan."""
        return self.total_qty - self.available_qty

    def take_copy(self) -> None:
        """
        Mark a copy as rented.

        Raises:
            NoCopiesAvailableError: If no copies are available (including books
                that own no copies at all)
        """
        if not self.is_available:
            raise NoCopiesAvailableError(f"No copies of '{self.title}' are available")
        self.available_qty -= 1

    def restore_copy(self) -> bool:
        """
        Put a returned copy back on the shelf.

        Availability saturates at ``total_qty``.

        Returns:
            False if the count was already at ``total_qty`` and nothing changed
        """
        if self.available_qty >= self.total_qty:
            return False
        self.available_qty += 1
        return True

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "id": "0d4c3a0e-6a55-4e36-9a1b-0c1d7e0b8f11",
                "title": "Moby Dick",
                "author": "Herman Melville",
                "category": "Clássicos",
                "year": 1851,
                "description": "Descrição de Moby Dick",
                "total_qty": 2,
                "available_qty": 2,
            }
        },
    )


class BookView(BaseModel):
    """Book as shown to catalog readers."""

    id: str
    title: str
    author: str
    category: str
    year: int
    description: str
    total_qty: int
    available_qty: int
    is_available: bool

    @classmethod
    def from_book(cls, book: Book) -> "BookView":
        return cls(**book.model_dump(), is_available=book.is_available)
