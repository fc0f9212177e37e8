"""
Base class for SDS field extractors.

Every extractor is a pure function of normalized document text. Calling an
extractor never raises for string input; a miss is reported as the
extractor's empty value (None or an empty collection).
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class FieldExtractor(ABC, Generic[T]):
    """
    Extracts one field of type ``T`` from SDS text.

    Subclasses implement ``extract`` for real text and ``empty`` for the
    miss value. ``__call__`` guards non-string and empty input so
    implementations can assume a non-empty ``str``.
    """

    #: Short field name used in logs and pipeline warnings
    name: str = 'field'

    @abstractmethod
    def extract(self, text: str) -> T:
        """Extract the field from non-empty normalized text."""

    @abstractmethod
    def empty(self) -> T:
        """Value returned when nothing was found."""

    def __call__(self, text: Any) -> T:
        if not text or not isinstance(text, str):
            return self.empty()
        return self.extract(text)
