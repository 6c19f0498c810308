"""Entity markers for classes that map to stored documents.

Decorate a class with @document or @persistent to make it visible to the
package scanner used by the mapping converter parser:

    @document(collection="people")
    class Person:
        ...
"""

from typing import Callable, TypeVar

from odm_wiring.config import DOCUMENT_MARKER, PERSISTENT_MARKER

T = TypeVar("T", bound=type)


def document(collection: str | None = None) -> Callable[[T], T]:
    """Mark a class as a document stored in a collection.

    Args:
        collection: Collection name (default: the lowercased class name)
    """

    def decorate(cls: T) -> T:
        setattr(cls, DOCUMENT_MARKER, collection or cls.__name__.lower())
        return cls

    return decorate


def persistent(cls: T) -> T:
    """Mark a class as a persistent entity."""
    setattr(cls, PERSISTENT_MARKER, True)
    return cls


def is_entity(cls: type) -> bool:
    """Check if cls itself carries one of the entity markers.

    Markers are not inherited: a subclass of a marked class is only an
    entity when it is marked too.
    """
    own = vars(cls)
    return DOCUMENT_MARKER in own or PERSISTENT_MARKER in own
