"""
Plumbing shared by the operation mixins.

Each mixin method builds a path and a body and hands them to one of the
transport hooks below. :class:`~rabbitmq_http_client.Client` implements the
hooks with blocking calls; :class:`~rabbitmq_http_client.AsyncClient`
implements them as coroutines, so the same mixin method returns a value on
one and an awaitable on the other.

Decoders turn the parsed JSON body into the return value. They run once,
after the retry loop, and raise ``ValueError`` (pydantic's ``ValidationError``
included) for bodies that do not fit.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import TypeAdapter

from ..core.exceptions import NotFound
from ..pagination import PaginationParams
from ..responses.base import PaginatedResponse

T = TypeVar("T")

Decoder = Callable[[Any], Any]


@lru_cache(maxsize=None)
def _adapter(tp) -> TypeAdapter:
    return TypeAdapter(tp)


def model(tp) -> Decoder:
    """Decoder validating the body against ``tp`` (a model or e.g. ``List[Model]``)."""
    return _adapter(tp).validate_python


def model_list(tp: Type[T]) -> Decoder:
    return _adapter(List[tp]).validate_python


def paged(tp: Type[T]) -> Decoder:
    """
    Decoder for list endpoints called with ``page``/``page_size``: returns the
    ``items`` of the paginated wrapper. A plain array (no page requested) is
    accepted too.
    """
    def decode(data: Any) -> List[T]:
        if isinstance(data, list):
            return _adapter(List[tp]).validate_python(data)
        return _adapter(PaginatedResponse[tp]).validate_python(data).items
    return decode


def first_or_not_found(tp: Type[T]) -> Decoder:
    """Some endpoints answer a single-object GET with an array."""
    def decode(data: Any) -> T:
        items = _adapter(List[tp]).validate_python(data)
        if not items:
            raise NotFound()
        return items[0]
    return decode


def then(decoder: Decoder, f: Callable[[Any], Any]) -> Decoder:
    """Compose a decoder with a post-processing step."""
    return lambda data: f(decoder(data))


def page_query(pagination: Optional[PaginationParams]) -> Optional[Dict[str, int]]:
    return pagination.to_query_params() if pagination is not None else None


class ApiBase(ABC):
    """
    Transport hooks the operation mixins rely on.

    ``idempotently=True`` on deletes turns a 404 into success.
    """

    @abstractmethod
    def _get(self, path: str, decode: Optional[Decoder] = None, *,
             query: Optional[Mapping[str, Any]] = None, raw: bool = False):
        """GET ``path`` and decode the body (or return the text when ``raw``)."""

    @abstractmethod
    def _put(self, path: str, body: Any = None):
        pass

    @abstractmethod
    def _post(self, path: str, body: Any = None, decode: Optional[Decoder] = None):
        pass

    @abstractmethod
    def _delete(self, path: str, idempotently: bool = False,
                headers: Optional[Mapping[str, str]] = None):
        pass

    @abstractmethod
    def _health_check(self, path: str):
        """GET a health check; 503 raises HealthCheckFailed."""
