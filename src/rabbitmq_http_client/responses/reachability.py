"""Outcome of :meth:`Client.probe_reachability`."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from ..core.exceptions import RabbitMQHTTPClientException
from .users import CurrentUser


@dataclass(frozen=True)
class Reached:
    """The API answered ``GET whoami`` with the given user."""
    current_user: CurrentUser
    duration: timedelta

    @property
    def is_reached(self) -> bool:
        return True


@dataclass(frozen=True)
class Unreachable:
    """The probe failed; ``error`` is the transport or response error."""
    error: RabbitMQHTTPClientException

    @property
    def is_reached(self) -> bool:
        return False


ReachabilityProbeOutcome = Union[Reached, Unreachable]
