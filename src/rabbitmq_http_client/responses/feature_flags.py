"""Feature flag and deprecated feature responses."""

from typing import Optional

from pydantic import Field

from ..commons import OpenEnum, open_enum
from .base import ApiModel


class FeatureFlagState(OpenEnum):
    ENABLED = "enabled"
    DISABLED = "disabled"
    STATE_CHANGING = "state_changing"
    UNAVAILABLE = "unavailable"


class FeatureFlagStability(OpenEnum):
    REQUIRED = "required"
    STABLE = "stable"
    EXPERIMENTAL = "experimental"


class FeatureFlag(ApiModel):
    name: str
    description: str = Field(default="", alias="desc")
    doc_url: str = ""
    state: open_enum(FeatureFlagState) = FeatureFlagState.UNAVAILABLE
    stability: open_enum(FeatureFlagStability) = FeatureFlagStability.STABLE
    provided_by: str = ""

    @property
    def is_enabled(self) -> bool:
        return self.state == FeatureFlagState.ENABLED

    @property
    def is_stable(self) -> bool:
        return self.stability in (FeatureFlagStability.STABLE, FeatureFlagStability.REQUIRED)


class DeprecationPhase(OpenEnum):
    PERMITTED_BY_DEFAULT = "permitted_by_default"
    DENIED_BY_DEFAULT = "denied_by_default"
    DISCONNECTED = "disconnected"
    REMOVED = "removed"
    UNDEFINED = "undefined"


class DeprecatedFeature(ApiModel):
    name: str
    description: str = Field(default="", alias="desc")
    deprecation_phase: open_enum(DeprecationPhase) = DeprecationPhase.UNDEFINED
    doc_url: str = ""
    provided_by: str = ""
    state: Optional[str] = None


