"""Feature flags and deprecated features."""

from ..paths import path
from ..responses.feature_flags import DeprecatedFeature, FeatureFlag
from .base import ApiBase, model_list


class FeatureFlagsApi(ApiBase):

    def list_feature_flags(self):
        return self._get("feature-flags", model_list(FeatureFlag))

    def enable_feature_flag(self, name: str):
        """Enabling a flag that is already enabled is a no-op on the broker side."""
        return self._put(path("feature-flags", name, "enable"), {"name": name})

    def list_all_deprecated_features(self):
        return self._get("deprecated-features", model_list(DeprecatedFeature))

    def list_deprecated_features_in_use(self):
        return self._get(path("deprecated-features", "used"), model_list(DeprecatedFeature))
