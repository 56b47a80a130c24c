"""Runtime (per virtual host, per component) and global parameters."""

from ..params.parameters import GlobalRuntimeParameterDefinition, RuntimeParameterDefinition
from ..paths import path
from ..responses.parameters import GlobalRuntimeParameter, RuntimeParameter
from .base import ApiBase, model, model_list


class ParametersApi(ApiBase):

    def list_runtime_parameters(self):
        return self._get("parameters", model_list(RuntimeParameter))

    def list_runtime_parameters_of_component(self, component: str):
        return self._get(path("parameters", component), model_list(RuntimeParameter))

    def list_runtime_parameters_of_component_in(self, component: str, vhost: str):
        return self._get(path("parameters", component, vhost), model_list(RuntimeParameter))

    def get_runtime_parameter(self, component: str, vhost: str, name: str):
        return self._get(path("parameters", component, vhost, name), model(RuntimeParameter))

    def upsert_runtime_parameter(self, param: RuntimeParameterDefinition):
        return self._put(path("parameters", param.component, param.vhost, param.name), param.to_body())

    def clear_runtime_parameter(self, component: str, vhost: str, name: str,
                                idempotently: bool = False):
        return self._delete(path("parameters", component, vhost, name), idempotently)

    # Global parameters

    def list_global_runtime_parameters(self):
        return self._get("global-parameters", model_list(GlobalRuntimeParameter))

    def get_global_runtime_parameter(self, name: str):
        return self._get(path("global-parameters", name), model(GlobalRuntimeParameter))

    def upsert_global_runtime_parameter(self, param: GlobalRuntimeParameterDefinition):
        return self._put(path("global-parameters", param.name), param.to_body())

    def clear_global_runtime_parameter(self, name: str, idempotently: bool = False):
        return self._delete(path("global-parameters", name), idempotently)
