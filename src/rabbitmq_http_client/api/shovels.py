"""Dynamic shovels."""

from ..params.shovels import SHOVEL_COMPONENT, Amqp10ShovelParams, Amqp091ShovelParams
from ..paths import path
from ..responses.shovels import Shovel
from .base import ApiBase, model_list


class ShovelsApi(ApiBase):

    def list_shovels(self):
        return self._get("shovels", model_list(Shovel))

    def list_shovels_in(self, vhost: str):
        return self._get(path("shovels", vhost), model_list(Shovel))

    def declare_amqp091_shovel(self, params: Amqp091ShovelParams):
        return self.upsert_runtime_parameter(params.to_runtime_parameter())

    def declare_amqp10_shovel(self, params: Amqp10ShovelParams):
        return self.upsert_runtime_parameter(params.to_runtime_parameter())

    def delete_shovel(self, vhost: str, name: str, idempotently: bool = False):
        return self.clear_runtime_parameter(SHOVEL_COMPONENT, vhost, name, idempotently)
