"""Decoding of API responses into models."""

from rabbitmq_http_client.responses.connections import Channel, Consumer
from rabbitmq_http_client.responses.feature_flags import FeatureFlag, FeatureFlagState
from rabbitmq_http_client.responses.parameters import RuntimeParameter
from rabbitmq_http_client.responses.queues import QueueInfo
from rabbitmq_http_client.responses.users import User


CONSUMER = {
    "consumer_tag": "ctag-1",
    "active": True,
    "ack_required": False,
    "prefetch_count": 10,
    "exclusive": False,
    "arguments": {},
    "queue": {"name": "orders", "vhost": "/"},
}


class TestPossiblyEmpty:

    def test_empty_channel_details_are_none(self):
        consumer = Consumer.model_validate(dict(CONSUMER, channel_details={}))
        assert consumer.channel_details is None
        assert consumer.manual_ack is False

    def test_channel_details_present(self):
        consumer = Consumer.model_validate(dict(CONSUMER, channel_details={
            "number": 1, "name": "127.0.0.1:5000 -> 127.0.0.1:5672 (1)",
            "connection_name": "127.0.0.1:5000 -> 127.0.0.1:5672",
            "node": "rabbit@a", "peer_host": "127.0.0.1", "peer_port": 5000, "user": "guest",
        }))
        assert consumer.channel_details.id == 1
        assert consumer.channel_details.client_port == 5000

    def test_empty_connection_details_on_channel(self):
        channel = Channel.model_validate({"number": 1, "name": "ch", "vhost": "/", "connection_details": {}})
        assert channel.connection_details is None


def test_unknown_fields_are_kept():
    queue = QueueInfo.model_validate({"name": "q", "vhost": "/", "type": "quorum", "brand_new_metric": 7})
    assert queue.queue_type == "quorum"
    assert queue.model_extra["brand_new_metric"] == 7


def test_missing_counters_decode_to_zero():
    queue = QueueInfo.model_validate({"name": "q", "vhost": "/"})
    assert queue.message_count == 0
    assert queue.consumer_count == 0


def test_tags_as_comma_separated_string():
    assert User.model_validate({"name": "a", "tags": "administrator, monitoring"}).tags == [
        "administrator", "monitoring"]
    assert User.model_validate({"name": "a", "tags": ["management"]}).tags == ["management"]


def test_unknown_feature_flag_state():
    flag = FeatureFlag.model_validate({"name": "khepri_db", "state": "half_enabled", "stability": "experimental"})
    assert flag.state.is_unknown
    assert flag.state != FeatureFlagState.DISABLED


def test_list_valued_runtime_parameter():
    param = RuntimeParameter.model_validate({"name": "set-1", "vhost": "/", "component": "federation-upstream-set",
                                             "value": [{"upstream": "a"}]})
    assert param.value == {}
