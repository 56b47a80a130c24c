"""Тесты конвертации shovel параметров."""

import logging

import pytest

from rabbitmq_http_client.commons import MessageTransferAcknowledgementMode, MessagingProtocol
from rabbitmq_http_client.core.exceptions import ConversionError
from rabbitmq_http_client.params.shovels import (
    Amqp091ShovelDestinationParams,
    Amqp091ShovelParams,
    Amqp091ShovelSourceParams,
    Amqp10ShovelDestinationParams,
    Amqp10ShovelParams,
    Amqp10ShovelSourceParams,
    ShovelParams,
)
from rabbitmq_http_client.responses.parameters import RuntimeParameter


def shovel_parameter(**value):
    return RuntimeParameter(name="s1", vhost="/", component="shovel", value=value)


class TestAmqp091Shovel:

    def test_queue_to_exchange(self):
        params = Amqp091ShovelParams(
            name="s1",
            vhost="/",
            source=Amqp091ShovelSourceParams.predeclared_queue_source("amqp://a", "src"),
            destination=Amqp091ShovelDestinationParams.exchange_destination("amqp://b", "dest", "rk"),
            reconnect_delay=10,
        )

        value = params.to_runtime_parameter().value

        assert value == {
            "src-protocol": "amqp091",
            "dest-protocol": "amqp091",
            "src-uri": "amqp://a",
            "src-queue": "src",
            "src-predeclared": True,
            "dest-uri": "amqp://b",
            "dest-exchange": "dest",
            "dest-exchange-key": "rk",
            "ack-mode": "on-confirm",
            "reconnect-delay": 10,
        }

    def test_component(self):
        params = Amqp091ShovelParams(
            "s1", "/",
            Amqp091ShovelSourceParams.queue_source("amqp://a", "src"),
            Amqp091ShovelDestinationParams.queue_destination("amqp://b", "dst"),
        )
        assert params.to_runtime_parameter().component == "shovel"


def test_amqp10_shovel():
    params = Amqp10ShovelParams(
        name="s2",
        vhost="/",
        source=Amqp10ShovelSourceParams("amqp://a", "/queues/src"),
        destination=Amqp10ShovelDestinationParams("amqp://b", "/queues/dst"),
        acknowledgement_mode=MessageTransferAcknowledgementMode.IMMEDIATE,
    )
    value = params.to_runtime_parameter().value
    assert value["src-protocol"] == "amqp10"
    assert value["src-address"] == "/queues/src"
    assert value["ack-mode"] == "no-ack"
    assert "reconnect-delay" not in value


class TestShovelParamsFromRuntimeParameter:

    def test_full_conversion(self):
        shovel = ShovelParams.from_runtime_parameter(shovel_parameter(**{
            "src-protocol": "amqp091", "dest-protocol": "amqp10",
            "src-uri": "amqp://a", "dest-uri": "amqp://b",
            "src-queue": "q", "dest-address": "/queues/x",
            "ack-mode": "on-publish", "reconnect-delay": 3,
        }))

        assert shovel.source_protocol is MessagingProtocol.AMQP091
        assert shovel.destination_protocol is MessagingProtocol.AMQP10
        assert shovel.source_queue == "q"
        assert shovel.destination_address == "/queues/x"
        assert shovel.acknowledgement_mode is MessageTransferAcknowledgementMode.WHEN_PUBLISHED
        assert shovel.reconnect_delay == 3

    def test_missing_source_protocol(self):
        """Отсутствие src-protocol - ConversionError, а не значение по умолчанию."""
        with pytest.raises(ConversionError) as exc_info:
            ShovelParams.from_runtime_parameter(shovel_parameter(**{
                "dest-protocol": "amqp091", "src-uri": "amqp://a", "dest-uri": "amqp://b"}))
        assert exc_info.value.argument == "src-protocol"

    def test_missing_destination_uri(self):
        with pytest.raises(ConversionError, match="dest-uri"):
            ShovelParams.from_runtime_parameter(shovel_parameter(**{
                "src-protocol": "amqp091", "dest-protocol": "amqp091", "src-uri": "amqp://a"}))

    def test_unknown_ack_mode_uses_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rabbitmq_http_client.conversions"):
            shovel = ShovelParams.from_runtime_parameter(shovel_parameter(**{
                "src-protocol": "amqp091", "dest-protocol": "amqp091",
                "src-uri": "amqp://a", "dest-uri": "amqp://b", "ack-mode": "whenever"}))

        assert shovel.acknowledgement_mode is MessageTransferAcknowledgementMode.WHEN_CONFIRMED
        assert "whenever" in caplog.text

    def test_back_to_runtime_parameter(self):
        value = {
            "src-protocol": "amqp091", "dest-protocol": "amqp091",
            "src-uri": "amqp://a", "dest-uri": "amqp://b",
            "src-exchange": "x", "src-exchange-key": "#", "dest-queue": "q",
            "ack-mode": "on-confirm",
        }
        shovel = ShovelParams.from_runtime_parameter(shovel_parameter(**value))
        assert shovel.with_destination_uri("amqp://c").to_runtime_parameter().value == dict(
            value, **{"dest-uri": "amqp://c"})
