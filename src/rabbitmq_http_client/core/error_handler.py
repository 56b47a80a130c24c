# src/rabbitmq_http_client/core/error_handler.py

import json
from typing import Mapping, Optional

from .exceptions import (
    ClientErrorResponse,
    ErrorDetails,
    InvalidHeaderValue,
    NotFound,
    ServerErrorResponse,
)


class ErrorHandler:
    """Классификация HTTP статусов ответов management API"""

    @staticmethod
    def check_response(
        status_code: int,
        url: str,
        headers: Mapping[str, str],
        body: str,
        accept_client_error: Optional[int] = None,
        accept_server_error: Optional[int] = None,
    ) -> None:
        """
        Бросает исключение, если статус ответа - ошибка, не разрешенная вызывающей стороной.

        - 404 при accept_client_error == 404 считается успехом, иначе NotFound
        - прочие 4xx: успех, если совпадают с accept_client_error, иначе ClientErrorResponse
        - 5xx: успех, если совпадают с accept_server_error, иначе ServerErrorResponse
        - 2xx/3xx проходят как есть
        """

        if 400 <= status_code < 500:
            if status_code == accept_client_error:
                return

            details = ErrorHandler.parse_error_details(body)
            if status_code == 404:
                raise NotFound(url, headers, body, details)
            raise ClientErrorResponse(status_code, url, headers, body, details)

        if 500 <= status_code < 600:
            if status_code == accept_server_error:
                return

            details = ErrorHandler.parse_error_details(body)
            raise ServerErrorResponse(status_code, url, headers, body, details)

    @staticmethod
    def parse_error_details(body: str) -> Optional[ErrorDetails]:
        """Достает пару error/reason из JSON тела (если это JSON)"""

        if not body:
            return None
        try:
            parsed = json.loads(body)
        except ValueError:
            return None
        return ErrorDetails.from_body(parsed)

    @staticmethod
    def validate_header_value(header: str, value: str) -> str:
        """Проверяет, что значение заголовка можно передать по сети"""

        if "\r" in value or "\n" in value or "\0" in value:
            raise InvalidHeaderValue(header, value)
        try:
            value.encode("latin-1")
        except UnicodeEncodeError:
            raise InvalidHeaderValue(header, value) from None
        return value
