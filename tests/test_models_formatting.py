import unittest

from pydantic import ValidationError

from rabbitmq_aliveness.checks.results import CheckResult, Status
from rabbitmq_aliveness.formatting import format_result
from rabbitmq_aliveness.models import AlivenessResponse, CheckConfig


class CheckConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = CheckConfig(host="rabbit.local")

        self.assertEqual(config.port, 15672)
        self.assertEqual(config.vhost, "/")
        self.assertEqual(config.scheme, "http")

    def test_config_is_immutable(self) -> None:
        config = CheckConfig(host="rabbit.local")
        with self.assertRaises(ValidationError):
            config.host = "other"

    def test_empty_host_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            CheckConfig(host="")


class AlivenessResponseTests(unittest.TestCase):
    def test_fields_are_optional(self) -> None:
        payload = AlivenessResponse.model_validate_json('{"reason":"down"}')

        self.assertIsNone(payload.status)
        self.assertEqual(payload.reason, "down")


class FormatResultTests(unittest.TestCase):
    def test_line_layout(self) -> None:
        line = format_result(CheckResult(status=Status.WARNING, message="slow"))
        self.assertEqual(line, "RABBITMQ_ALIVENESS WARNING - slow")

    def test_multiline_message_is_flattened(self) -> None:
        line = format_result(
            CheckResult(status=Status.CRITICAL, message='{\n  "status": "failed"\n}')
        )
        self.assertEqual(line, 'RABBITMQ_ALIVENESS CRITICAL - { "status": "failed" }')


if __name__ == "__main__":
    unittest.main()
