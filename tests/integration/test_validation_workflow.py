"""Integration tests: a small validator driving a configured ValidationLogger."""

import io
import os
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

from rich.console import Console

from validationlog import (
    ConsoleLogger,
    LogLevel,
    ValidationLevel,
    ValidationLogger,
    ValidationLoggerBase,
    print_report,
)
from validationlog.config import ENV_VAR


def validate_order(order: dict, vl: ValidationLoggerBase) -> None:
    """Validate a nested order record the way a caller of the logger would."""
    with vl.begin_scope(f"order {order.get('id', '?')}"):
        if vl.is_enabled(ValidationLevel.TRACE):
            vl.log(ValidationLevel.TRACE, "id", "Validating order")
        if not order.get("customer"):
            vl.log(ValidationLevel.ERROR, "customer", "Missing customer")

        for index, line in enumerate(order.get("lines", []), 1):
            with vl.begin_scope(f"line {index}"):
                quantity = line.get("quantity", 0)
                if quantity <= 0:
                    vl.log(ValidationLevel.ERROR, "quantity", f"Must be positive, got {quantity}")
                elif quantity != int(quantity):
                    vl.log(ValidationLevel.WARNING, "quantity", f"Rounded {quantity} to {round(quantity)}")
                else:
                    vl.log(ValidationLevel.INFORMATION, "quantity", f"{quantity} item(s)")


ORDER = {
    "id": 42,
    "customer": "",
    "lines": [{"quantity": 2}, {"quantity": 2.5}, {"quantity": -1}],
}


class TestValidationWorkflow(unittest.TestCase):
    """End-to-end validation runs."""

    def setUp(self):
        self._tmpdir = TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.project = Path(self._tmpdir.name)

        empty_dir = str(self.project / "no-such-config-dir")
        for name in ("platformdirs.user_config_dir", "platformdirs.site_config_dir"):
            patcher = patch(name, return_value=empty_dir)
            patcher.start()
            self.addCleanup(patcher.stop)

        env_patch = patch.dict(os.environ)
        env_patch.start()
        self.addCleanup(env_patch.stop)
        os.environ.pop(ENV_VAR, None)

    def test_default_levels_report(self):
        vl = ValidationLogger.from_config(self.project)
        validate_order(ORDER, vl)

        self.assertEqual(vl.errors, 2)
        self.assertEqual(vl.warnings, 1)
        self.assertFalse(vl.passed_validation)
        self.assertEqual(
            vl.render(),
            "order 42 {\n"
            "  Error: customer: Missing customer\n"
            "  line 1 {\n"
            "    Information: quantity: 2 item(s)\n"
            "  }\n"
            "  line 2 {\n"
            "    Warning: quantity: Rounded 2.5 to 2\n"
            "  }\n"
            "  line 3 {\n"
            "    Error: quantity: Must be positive, got -1\n"
            "  }\n"
            "}\n",
        )

    def test_project_config_limits_recorded_levels(self):
        (self.project / ".validationlog.yml").write_text("enabled_levels: Warning\n")

        vl = ValidationLogger.from_config(self.project)
        validate_order(ORDER, vl)

        self.assertEqual(vl.enabled_levels, ValidationLevel.WARNING)
        self.assertEqual(vl.errors, 2)
        self.assertTrue(vl.passed_validation)
        self.assertEqual(
            vl.render(),
            "order 42 {\n  line 2 {\n    Warning: quantity: Rounded 2.5 to 2\n  }\n}\n",
        )

    def test_trace_enabled_via_environment(self):
        os.environ[ENV_VAR] = "All"

        vl = ValidationLogger.from_config(self.project)
        validate_order(ORDER, vl)

        self.assertEqual(vl.log_messages[0].level, ValidationLevel.TRACE)
        self.assertTrue(vl.render().startswith("order 42 {\n  Trace: id: Validating order\n"))

    def test_console_echo_and_report(self):
        output = io.StringIO()
        console = Console(file=output, width=120, color_system=None, force_terminal=False)
        diagnostics = ConsoleLogger(console, LogLevel.WARN)

        vl = ValidationLogger.from_config(self.project, logger=diagnostics)
        validate_order(ORDER, vl)
        print_report(console, vl, title="Order 42")

        text = output.getvalue()
        self.assertIn("order 42: Error: customer: Missing customer", text)
        self.assertIn("order 42/line 2: Warning: quantity: Rounded 2.5 to 2", text)
        self.assertNotIn("order 42/line 1: Information", text)
        self.assertIn("Order 42", text)
        self.assertIn("Failed validation (2 errors, 1 warning)", text)


if __name__ == "__main__":
    unittest.main()
