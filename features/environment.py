"""
Behave environment configuration for DNS Migration Manager integration tests.

Scenarios run against the in-memory mock provider and a scripted resolver,
so no provider account or network access is needed.
"""

import logging
import shutil
from pathlib import Path

import yaml

from dns_migration_manager.core.models import ProbeResult, ProbeStatus, RecordType

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ScriptedProbe:
    """Resolver probe answering from a table filled in by the steps."""

    def __init__(self):
        self.answers = {}
        self.failures = set()

    def probe(self, name, record_type):
        record_type = RecordType.parse(record_type)
        key = (name, record_type.value)
        if key in self.failures:
            return ProbeResult(name, record_type, ProbeStatus.FAILED, error="timed out")
        answers = list(self.answers.get(key, []))
        status = ProbeStatus.ANSWERED if answers else ProbeStatus.EMPTY
        return ProbeResult(name, record_type, status, answers=answers)

    def resolve(self, name, record_type):
        return self.probe(name, record_type).answers


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent
    context.test_data_dir = context.base_dir / "test_data"
    context.test_data_dir.mkdir(exist_ok=True)

    context.test_domain = "example.com"
    context.test_config = {
        "dns_providers": {"mock": {}},
        "default_provider": "mock",
        "logging": {"level": "DEBUG", "file": str(context.test_data_dir / "test_dns_manager.log")},
    }

    context.test_config_file = context.test_data_dir / "test_config.yaml"
    with open(context.test_config_file, "w") as f:
        yaml.dump(context.test_config, f)

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.probe = ScriptedProbe()
    context.result = None
    context.error = None
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    try:
        if context.test_data_dir.exists():
            shutil.rmtree(context.test_data_dir)
    except OSError as e:
        logger.warning(f"Failed to cleanup test data: {e}")

    logger.info("Test environment cleanup complete")
