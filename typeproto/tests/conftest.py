"""Unit tests configuration file."""

import re

import pytest

_BLOCK = re.compile(r"^(message|enum) (\w+) \{\n(.*?)^\}\n", re.MULTILINE | re.DOTALL)


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def parse_blocks(text):
    """Split a schema document into (kind, name, stripped body lines) tuples."""
    return [
        (kind, name, [line.strip() for line in body.splitlines()])
        for kind, name, body in _BLOCK.findall(text)
    ]


@pytest.fixture
def blocks():
    return parse_blocks
