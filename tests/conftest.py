"""
Pytest configuration and shared fixtures.
"""

import threading
from typing import List

import pytest

from routescope.models.route_model import Route
from routescope.scanner.express_parser import ExpressParser
from routescope.scanner.parser_registry import default_registry
from routescope.scanner.syntax_tree import build_tree, walk


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")


def route_for_text(text: str) -> Route:
    return Route(method="GET", path=f"/{text}", handler="h", line=0)


class RecordingRegistry:
    """Stands in for ParserRegistry; records every extraction."""

    def __init__(self):
        self.calls = []

    def parse(self, language_id: str, text: str) -> List[Route]:
        self.calls.append((language_id, text))
        return [route_for_text(text)]


class BlockingRegistry(RecordingRegistry):
    """Extraction of `block_on` waits until `release` is set."""

    def __init__(self, block_on: str):
        super().__init__()
        self.block_on = block_on
        self.started = threading.Event()
        self.release = threading.Event()

    def parse(self, language_id: str, text: str) -> List[Route]:
        if text == self.block_on:
            self.started.set()
            self.release.wait(timeout=5)
        return super().parse(language_id, text)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def parser():
    return ExpressParser()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def recording_registry():
    return RecordingRegistry()


@pytest.fixture
def clock():
    return FakeClock()


def first_node(text: str, node_type: str, language_id: str = "javascript"):
    tree = build_tree(text, language_id)
    for node in walk(tree.root_node):
        if node.type == node_type:
            return node
    raise AssertionError(f"no {node_type} node in {text!r}")
