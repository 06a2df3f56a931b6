import logging

from routescope import config
from routescope.scanner.vocabulary import RouteVocabulary
from routescope.utils.logger import get_logger


def test_list_from_env(monkeypatch):
    monkeypatch.setenv("ROUTESCOPE_TEST_LIST", " app , api,, srv ")
    assert config._list_from_env("ROUTESCOPE_TEST_LIST", "") == ["app", "api", "srv"]


def test_bool_from_env(monkeypatch):
    monkeypatch.setenv("ROUTESCOPE_TEST_FLAG", "Yes")
    assert config._bool_from_env("ROUTESCOPE_TEST_FLAG", "false") is True
    monkeypatch.setenv("ROUTESCOPE_TEST_FLAG", "0")
    assert config._bool_from_env("ROUTESCOPE_TEST_FLAG", "true") is False


def test_vocabulary_from_settings():
    settings = config.Settings()
    settings.APP_HANDLE_NAMES = ["srv"]
    settings.ROUTER_FACTORY_NAME = "createRouter"
    vocabulary = RouteVocabulary.from_settings(settings)
    assert vocabulary.app_handle_names == frozenset({"srv"})
    assert vocabulary.router_factory_name == "createRouter"
    assert vocabulary.mount_method_name == settings.MOUNT_METHOD_NAME


def test_get_logger_attaches_handlers_once():
    first = get_logger("routescope.tests.once")
    count = len(first.handlers)
    second = get_logger("routescope.tests.once")
    assert first is second
    assert len(second.handlers) == count >= 1


def test_get_logger_explicit_level():
    logger = get_logger("routescope.tests.level", level=logging.DEBUG)
    assert logger.level == logging.DEBUG
