# routescope/scanner/vocabulary.py
"""
Names the route-registration extractor keys on: HTTP verbs, application
handles, router factories and the mount method.
"""

from dataclasses import dataclass
from typing import FrozenSet

HTTP_METHODS = frozenset({"get", "post", "put", "delete", "patch", "head", "options", "all"})


@dataclass(frozen=True)
class RouteVocabulary:
    http_methods: FrozenSet[str] = HTTP_METHODS
    app_handle_names: FrozenSet[str] = frozenset({"app", "server"})
    app_factory_names: FrozenSet[str] = frozenset({"express"})
    router_factory_name: str = "Router"
    mount_method_name: str = "use"

    @classmethod
    def from_settings(cls, settings) -> "RouteVocabulary":
        return cls(
            app_handle_names=frozenset(settings.APP_HANDLE_NAMES),
            app_factory_names=frozenset(settings.APP_FACTORY_NAMES),
            router_factory_name=settings.ROUTER_FACTORY_NAME,
            mount_method_name=settings.MOUNT_METHOD_NAME,
        )
