# routescope/scanner/stub_parsers.py
"""
Extractors for frameworks that are recognized but not implemented yet.

Each one reports `supports() == True` for its language and always returns
an empty route list: "recognized language, zero routes" rather than
"unsupported". Replace `parse` in a subclass here to add a framework.
"""

from typing import List, Optional

from routescope.models.route_model import Route
from routescope.scanner.base_parser import BaseParser


class PlaceholderParser(BaseParser):
    def parse(self, text: str, language_id: Optional[str] = None) -> List[Route]:
        return []


class NestJSParser(PlaceholderParser):
    name = "nestjs"
    framework = "NestJS"
    languages = frozenset({"typescript"})


class FastAPIParser(PlaceholderParser):
    name = "fastapi"
    framework = "FastAPI"
    languages = frozenset({"python"})


class DjangoParser(PlaceholderParser):
    name = "django"
    framework = "Django"
    languages = frozenset({"python"})


class SpringBootParser(PlaceholderParser):
    name = "springboot"
    framework = "Spring Boot"
    languages = frozenset({"java"})


class GoGinParser(PlaceholderParser):
    name = "gin"
    framework = "Gin"
    languages = frozenset({"go"})


class LaravelParser(PlaceholderParser):
    name = "laravel"
    framework = "Laravel"
    languages = frozenset({"php"})


class GraphQLParser(PlaceholderParser):
    name = "graphql"
    framework = "GraphQL"
    languages = frozenset({"graphql"})


PLACEHOLDER_PARSERS = (
    NestJSParser,
    FastAPIParser,
    DjangoParser,
    SpringBootParser,
    GoGinParser,
    LaravelParser,
    GraphQLParser,
)
