from routescope.scanner.path_resolver import lookup_variable_path, resolve_path_argument, string_value
from routescope.scanner.syntax_tree import call_arguments

from conftest import first_node


def first_argument(code: str, language_id: str = "javascript"):
    call = first_node(code, "call_expression", language_id)
    return call_arguments(call)[0]


def test_string_literal():
    resolved = resolve_path_argument(first_argument("app.get('/users', h)"), "")
    assert resolved.path == "/users"
    assert resolved.extra_params == []


def test_double_quoted_string_with_escape():
    node = first_argument('app.get("/say/\\"hi\\"", h)')
    assert string_value(node) == '/say/"hi"'


def test_template_collects_identifier_params():
    resolved = resolve_path_argument(first_argument("app.get(`/a/${first}/b/${second}`, h)"), "")
    assert resolved.path == "/a/${first}/b/${second}"
    assert resolved.extra_params == ["first", "second"]


def test_template_without_substitutions():
    resolved = resolve_path_argument(first_argument("app.get(`/plain`, h)"), "")
    assert resolved.path == "/plain"
    assert resolved.extra_params == []


def test_template_member_expression_is_not_a_param():
    resolved = resolve_path_argument(first_argument("app.get(`/users/${req.id}`, h)"), "")
    assert resolved.path == "/users/"
    assert resolved.extra_params == []


def test_identifier_resolved_from_source():
    code = "const base = '/base';\napp.get(base, h)"
    resolved = resolve_path_argument(first_argument(code), code)
    assert resolved.path == "/base"


def test_identifier_lookup_respects_limit():
    code = "app.get(base, h)\nconst base = '/base';"
    resolved = resolve_path_argument(first_argument(code), code, limit=0)
    assert resolved.path is None


def test_unresolvable_shapes():
    for code in ("app.get(routes.users, h)", "app.get(make(), h)", "app.get(...parts)", "app.get(42, h)"):
        assert resolve_path_argument(first_argument(code), code).path is None


def test_lookup_variable_path_forms():
    assert lookup_variable_path("p", "let p = \"/x\";") == "/x"
    assert lookup_variable_path("p", "var p='/y'") == "/y"
    assert lookup_variable_path("p", "const p: string = '/t';") == "/t"


def test_lookup_first_match_wins():
    text = "const p = '/first';\nfunction f() { const p = '/second'; }"
    assert lookup_variable_path("p", text) == "/first"


def test_lookup_requires_exact_name_and_literal():
    assert lookup_variable_path("path", "const path2 = '/no';") is None
    assert lookup_variable_path("p", "const p = build('/no');") is None
    assert lookup_variable_path("$p", "const $p = '/dollar';") == "/dollar"
