"""Tests for memoization eligibility rules."""

import pytest

from jsxmemo import SkipReason, TransformConfig
from jsxmemo.analysis import Eligibility, classify, function_scope, is_hook_call, is_inline_closure, program_scope
from jsxmemo.parser import parse

_VIEW = """
const external = compute();
function View({ flag }) {
  let counter = 0;
  var legacy = 1;
  let later;
  const label = 'x';
  const plain = `static`;
  const shaped = `row-${flag}`;
  const handler = () => go();
  const callback = function () { go(); };
  const visible = items.filter(Boolean);
  const memo = useMemo(() => 1, []);
  const namespaced = React.useCallback(() => 1, []);
  const { part } = obj;
  return <div />;
}
"""


@pytest.fixture
def view_scope():
    program = parse(_VIEW)
    return function_scope(program.body[1], program_scope(program))


def _classify(scope, name, config=None):
    binding = scope.get_binding(name)
    assert binding is not None
    if config is None:
        return classify(binding, scope)
    return classify(binding, scope, config)


class TestClassify:
    """Rule order and outcomes."""

    @pytest.mark.parametrize(
        ("name", "reason"),
        [
            ("flag", SkipReason.NOT_A_DECLARATOR),
            ("part", SkipReason.NOT_A_DECLARATOR),
            ("later", SkipReason.NOT_A_DECLARATOR),
            ("memo", SkipReason.ALREADY_MEMOIZED),
            ("namespaced", SkipReason.ALREADY_MEMOIZED),
            ("counter", SkipReason.REASSIGNABLE),
            ("legacy", SkipReason.REASSIGNABLE),
            ("external", SkipReason.EXTERNAL_REFERENCE),
        ],
    )
    def test_skipped(self, view_scope, name, reason):
        classification = _classify(view_scope, name)
        assert classification.eligibility is Eligibility.SKIP
        assert classification.reason is reason
        assert not classification.memoize

    @pytest.mark.parametrize("name", ["handler", "callback"])
    def test_callbacks(self, view_scope, name):
        classification = _classify(view_scope, name)
        assert classification.eligibility is Eligibility.MEMOIZE_CALLBACK
        assert classification.reason is None
        assert classification.memoize

    @pytest.mark.parametrize("name", ["visible", "shaped", "label", "plain"])
    def test_values(self, view_scope, name):
        assert _classify(view_scope, name).eligibility is Eligibility.MEMOIZE_VALUE

    def test_custom_prefix(self, view_scope):
        config = TransformConfig(primitive_prefix="with")
        # With another prefix, useMemo(...) is an ordinary call
        assert _classify(view_scope, "memo", config).eligibility is Eligibility.MEMOIZE_VALUE


class TestHookCalls:
    """Recognizing framework primitive calls."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("useEffect(f)", True),
            ("React.useMemo(f)", True),
            ("use(promise)", True),
            ("useX()", True),
            ("use_thing()", True),
            ("user()", True),
            ("useful()", True),
            ("User()", False),
            ("obj['useMemo']()", False),
            ("fetchUser()", False),
            ("(() => useMemo())()", False),
        ],
    )
    def test_is_hook_call(self, source, expected):
        expr = parse(f"{source};").body[0].expression
        assert is_hook_call(expr) is expected

    def test_non_call(self):
        assert not is_hook_call(parse("useMemo;").body[0].expression)
        assert not is_hook_call(None)

    def test_custom_prefix(self):
        expr = parse("withRouter(View);").body[0].expression
        assert is_hook_call(expr, "with")
        assert not is_hook_call(expr)


class TestInlineClosures:
    """Attribute values that allocate a function per render."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("() => go()", True),
            ("function () {}", True),
            ("async (e) => { await go(e); }", True),
            ("handler", False),
            ("props.onClick", False),
            ("make(handler)", False),
        ],
    )
    def test_is_inline_closure(self, source, expected):
        expr = parse(f"x = {source};").body[0].expression.right
        assert is_inline_closure(expr) is expected
