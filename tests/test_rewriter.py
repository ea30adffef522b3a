"""Tests for the memoization rewrite of view functions."""

from textwrap import dedent

import pytest

from jsxmemo import Rewriter, SkipReason, TransformConfig, parse, transform

from .conftest import assert_code_equal, normalize, transform_code


def _reasons(source: str, **kwargs) -> list[SkipReason]:
    return [diagnostic.reason for diagnostic in transform(dedent(source), **kwargs).diagnostics]


class TestAttributeClosures:
    """Inline closures on UI attributes become named callbacks."""

    def test_inline_closure(self):
        actual = transform_code(
            """
            const View = () => {
              return <button onClick={() => alert('clicked')} />;
            };
            """
        )
        assert_code_equal(
            actual,
            """
            const View = () => {
              const _onClick = React.useCallback(() => alert('clicked'), []);
              return <button onClick={_onClick} />;
            };
            """,
        )

    def test_captured_parameter(self):
        actual = transform_code(
            """
            const View = ({ text }) => {
              return <button onClick={() => alert(text)} />;
            };
            """
        )
        assert_code_equal(
            actual,
            """
            const View = ({ text }) => {
              const _onClick = React.useCallback(() => alert(text), [text]);
              return <button onClick={_onClick} />;
            };
            """,
        )

    def test_expression_bodied_view(self):
        actual = transform_code("const View = ({ history }) => <button onClick={() => history.pop()} />;")
        assert_code_equal(
            actual,
            """
            const View = ({ history }) => {
              const _onClick = React.useCallback(() => history.pop(), [history]);
              return <button onClick={_onClick} />;
            };
            """,
        )

    def test_function_declaration(self):
        actual = transform_code("function View({ id }) { return <Row onSelect={function () { select(id); }} />; }")
        assert_code_equal(
            actual,
            """
            function View({ id }) {
              const _onSelect = React.useCallback(function () { select(id); }, [id]);
              return <Row onSelect={_onSelect} />;
            }
            """,
        )

    def test_nested_list_items(self):
        actual = transform_code(
            """
            const View = ({ data, history }) => <div><button onClick={() => history.pop()} /><ul>{data.map(({ id, value }) => <li key={id} onClick={() => history.push(`/data/${id}`)}>{value}</li>)}</ul></div>;
            """
        )
        assert_code_equal(
            actual,
            """
            const View = ({ data, history }) => {
              const _onClick = React.useCallback(() => history.pop(), [history]);
              return <div><button onClick={_onClick} /><ul>{data.map(({ id, value }) => {
                const _onClick2 = React.useCallback(() => history.push(`/data/${id}`), [history, id]);
                return <li key={id} onClick={_onClick2}>{value}</li>;
              })}</ul></div>;
            };
            """,
        )

    def test_conditional_container(self):
        actual = transform_code(
            """
            const View = ({ foo }) => <div>{foo ? <button onClick={() => alert('foo')} /> : <button onClick={() => alert('not foo')} />}</div>;
            """
        )
        assert_code_equal(
            actual,
            """
            const View = ({ foo }) => {
              return <div>{(() => {
                const _onClick = React.useCallback(() => alert('foo'), []);
                const _onClick2 = React.useCallback(() => alert('not foo'), []);
                return foo ? <button onClick={_onClick} /> : <button onClick={_onClick2} />;
              })()}</div>;
            };
            """,
        )

    def test_returns_inside_blocks_are_left_alone(self):
        source = """
            const View = ({ foo }) => {
              if (foo) {
                return <button onClick={() => alert('foo')} />;
              }
              return <button onClick={() => alert('not foo')} />;
            };
            """
        assert_code_equal(
            transform_code(source),
            """
            const View = ({ foo }) => {
              if (foo) {
                return <button onClick={() => alert('foo')} />;
              }
              const _onClick = React.useCallback(() => alert('not foo'), []);
              return <button onClick={_onClick} />;
            };
            """,
        )
        assert SkipReason.AMBIGUOUS_SHAPE in _reasons(source)

    def test_generated_names_avoid_existing_identifiers(self):
        actual = transform_code(
            """
            const _onClick = 1;
            const View = () => <a onClick={() => go(_onClick)} />;
            """
        )
        assert_code_equal(
            actual,
            """
            const _onClick = 1;
            const View = () => {
              const _onClick2 = React.useCallback(() => go(_onClick), [_onClick]);
              return <a onClick={_onClick2} />;
            };
            """,
        )

    def test_attribute_names_become_identifiers(self):
        actual = transform_code("const View = () => <input aria-label={() => 'x'} />;")
        assert "const _ariaLabel = React.useCallback(() => 'x', []);" in actual

    def test_computed_access_is_reported(self):
        source = "const View = ({ rows, index }) => <a onClick={() => open(rows[index])} />;"
        assert "React.useCallback(() => open(rows[index]), [rows, index])" in transform_code(source)
        assert SkipReason.UNSAFE_CAPTURE in _reasons(source)


class TestOwnBindings:
    """Local constants of a view function."""

    def test_defined_callback(self):
        actual = transform_code(
            """
            const View = () => {
              const callback = () => {
                alert('clicked');
              };
              return <button onClick={callback} />;
            };
            """
        )
        assert_code_equal(
            actual,
            """
            const View = () => {
              const callback = React.useCallback(() => {
                alert('clicked');
              }, []);
              return <button onClick={callback} />;
            };
            """,
        )

    def test_derived_value(self):
        actual = transform_code(
            """
            export default ({ data, sortComparator, filterPredicate }) => {
              const transformedData = data.filter(filterPredicate).sort(sortComparator);
              return <ul>{transformedData.map(d => <li>d</li>)}</ul>;
            };
            """
        )
        assert_code_equal(
            actual,
            """
            export default ({ data, sortComparator, filterPredicate }) => {
              const transformedData = React.useMemo(() => data.filter(filterPredicate).sort(sortComparator), [data, filterPredicate, sortComparator]);
              return <ul>{transformedData.map(d => {
                return <li>d</li>;
              })}</ul>;
            };
            """,
        )

    def test_reassignable_binding(self):
        source = """
            export default ({ data, sortComparator, filterPredicate }) => {
              let transformedData = [];
              transformedData = data.filter(filterPredicate).sort(sortComparator);
              return <ul>{transformedData.map(d => <li>d</li>)}</ul>;
            };
            """
        assert_code_equal(
            transform_code(source),
            """
            export default ({ data, sortComparator, filterPredicate }) => {
              let transformedData = [];
              transformedData = data.filter(filterPredicate).sort(sortComparator);
              return <ul>{transformedData.map(d => {
                return <li>d</li>;
              })}</ul>;
            };
            """,
        )
        assert SkipReason.REASSIGNABLE in _reasons(source)

    def test_already_memoized(self):
        source = """
            const View = () => {
              const callback = useCallback(() => {
                alert('clicked');
              }, []);
              return <button onClick={callback} />;
            };
            """
        assert_code_equal(transform_code(source), source)
        assert SkipReason.ALREADY_MEMOIZED in _reasons(source)

    def test_external_reference(self):
        source = """
            const onClick = () => alert('clicked');
            const View = () => {
              return <button onClick={onClick} />;
            };
            """
        assert_code_equal(transform_code(source), source)
        assert _reasons(source) == []

    def test_literal(self):
        source = """
            const View = () => {
              const title = 'Hello';
              return <h1>{title}</h1>;
            };
            """
        assert_code_equal(
            transform_code(source),
            """
            const View = () => {
              const title = React.useMemo(() => 'Hello', []);
              return <h1>{title}</h1>;
            };
            """,
        )
        assert _reasons(source) == []

    def test_binding_used_only_by_effect(self):
        actual = transform_code(
            """
            function View() {
              const handler = () => console.log('x');
              useEffect(() => {
                window.addEventListener('resize', handler);
              }, [handler]);
              return <div />;
            }
            """
        )
        assert_code_equal(
            actual,
            """
            function View() {
              const handler = React.useCallback(() => console.log('x'), []);
              useEffect(() => {
                window.addEventListener('resize', handler);
              }, [handler]);
              return <div />;
            }
            """,
        )

    def test_binding_used_only_in_branch(self):
        actual = transform_code(
            """
            const View = ({ foo }) => {
              const h = () => foo;
              if (foo) {
                return <a onClick={h} />;
              }
              return null;
            };
            """
        )
        assert_code_equal(
            actual,
            """
            const View = ({ foo }) => {
              const h = React.useCallback(() => foo, [foo]);
              if (foo) {
                return <a onClick={h} />;
              }
              return null;
            };
            """,
        )

    def test_prefixed_call_is_left_alone(self):
        source = """
            const View = ({ a }) => {
              const u = useful(a);
              return <div>{u}</div>;
            };
            """
        assert_code_equal(transform_code(source), source)
        assert SkipReason.ALREADY_MEMOIZED in _reasons(source)

    def test_transitive_bindings(self):
        actual = transform_code(
            """
            function List({ items, query }) {
              const matches = items.filter(item => item.name.includes(query));
              const count = matches.length;
              return <p>{count}</p>;
            }
            """
        )
        assert_code_equal(
            actual,
            """
            function List({ items, query }) {
              const matches = React.useMemo(() => items.filter(item => item.name.includes(query)), [items, query]);
              const count = React.useMemo(() => matches.length, [matches, matches.length]);
              return <p>{count}</p>;
            }
            """,
        )

    def test_ui_valued_binding(self):
        actual = transform_code(
            """
            function Card({ title }) {
              const header = <h1>{title}</h1>;
              return <section>{header}</section>;
            }
            """
        )
        assert_code_equal(
            actual,
            """
            function Card({ title }) {
              const header = React.useMemo(() => {
                return <h1>{title}</h1>;
              }, [title]);
              return <section>{header}</section>;
            }
            """,
        )

    def test_declared_later_dependency(self):
        source = """
            function View() {
              const a = () => b();
              const b = () => go();
              return <div onClick={a} title={b} />;
            }
            """
        assert_code_equal(
            transform_code(source),
            """
            function View() {
              const a = () => b();
              const b = React.useCallback(() => go(), []);
              return <div onClick={a} title={b} />;
            }
            """,
        )
        assert SkipReason.TEMPORAL_DEAD_ZONE in _reasons(source)

    def test_non_ui_return_is_not_analyzed(self):
        source = """
            function useTotal(items) {
              const total = items.reduce((sum, item) => sum + item, 0);
              return total;
            }
            """
        assert_code_equal(transform_code(source), source)
        assert _reasons(source) == []


class TestUntouched:
    """Programs without view functions."""

    def test_no_ui_return(self):
        source = """
            function onLoad() {
              alert('loaded');
            }
            window.onload = onLoad;
            """
        assert_code_equal(transform_code(source), source)

    def test_identity(self):
        program = parse("function onLoad() { alert('loaded'); }\nwindow.onload = onLoad;")
        assert Rewriter().rewrite(program) is program

    def test_primitive_arguments_are_not_entered(self):
        actual = transform_code(
            """
            function View() {
              const node = useMemo(() => <b onClick={() => go()} />, []);
              return node;
            }
            """
        )
        assert "useCallback" not in actual
        assert "onClick={() => go()}" in actual

    @pytest.mark.parametrize(
        "source",
        [
            "const View = ({ text }) => <button onClick={() => alert(text)} />;",
            "const View = ({ foo }) => <div>{foo ? <a onClick={() => x()} /> : <b onClick={() => y()} />}</div>;",
            "function Card({ title }) { const header = <h1>{title}</h1>; return <section>{header}</section>; }",
            "const View = ({ items }) => <ul>{items.map(item => <li onClick={() => pick(item)}>{item}</li>)}</ul>;",
        ],
    )
    def test_idempotent(self, source):
        once = transform_code(source)
        assert transform_code(once) == once


class TestConfiguration:
    """TransformConfig options change the emitted calls."""

    def test_bare_primitives(self, bare_config):
        actual = transform_code("const View = ({ text }) => <p onClick={() => alert(text)} />;", config=bare_config)
        assert "const _onClick = useCallback(() => alert(text), [text]);" in actual

    def test_custom_primitives(self):
        config = TransformConfig(namespace="Preact", callback_primitive="useEvent", value_primitive="useComputed")
        actual = transform_code(
            """
            function View({ items }) {
              const visible = items.filter(Boolean);
              return <List items={visible} onPick={() => pick()} />;
            }
            """,
            config=config,
        )
        assert "const visible = Preact.useComputed(() => items.filter(Boolean), [items]);" in actual
        assert "const _onPick = Preact.useEvent(() => pick(), []);" in actual

    def test_attributes_disabled(self):
        config = TransformConfig(memoize_attributes=False)
        source = """
            const View = () => {
              if (x) {
                return <a onClick={() => go()} />;
              }
              return <a onClick={() => go()} />;
            };
            """
        assert_code_equal(transform_code(source, config=config), source)
        assert SkipReason.AMBIGUOUS_SHAPE not in _reasons(source, config=config)

    def test_bindings_disabled(self):
        config = TransformConfig(memoize_bindings=False)
        source = """
            const View = () => {
              const callback = () => go();
              return <a onClick={callback} />;
            };
            """
        assert normalize(transform_code(source, config=config)) == normalize(source)
