"""
Tests for the Exceptable test template — substitution table and rendering.

Pure unit tests: names in → Java source text out.
"""

import re

import pytest

from exceptable_testgen.core.services.generators.exceptable_test import (
    CONSTRUCT_SOURCE,
    EXCEPTABLE_TEST_TEMPLATE,
    Placeholder,
    SubstitutionTable,
    TemplateError,
    artifact_name,
    artifact_path,
    build_substitutions,
    generate_exceptable_test,
    render,
)


# ═══════════════════════════════════════════════════════════════════
#  Placeholder / template structure
# ═══════════════════════════════════════════════════════════════════


class TestPlaceholders:
    def test_every_placeholder_appears_in_template(self):
        for p in Placeholder:
            assert p.token in EXCEPTABLE_TEST_TEMPLATE, f"Unused placeholder: {p}"

    def test_every_template_token_is_a_placeholder(self):
        """No {identifier} token in the template outside the enum."""
        known = {p.value for p in Placeholder}
        found = set(re.findall(r"\{([A-Za-z_]+)\}", EXCEPTABLE_TEST_TEMPLATE))
        assert found == known

    def test_tokens_do_not_overlap(self):
        tokens = [p.token for p in Placeholder]
        for a in tokens:
            for b in tokens:
                if a != b:
                    assert a not in b


# ═══════════════════════════════════════════════════════════════════
#  SubstitutionTable
# ═══════════════════════════════════════════════════════════════════


class TestSubstitutionTable:
    def test_build_covers_every_placeholder(self):
        table = build_substitutions("com.x", "Foo", "FooTestSource")
        assert set(table) == set(Placeholder)
        assert len(table) == 7

    def test_method_sources(self):
        table = build_substitutions("com.x", "Foo", "FooTestSource")
        assert table[Placeholder.SOURCES_CONSTRUCT] == "construct_source"
        assert table[Placeholder.SOURCES_SIGNAL_CODE] == "SignalCode_source"
        assert table[Placeholder.SOURCES_SIGNAL_MESSAGE] == "SignalMessage_source"
        assert table[Placeholder.SOURCES_SIGNAL_THROWABLE] == CONSTRUCT_SOURCE

    def test_missing_key_raises(self):
        values = {p: "x" for p in Placeholder if p is not Placeholder.PACKAGE}
        with pytest.raises(TemplateError, match="package"):
            SubstitutionTable(values)

    def test_string_key_rejected(self):
        values = {p: "x" for p in Placeholder}
        values["package"] = "x"  # type: ignore[index]
        with pytest.raises(TemplateError, match="Unknown placeholder"):
            SubstitutionTable(values)

    def test_not_mutable(self):
        table = build_substitutions("com.x", "Foo", "FooTestSource")
        with pytest.raises(TypeError):
            table[Placeholder.PACKAGE] = "other"  # type: ignore[index]


# ═══════════════════════════════════════════════════════════════════
#  render
# ═══════════════════════════════════════════════════════════════════


class TestRender:
    def test_scenario_com_x_foo(self):
        """The canonical example from the contract."""
        source = render(build_substitutions("com.x", "Foo", "FooTestSource"))
        assert "package com.x;" in source
        assert "import com.x.Foo;" in source
        assert "import com.x.FooTestSource;" in source
        assert "public class FooTest extends FooTestSource implements ExceptableTest {" in source
        assert "return Foo.class;" in source

    def test_no_placeholder_left(self):
        source = render(build_substitutions("a.b.c", "Bar", "BarSource"))
        for p in Placeholder:
            assert p.token not in source

    def test_idempotent(self):
        table = build_substitutions("com.x", "Foo", "FooTestSource")
        assert render(table) == render(table)

    def test_method_sources_wired(self):
        source = render(build_substitutions("com.x", "Foo", "FooTestSource"))
        assert source.count('@MethodSource("construct_source")') == 2
        assert source.count('@MethodSource("SignalCode_source")') == 1
        assert source.count('@MethodSource("SignalMessage_source")') == 1

    def test_java_braces_untouched(self):
        source = render(build_substitutions("com.x", "Foo", "FooTestSource"))
        assert source.count("{") == EXCEPTABLE_TEST_TEMPLATE.count("{") - len(
            re.findall(r"\{[A-Za-z_]+\}", EXCEPTABLE_TEST_TEMPLATE)
        )

    def test_test_methods_present(self):
        source = render(build_substitutions("com.x", "Foo", "FooTestSource"))
        for method in ("construct(", "SignalCode(", "SignalMessage(", "SignalThrowable("):
            assert f"public void {method}" in source
        for capability in (
            "signal_assertions", "cause_assertions",
            "context_assertions", "message_assertions",
        ):
            assert f"this.{capability}(" in source

    def test_value_looking_like_token_is_not_resubstituted(self):
        """Single pass: a substituted value is never scanned again."""
        values = {p: "v" for p in Placeholder}
        values[Placeholder.EXCEPTABLE_CLASSNAME] = "{package}"
        source = render(SubstitutionTable(values), "{exceptableClassname}|{package}")
        assert source == "{package}|v"


# ═══════════════════════════════════════════════════════════════════
#  Naming / generate_exceptable_test
# ═══════════════════════════════════════════════════════════════════


class TestNaming:
    def test_artifact_name(self):
        assert artifact_name("com.x", "Foo") == "com.x.FooTest"

    def test_artifact_path(self):
        assert artifact_path("com.x.FooTest") == "com/x/FooTest.java"


class TestGenerateExceptableTest:
    def test_generated_file(self):
        f = generate_exceptable_test("com.x", "Foo", "FooTestSource")
        assert f.name == "com.x.FooTest"
        assert f.path == "com/x/FooTest.java"
        assert f.content.startswith("/*\n * _Exceptable_ test suite generated by")
        assert "Foo" in f.reason
