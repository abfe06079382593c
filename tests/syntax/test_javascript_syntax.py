"""Tests for the tree-sitter JavaScript adapter."""

from __future__ import annotations

import textwrap

import pytest

from routedoc.errors import SourceParseError
from routedoc.index import DeclarationIndex
from routedoc.syntax import JavaScriptSyntax, func_name

_SOURCE = textwrap.dedent(
    """
    /** a */
    function alpha() {}
    /** b */
    const beta = () => 1;
    /** c */
    let gamma = function () {};
    /** d */
    class Delta {
      /** e */
      epsilon() {}
      /** f */
      zeta = 1;
    }
    /** g */
    export function eta() {}
    /** h */
    const theta = 42;
    const handlers = {
      /** i */
      iota: (ctx) => ctx,
      /** j */
      kappa(ctx) {},
    };
    // plain comment
    /* block comment */
    function lambda() {}
    /** dangling */
    """
)


@pytest.fixture(scope="module")
def blocks():
    syntax = JavaScriptSyntax()
    return syntax.doc_blocks(syntax.parse(_SOURCE))


def test_doc_blocks_are_found_in_document_order(blocks) -> None:
    texts = [block.text for block in blocks]
    assert texts == [f"/** {letter} */" for letter in "abcdefghij"]


def test_func_name_by_declaration_kind(blocks) -> None:
    names = {block.text[4]: func_name(block.declaration) for block in blocks}
    assert names == {
        "a": "alpha",
        "b": "beta",
        "c": "gamma",
        "d": "",
        "e": "epsilon",
        "f": "zeta",
        "g": "eta",
        "h": "",
        "i": "iota",
        "j": "kappa",
    }


def test_block_line_numbers(blocks) -> None:
    assert blocks[0].line == 2


def test_methods_are_nested_under_class_declaration(blocks) -> None:
    index = DeclarationIndex(blocks)
    by_text = {block.text: block.declaration for block in blocks}
    klass = by_text["/** d */"]
    assert index.is_ancestor(klass, by_text["/** e */"])
    assert index.is_ancestor(klass, by_text["/** f */"])
    assert not index.is_ancestor(klass, by_text["/** g */"])
    assert not index.is_ancestor(by_text["/** e */"], klass)


def test_consecutive_blocks_share_a_declaration() -> None:
    syntax = JavaScriptSyntax()
    blocks = syntax.doc_blocks(syntax.parse("/** one */\n/** two */\nfunction f() {}\n"))
    assert [func_name(block.declaration) for block in blocks] == ["f", "f"]


def test_decorated_methods_are_declarations() -> None:
    source = textwrap.dedent(
        """
        class Service {
          /** doc */
          @log
          async run() {}
        }
        """
    )
    syntax = JavaScriptSyntax()
    blocks = syntax.doc_blocks(syntax.parse(source))
    assert [func_name(block.declaration) for block in blocks] == ["run"]


def test_parse_error_reports_line() -> None:
    with pytest.raises(SourceParseError) as excinfo:
        JavaScriptSyntax().parse("const ok = 1;\nclass {\n")
    assert excinfo.value.line >= 1
