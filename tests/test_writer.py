"""Tests for golden file writing."""

from typing import TYPE_CHECKING

import pytest

from pytest_platina.core import DocumentWriter, Runner, run_and_update
from pytest_platina.schema import Case, Document, Parameter

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem

    from pytest_platina.core import DocumentParser, TestCase


TEST_LAYOUT_CONTENTS = (
    pytest.param(
        '[case]\n[p]\nx\n----------\n==========\n',
        id='canonical',
    ),
    pytest.param(
        '\n\n[case]\n\n\n[p]\n x \n\n----------\n\n==========\n\n\n',
        id='extra blank lines',
    ),
    pytest.param(
        '[case]\n[p]\nx\n-----------\n===========\n\n',
        id='eleven characters',
    ),
    pytest.param(
        '  [case]  \n\t[p]\nx\n   ----------   \n ==============\n',
        id='padded headers and separators',
    ),
    pytest.param(
        '[case]\r\n[p]\r\nx\r\n----------\r\n==========\r\n',
        id='crlf',
    ),
    pytest.param(
        '[case]\n[p]\nx\n----------\n==========',
        id='no final newline',
    ),
    pytest.param(
        '[case]\n[p]\n----------\n[q]\n\n----------\n==========\n',
        id='empty bodies',
    ),
    pytest.param(
        '[a]\n==========\n[b]\n[p]\n[x]\n==========\n----------\n==========\n',
        id='lookalike lines in body',
    ),
)


@pytest.mark.parametrize('content', TEST_LAYOUT_CONTENTS)
def test_render_identity(content: str, parser: 'DocumentParser',
                         writer: 'DocumentWriter') -> None:
    """Reproduce parsed text byte for byte."""
    assert writer.render(parser.parse(content)) == content


@pytest.mark.parametrize('content', TEST_LAYOUT_CONTENTS)
def test_round_trip_structure(content: str, parser: 'DocumentParser',
                              writer: 'DocumentWriter') -> None:
    """Parse rendered and formatted text into the same structure."""
    document = parser.parse(content)

    assert parser.parse(writer.render(document)).model_dump() == document.model_dump()
    assert parser.parse(writer.format(document)).model_dump() == document.model_dump()


def test_update_touches_changed_body_only(length_content: str,
                                          length_tester: 'Callable[[TestCase], None]') -> None:
    """Rewrite the changed body and keep every other byte."""
    content = length_content.replace('[input2]', '\n\n[input2]')
    content = f'\n{content}  \n'

    updated, changelog = run_and_update(content, length_tester)

    assert updated == content.replace('\n5\n', '\n2\n')
    assert len(changelog) == 1


def test_update_keeps_original_layout(parser: 'DocumentParser', writer: 'DocumentWriter') -> None:
    """Keep header and separator lines of an updated parameter."""
    content = '[case]\r\n  [out]\r\nold\r\n-------------\r\n==========\r\n'

    def tester(case: 'TestCase') -> None:
        case.compare_and_update_param('out', 'new')

    result = Runner(update=True).run(parser.parse(content), tester)

    assert writer.render(result.document) == content.replace('old', 'new')


@pytest.mark.parametrize('content, body, expected', (
    pytest.param(
        '[c]\n[out]\n----------\n==========\n',
        'v',
        '[c]\n[out]\nv\n----------\n==========\n',
        id='fill empty body',
    ),
    pytest.param(
        '[c]\n[out]\nx\n----------\n==========\n',
        '',
        '[c]\n[out]\n\n----------\n==========\n',
        id='clear body',
    ),
    pytest.param(
        '[c]\n[out]\nx\n----------\n==========\n',
        'a\n\nb\n',
        '[c]\n[out]\na\n\nb\n\n----------\n==========\n',
        id='multi-line body',
    ),
    pytest.param(
        '[c]\n[in]\nabc\n----------\n==========\n',
        '3',
        '[c]\n[in]\nabc\n----------\n[out]\n3\n----------\n==========\n',
        id='new parameter',
    ),
))
def test_update_bodies(content: str, body: str, expected: str,
                       parser: 'DocumentParser', writer: 'DocumentWriter') -> None:
    """Render updated bodies so that they parse back unchanged."""
    def tester(case: 'TestCase') -> None:
        case.compare_and_update_param('out', body)

    result = Runner(update=True).run(parser.parse(content), tester)
    rendered = writer.render(result.document)

    assert rendered == expected
    assert parser.parse(rendered).cases[0].get('out').body == body


def test_format_canonical(parser: 'DocumentParser', writer: 'DocumentWriter') -> None:
    """Normalize blank lines and separator widths."""
    document = parser.parse('\n\n[c]\n\n[p]\nx\n-----------\n\n===========\n  \n')

    assert writer.format(document) == '[c]\n[p]\nx\n----------\n==========\n\n'


def test_render_new_document() -> None:
    """Render a document built without a source canonically."""
    document = Document(cases=(
        Case(name='case1', params=(
            Parameter(name='input', body='a'),
            Parameter(name='output', body=''),
        )),
    ))

    assert DocumentWriter(separator_width=12).render(document) == (
        '[case1]\n'
        '[input]\n'
        'a\n'
        '------------\n'
        '[output]\n'
        '\n'
        '------------\n'
        '============\n'
        '\n'
    )


def test_write_file(fs: 'FakeFilesystem', parser: 'DocumentParser',
                    writer: 'DocumentWriter', length_content: str) -> None:
    """Write rendered text without newline translation."""
    fs.create_file('golden.txt', contents=length_content.replace('\n', '\r\n'))

    document = parser.parse_file('golden.txt')
    writer.write_file(document, 'copy.txt')

    with open('copy.txt', encoding='utf-8', newline='') as content:
        assert content.read() == length_content.replace('\n', '\r\n')
