"""Tests for heading-aware section splitting."""

import pytest

from sveltedocs.chunkers import SectionChunker, sniff_doc_type
from sveltedocs.models import DocType, DocVariant, Package

from tests.conftest import SVELTE_DOCS


@pytest.mark.unit
class TestSniffDocType:
    @pytest.mark.parametrize(
        "heading, expected",
        [
            ("# Runes API", DocType.API),
            ("# Getting started tutorial", DocType.TUTORIAL),
            ("# Examples", DocType.EXAMPLE),
            ("# Compiler errors", DocType.ERROR),
        ],
    )
    def test_keywords(self, heading, expected):
        assert sniff_doc_type(heading, DocType.API) == expected

    def test_keeps_previous_type_when_nothing_matches(self):
        assert sniff_doc_type("# Introduction", DocType.TUTORIAL) == DocType.TUTORIAL


@pytest.mark.unit
class TestSectionChunker:
    def test_builds_hierarchy_ids_and_types(self):
        docs = SectionChunker().chunk(SVELTE_DOCS, package=Package.SVELTE)

        assert [d.id for d in docs] == [
            "svelte-runes api",
            "svelte-runes api-$derived",
            "svelte-component lifecycle tutorial",
            "svelte-error reference",
            "svelte-error reference-warnings",
        ]
        assert [d.type for d in docs] == [
            DocType.API,
            DocType.API,
            DocType.TUTORIAL,
            DocType.ERROR,
            DocType.ERROR,
        ]
        assert docs[1].hierarchy == ["Runes API", "$derived"]

    def test_section_importance(self):
        docs = SectionChunker().chunk(SVELTE_DOCS, package=Package.SVELTE)

        assert docs[0].section_importance == 2.0
        assert docs[1].section_importance == 1.0

    def test_second_level_heading_replaces_previous_subsection(self):
        text = "# Top\n\n## One\n\nfirst\n\n## Two\n\nsecond"

        docs = SectionChunker().chunk(text, package=Package.KIT)

        assert [d.hierarchy for d in docs] == [["Top", "One"], ["Top", "Two"]]

    def test_subsection_without_parent_stays_nested(self):
        docs = SectionChunker().chunk("## Orphan\n\nbody before any top-level heading", package=Package.KIT)

        assert [(d.id, d.hierarchy, d.section_importance) for d in docs] == [
            ("kit--orphan", ["", "Orphan"], 1.0)
        ]

    def test_paragraphs_of_one_section_are_merged(self):
        text = "# Top\n\nfirst paragraph\n\nsecond paragraph"

        docs = SectionChunker().chunk(text, package=Package.CLI)

        assert len(docs) == 1
        assert docs[0].content == "first paragraph\n\nsecond paragraph"

    def test_text_following_a_heading_line_is_content(self):
        docs = SectionChunker().chunk("# Top\nbody right under the heading")

        assert docs[0].hierarchy == ["Top"]
        assert docs[0].content == "body right under the heading"

    def test_variant_is_part_of_the_id(self):
        docs = SectionChunker().chunk("# Intro\n\nhello", variant=DocVariant.LLMS_SMALL)

        assert docs[0].id == "llms-small-intro"
        assert docs[0].variant == DocVariant.LLMS_SMALL
        assert docs[0].package is None

    def test_headings_only_produce_no_documents(self):
        assert SectionChunker().chunk("# One\n\n## Two\n\n   \n\n# Three") == []
        assert SectionChunker().chunk("") == []
