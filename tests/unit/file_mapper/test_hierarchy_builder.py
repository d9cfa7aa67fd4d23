"""Unit tests for file_mapper.hierarchy_builder module."""

import logging

import pytest

from kb_sync.file_mapper.errors import StructuralError
from kb_sync.file_mapper.hierarchy_builder import HierarchyBuilder, RootOrder
from kb_sync.file_mapper.models import ArticleNode, ArticleStatus
from tests.fixtures.sample_articles import intro_catalog, make_article


def flatten(nodes, parent_id=None):
    """Yield (node, parent_id) pairs depth-first."""
    for node in nodes:
        yield node, parent_id
        yield from flatten(node.children, node.article_id)


class TestBuildForest:
    """Test cases for HierarchyBuilder.build_forest()."""

    def test_every_article_appears_once_under_its_parent(self):
        """Each article is one node and node parents mirror parent_id."""
        articles = intro_catalog() + [
            make_article("2-1", "Reference", order=1),
            make_article("2-2", "CLI", parent_id="2-1"),
            make_article("2-3", "Flags", parent_id="2-2"),
        ]

        forest = HierarchyBuilder.build_forest(articles)

        pairs = list(flatten(forest))
        assert sorted(n.article_id for n, _ in pairs) == sorted(a.article_id for a in articles)
        by_id = {a.article_id: a for a in articles}
        for node, parent_id in pairs:
            assert (by_id[node.article_id].parent_id or None) == parent_id

    def test_children_sorted_by_order(self):
        forest = HierarchyBuilder.build_forest(intro_catalog())

        assert len(forest) == 1
        assert [c.title for c in forest[0].children] == ["Setup", "Advanced"]

    def test_equal_orders_keep_input_order(self):
        """Sibling sorting is stable."""
        articles = [
            make_article("1-1", "Root"),
            make_article("1-4", "Zeta", parent_id="1-1", order=5),
            make_article("1-2", "Beta", parent_id="1-1", order=5),
            make_article("1-3", "Alpha", parent_id="1-1", order=1),
        ]

        forest = HierarchyBuilder.build_forest(articles)

        assert [c.title for c in forest[0].children] == ["Alpha", "Zeta", "Beta"]

    def test_display_roots_sorted_by_title(self):
        articles = [
            make_article("1-1", "Zebra", order=0),
            make_article("1-2", "Apple", order=1),
        ]

        forest = HierarchyBuilder.build_forest(articles, RootOrder.DISPLAY)

        assert [n.title for n in forest] == ["Apple", "Zebra"]

    def test_download_roots_sorted_by_order(self):
        articles = [
            make_article("1-1", "Zebra", order=0),
            make_article("1-2", "Apple", order=1),
        ]

        forest = HierarchyBuilder.build_forest(articles, RootOrder.DOWNLOAD)

        assert [n.title for n in forest] == ["Zebra", "Apple"]

    def test_empty_parent_id_is_root(self):
        forest = HierarchyBuilder.build_forest([make_article("1-1", "A", parent_id="")])

        assert [n.article_id for n in forest] == ["1-1"]

    def test_dangling_parent_becomes_root_with_warning(self, caplog):
        articles = [
            make_article("1-1", "Intro"),
            make_article("1-9", "Orphan", parent_id="missing"),
        ]

        with caplog.at_level(logging.WARNING, logger="kb_sync"):
            forest = HierarchyBuilder.build_forest(articles)

        assert sorted(n.title for n in forest) == ["Intro", "Orphan"]
        assert "missing parent missing" in caplog.text

    def test_nodes_start_unchanged_without_file(self):
        forest = HierarchyBuilder.build_forest(intro_catalog())

        for node, _ in flatten(forest):
            assert node.status is ArticleStatus.UNCHANGED
            assert node.file_path is None
            assert node.article is not None
            assert node.article.article_id == node.article_id

    def test_empty_input(self):
        assert HierarchyBuilder.build_forest([]) == []

    def test_cycle_raises_structural_error(self):
        """A parent cycle has no root and is reported, not looped over."""
        articles = [
            make_article("1-1", "Root"),
            make_article("2-1", "A", parent_id="2-2"),
            make_article("2-2", "B", parent_id="2-1"),
        ]

        with pytest.raises(StructuralError) as exc_info:
            HierarchyBuilder.build_forest(articles)

        assert exc_info.value.article_ids == ["2-1", "2-2"]

    def test_self_parent_raises_structural_error(self):
        with pytest.raises(StructuralError):
            HierarchyBuilder.build_forest([make_article("1-1", "Loop", parent_id="1-1")])

    def test_duplicate_ids_raise_structural_error(self):
        with pytest.raises(StructuralError) as exc_info:
            HierarchyBuilder.build_forest([make_article("1-1", "A"), make_article("1-1", "B")])

        assert exc_info.value.article_ids == ["1-1"]

    def test_returns_article_nodes(self):
        forest = HierarchyBuilder.build_forest([make_article("1-1", "A")])

        assert isinstance(forest[0], ArticleNode)
