"""
Tests for the template catalog.
"""

import random

import pytest

from ps_catalog import (
    NAME_POOLS,
    OPERATION_POOLS,
    CatalogError,
    build_catalog,
)


class TestDefaultCatalog:
    def test_every_pool_is_non_empty(self, catalog):
        for category, pool in catalog.pools.items():
            assert pool, category

    def test_operation_fragments_are_single_lines(self, catalog):
        for category in catalog.operation_categories:
            assert all("\n" not in op for op in catalog.fragments(category))

    def test_pick_draws_from_pool(self, catalog):
        rng = random.Random(0)
        for _ in range(20):
            assert catalog.pick(rng, "Verbs") in catalog.fragments("Verbs")

    def test_unknown_category_raises(self, catalog):
        with pytest.raises(KeyError):
            catalog.fragments("Nope")

    def test_pools_are_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.pools["Verbs"] = ("Get",)
        assert isinstance(catalog.fragments("Verbs"), tuple)

    def test_template_labels(self, catalog):
        assert "LogRotation" in catalog.template_labels
        assert "__LOG_PATH__" in catalog.template("LogRotation")


class TestBuildCatalog:
    def test_empty_pool_fails_fast(self):
        names = dict(NAME_POOLS, Verbs=())
        with pytest.raises(CatalogError, match="Verbs"):
            build_catalog(names, OPERATION_POOLS)

    def test_missing_category_fails_fast(self):
        names = {k: v for k, v in NAME_POOLS.items() if k != "Types"}
        with pytest.raises(CatalogError, match="Types"):
            build_catalog(names, OPERATION_POOLS)

    def test_string_pool_is_rejected(self):
        with pytest.raises(CatalogError):
            build_catalog(dict(NAME_POOLS, Nouns="Item"), OPERATION_POOLS)

    def test_multiline_operation_is_rejected(self):
        with pytest.raises(CatalogError, match="single lines"):
            build_catalog(NAME_POOLS, {"Broken": ("Get-Item\nRemove-Item",)})

    def test_no_operation_categories(self):
        with pytest.raises(CatalogError):
            build_catalog(NAME_POOLS, {})

    def test_empty_templates(self):
        with pytest.raises(CatalogError):
            build_catalog(NAME_POOLS, OPERATION_POOLS, {})

    def test_source_mapping_is_copied(self):
        ops = {"Only": ["Get-Date"]}
        cat = build_catalog(NAME_POOLS, ops)
        ops["Only"].append("Get-Process")
        assert cat.fragments("Only") == ("Get-Date",)
        assert cat.operation_categories == ("Only",)

    def test_unknown_placeholder_is_rejected(self):
        with pytest.raises(CatalogError, match="TYPO"):
            build_catalog(NAME_POOLS, OPERATION_POOLS, {"Good": "Write-Output __SERVER__", "Bad": "Write-Output __TYPO__"})

    def test_known_placeholders_are_accepted(self):
        body = "__FUNCTION__ __LOG_PATH__ __THRESHOLD__ __SERVER__ __SERVICE__ $_"
        assert build_catalog(NAME_POOLS, OPERATION_POOLS, {"All": body}).template("All") == body

    @pytest.mark.parametrize("label", ["../escaped", "a/b", "a\\b", "", "..", "two words"])
    def test_template_label_must_be_plain_word(self, label):
        with pytest.raises(CatalogError, match="plain word"):
            build_catalog(NAME_POOLS, OPERATION_POOLS, {label: "Write-Output hi"})

    @pytest.mark.parametrize("category", ["../Cloud", "Cloud/Azure"])
    def test_operation_category_must_be_plain_word(self, category):
        with pytest.raises(CatalogError, match="plain word"):
            build_catalog(NAME_POOLS, {category: ["Get-AzVM"]})
