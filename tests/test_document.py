"""
Tests for size profiles and document assembly.
"""

import random
import re

import pytest

from ps_document import (
    DEFAULT_WEIGHTS,
    PROFILES,
    assemble_document,
    assemble_function_file,
    assemble_module,
    assemble_template,
    choose_profile,
    render_placeholders,
    resolve_profile,
)
from ps_fragments import Context


def count_definitions(text: str, keyword: str) -> int:
    return len(re.findall(rf"^{keyword} \S+ \{{$", text, flags=re.MULTILINE))


class TestProfiles:
    def test_resolve_is_case_insensitive(self):
        assert resolve_profile("verylarge") is PROFILES["VeryLarge"]

    def test_resolve_unknown(self):
        with pytest.raises(ValueError, match="Unknown size profile"):
            resolve_profile("Huge")

    def test_choose_respects_zero_weights(self):
        rng = random.Random(3)
        picks = {choose_profile(rng, {"Small": 0, "Large": 1}).name for _ in range(50)}
        assert picks == {"Large"}

    def test_default_weights_cover_all_sized_profiles(self):
        rng = random.Random(11)
        picks = {choose_profile(rng).name for _ in range(500)}
        assert picks == set(DEFAULT_WEIGHTS)

    @pytest.mark.parametrize("weights", [{}, {"Small": -1, "Large": 2}, {"Small": 0}])
    def test_invalid_weights(self, weights):
        with pytest.raises(ValueError):
            choose_profile(random.Random(0), weights)


class TestAssembleDocument:
    @pytest.mark.parametrize("name", list(PROFILES))
    def test_counts_within_profile_bounds(self, catalog, name):
        profile = PROFILES[name]
        ctx = Context(catalog=catalog, rng=random.Random(name))
        for _ in range(15):
            doc = assemble_document(ctx, profile, stem="Script_001")
            lo, hi = profile.functions
            assert lo <= len(doc.functions) <= hi
            lo, hi = profile.classes
            assert lo <= len(doc.classes) <= hi
            assert count_definitions(doc.text, "function") == len(doc.functions)
            assert count_definitions(doc.text, "class") == len(doc.classes)

    def test_small_has_no_classes(self, ctx):
        doc = assemble_document(ctx, PROFILES["Small"], stem="s")
        assert doc.classes == ()
        assert "\nclass " not in doc.text

    def test_epilogue_invokes_generated_function(self, ctx):
        doc = assemble_document(ctx, PROFILES["Medium"], stem="s")
        main = doc.text.split("# Main\n")[1]
        assert main.split()[0] in doc.functions

    def test_document_layout(self, ctx):
        doc = assemble_document(ctx, PROFILES["Large"], stem="Script_007_Large")
        assert doc.filename == "Script_007_Large.ps1"
        assert doc.profile == "Large"
        assert doc.text.startswith("<#\n")
        assert "#Requires -Version 5.1\n" in doc.text

    def test_same_seed_same_document(self, catalog):
        docs = [
            assemble_document(Context(catalog=catalog, rng=random.Random(99)), PROFILES["VeryLarge"], stem="x").text
            for _ in range(2)
        ]
        assert docs[0] == docs[1]

    def test_no_comments(self, catalog):
        ctx = Context(catalog=catalog, rng=random.Random(2), include_comments=False)
        doc = assemble_document(ctx, PROFILES["Medium"], stem="x")
        assert "<#" not in doc.text


class TestVariants:
    def test_module_exports_every_function(self, ctx, catalog):
        doc = assemble_module(ctx, PROFILES["Medium"], category="Registry")
        assert doc.stem == "RegistryTools"
        assert doc.suffix == ".psm1"
        last = doc.text.rstrip().splitlines()[-1]
        assert last == "Export-ModuleMember -Function " + ", ".join(doc.functions)
        body_ops = {op for op in catalog.fragments("Registry")}
        other_ops = {op for c in catalog.operation_categories if c != "Registry" for op in catalog.fragments(c)}
        lines = {line.strip() for line in doc.text.splitlines()}
        assert lines & body_ops
        assert not (lines & (other_ops - body_ops))

    def test_template_fills_every_placeholder(self, ctx, catalog):
        for label in catalog.template_labels:
            doc = assemble_template(ctx, label)
            assert doc.stem == label
            assert "__" not in re.sub(r"\$_", "", doc.text.split("#>\n")[-1])

    def test_template_functions_detected(self, ctx):
        doc = assemble_template(ctx, "BackupJob")
        assert len(doc.functions) == 1
        assert doc.text.rstrip().endswith(doc.functions[0])

    def test_function_file(self, ctx):
        doc = assemble_function_file(ctx, category="Security")
        name = doc.functions[0]
        assert doc.stem == name
        assert doc.text.startswith(f"function {name} {{\n")
        assert doc.text.endswith(f"\n{name} -Verbose\n")


class TestPlaceholders:
    def test_render(self):
        assert render_placeholders("Hi __USER_NAME__ on __HOST1__", {"USER_NAME": "a", "HOST1": "b"}) == "Hi a on b"

    def test_powershell_automatic_variables_untouched(self):
        assert render_placeholders("$_.Name __X__", {"X": "1"}) == "$_.Name 1"

    def test_missing_value(self):
        with pytest.raises(KeyError, match="SERVER"):
            render_placeholders("ping __SERVER__", {})
