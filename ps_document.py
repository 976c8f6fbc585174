#!/usr/bin/env python3
# ps_document.py · v0.1.0
"""
Assemble whole PowerShell documents out of synthesized fragments.

A size profile decides how many classes and functions go into a document;
the assemblers pick the counts, render the fragments in order and return an
AssembledDocument that still needs a filename from the allocator.

Layouts
-------
* script     header, #Requires, usings, classes, functions, `# Main` call
* module     same body, one operation category, Export-ModuleMember footer
* template   pre-authored catalog body with __PLACEHOLDER__ tokens filled
* function   a single advanced function followed by an invocation
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ps_catalog import PLACEHOLDER
from ps_fragments import (
    Context,
    render_fragment,
    synthesize_class_body,
    synthesize_comment_block,
    synthesize_function,
)

__version__ = "0.1.0"

# ──────────────────────────────────────────────────────────────
# Size profiles
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SizeProfile:
    name: str
    functions: Tuple[int, int]
    classes: Tuple[int, int]


PROFILES: Dict[str, SizeProfile] = {
    p.name: p
    for p in (
        SizeProfile("Small", functions=(1, 2), classes=(0, 0)),
        SizeProfile("Medium", functions=(3, 5), classes=(0, 1)),
        SizeProfile("Large", functions=(6, 10), classes=(1, 3)),
        SizeProfile("VeryLarge", functions=(10, 20), classes=(4, 8)),
        SizeProfile("Default", functions=(2, 6), classes=(0, 1)),
    )
}

DEFAULT_WEIGHTS: Dict[str, float] = {
    "Small":     40,
    "Medium":    30,
    "Large":     20,
    "VeryLarge": 10,
}


def resolve_profile(name: str) -> SizeProfile:
    for key, profile in PROFILES.items():
        if key.lower() == name.lower():
            return profile
    raise ValueError(f"Unknown size profile: {name} (choose from {', '.join(PROFILES)})")


def choose_profile(rng: random.Random, weights: Optional[Mapping[str, float]] = None) -> SizeProfile:
    weights = DEFAULT_WEIGHTS if weights is None else weights
    if not weights or any(w < 0 for w in weights.values()) or sum(weights.values()) <= 0:
        raise ValueError("Profile weights must be non-negative with a positive sum")
    names, values = zip(*weights.items())
    return resolve_profile(rng.choices(names, weights=values, k=1)[0])


# ──────────────────────────────────────────────────────────────
# Documents
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class AssembledDocument:
    text: str
    stem: str
    suffix: str
    profile: str
    functions: Tuple[str, ...] = ()
    classes: Tuple[str, ...] = ()

    @property
    def filename(self) -> str:
        return self.stem + self.suffix


def _body(ctx: Context, profile: SizeProfile, category: Optional[str] = None) -> Tuple[List[str], List[str], List[str]]:
    rng = ctx.rng
    class_names = [ctx.names.fresh("class") for _ in range(rng.randint(*profile.classes))]
    function_names = [ctx.names.fresh("function") for _ in range(rng.randint(*profile.functions))]

    parts: List[str] = [render_fragment("header", ctx), render_fragment("requires", ctx)]
    usings = render_fragment("using", ctx)
    if usings:
        parts.append(usings)
    parts.append("\n")
    for name in class_names:
        parts.append(synthesize_class_body(ctx, name) + "\n")
    for name in function_names:
        cat = category or rng.choice(ctx.catalog.operation_categories)
        parts.append(synthesize_function(ctx, cat, name) + "\n")
    return parts, function_names, class_names


def assemble_document(ctx: Context, profile: SizeProfile, stem: str, suffix: str = ".ps1") -> AssembledDocument:
    ctx.reset_names()
    parts, functions, classes = _body(ctx, profile)
    parts.append("# Main\n")
    parts.append(f"{ctx.rng.choice(functions)} -Verbose\n")
    return AssembledDocument(
        text="".join(parts),
        stem=stem,
        suffix=suffix,
        profile=profile.name,
        functions=tuple(functions),
        classes=tuple(classes),
    )


def assemble_module(ctx: Context, profile: SizeProfile, category: Optional[str] = None) -> AssembledDocument:
    ctx.reset_names()
    category = category or ctx.rng.choice(ctx.catalog.operation_categories)
    parts, functions, classes = _body(ctx, profile, category)
    parts.append(f"Export-ModuleMember -Function {', '.join(functions)}\n")
    return AssembledDocument(
        text="".join(parts),
        stem=f"{category}Tools",
        suffix=".psm1",
        profile=profile.name,
        functions=tuple(functions),
        classes=tuple(classes),
    )


# ──────────────────────────────────────────────────────────────
# Templates
# ──────────────────────────────────────────────────────────────

LOG_PATHS = ("C:\\Logs", "D:\\Data\\Logs", "C:\\ProgramData\\Synthetic\\Logs", "E:\\Archive")
SERVICES = ("Spooler", "W32Time", "BITS", "WinRM", "Dnscache")


def render_placeholders(text: str, values: Mapping[str, str]) -> str:
    def fill(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            raise KeyError(f"Unfilled placeholder: {key}")
        return str(values[key])
    return PLACEHOLDER.sub(fill, text)


def assemble_template(ctx: Context, label: Optional[str] = None) -> AssembledDocument:
    ctx.reset_names()
    rng = ctx.rng
    label = label or rng.choice(ctx.catalog.template_labels)
    function = ctx.names.fresh("function")
    values = {
        "FUNCTION":  function,
        "LOG_PATH":  rng.choice(LOG_PATHS),
        "THRESHOLD": str(rng.randint(3, 90)),
        "SERVER":    f"SRV{rng.randint(1, 99):02d}",
        "SERVICE":   rng.choice(SERVICES),
    }
    body = render_placeholders(ctx.catalog.template(label), values)

    parts: List[str] = []
    if ctx.include_comments:
        parts.append(synthesize_comment_block(ctx, label))
    parts.append(body)
    text = "".join(parts)
    functions = tuple(re.findall(r"^function (\S+)", text, flags=re.MULTILINE))
    return AssembledDocument(text=text, stem=label, suffix=".ps1", profile="Template", functions=functions)


def assemble_function_file(ctx: Context, category: Optional[str] = None) -> AssembledDocument:
    ctx.reset_names()
    name = ctx.names.fresh("function")
    category = category or ctx.rng.choice(ctx.catalog.operation_categories)
    text = synthesize_function(ctx, category, name) + f"\n{name} -Verbose\n"
    return AssembledDocument(text=text, stem=name, suffix=".ps1", profile="Function", functions=(name,))
