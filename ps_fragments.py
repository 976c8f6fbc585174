#!/usr/bin/env python3
# ps_fragments.py · v0.1.0
"""
Fragment synthesizers for synthetic PowerShell documents.

Each synthesizer takes an explicit Context (catalog, random source, name
tracker) and returns one self-contained block of text.  Nothing here touches
module-level randomness, so a seeded Context reproduces its output exactly.

Fragment kinds
--------------
* identifier    Verb-Noun functions, Noun+Suffix classes, camelCase variables
* param_list    [CmdletBinding()] param() declarations
* function      advanced function with try/catch/finally body and a timer local
* class         class with typed properties, constructor and methods
* comment       comment-based help block
* using         `using namespace` directives
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from ps_catalog import TemplateCatalog

__version__ = "0.1.0"

INDENT = "    "
TAG_PROBABILITY = 0.2

# ──────────────────────────────────────────────────────────────
# Context passed to synthesizers
# ──────────────────────────────────────────────────────────────


class NameTracker:
    """Hands out identifiers that are unique within one document."""

    def __init__(self, ctx: "Context") -> None:
        self.ctx = ctx
        self.used: Set[str] = set()

    def fresh(self, kind: str) -> str:
        for attempt in range(10_000):
            name = synthesize_identifier(self.ctx, kind, force_tag=attempt >= 100)
            if name.lower() not in self.used:
                self.used.add(name.lower())
                return name
        raise RuntimeError("Identifier space exhausted")


@dataclass(slots=True)
class Context:
    catalog: TemplateCatalog
    rng: random.Random
    include_comments: bool = True
    names: NameTracker = field(init=False)

    def __post_init__(self) -> None:
        self.names = NameTracker(self)

    def pick(self, category: str) -> str:
        return self.catalog.pick(self.rng, category)

    def reset_names(self) -> None:
        self.names = NameTracker(self)


# ──────────────────────────────────────────────────────────────
# Registry
# ──────────────────────────────────────────────────────────────

GeneratorFn = Callable[[Context], str]
_REGISTRY: Dict[str, GeneratorFn] = {}


def register(kind: str) -> Callable[[GeneratorFn], GeneratorFn]:
    def inner(fn: GeneratorFn) -> GeneratorFn:
        if kind in _REGISTRY:
            raise ValueError(f"Duplicate generator: {kind}")
        _REGISTRY[kind] = fn
        return fn
    return inner


def render_fragment(kind: str, ctx: Context) -> str:
    return _REGISTRY[kind](ctx)


# ──────────────────────────────────────────────────────────────
# Identifiers & parameters
# ──────────────────────────────────────────────────────────────


def synthesize_identifier(ctx: Context, kind: str, *, force_tag: bool = False) -> str:
    """Build a name for ``kind`` from the catalog's prefix and suffix pools.

    ``function`` gives Verb-Noun, ``class`` gives Noun+Suffix, ``variable``
    gives a camelCase noun pair and ``parameter`` a parameter-name pick.  A
    numeric tag is appended at random, or always with ``force_tag``.
    """
    if kind == "function":
        name = f"{ctx.pick('Verbs')}-{ctx.pick('Nouns')}"
    elif kind == "class":
        name = ctx.pick("Nouns") + ctx.pick("ClassSuffixes")
    elif kind == "variable":
        name = ctx.pick("Nouns").lower() + ctx.pick("Nouns")
    elif kind == "parameter":
        name = ctx.pick("ParameterNames")
    else:
        raise ValueError(f"Unknown identifier kind: {kind}")

    if force_tag or ctx.rng.random() < TAG_PROBABILITY:
        name += str(ctx.rng.randint(1, 99))
    return name


def synthesize_parameter_list(ctx: Context, count: int) -> List[str]:
    # names may repeat; PowerShell only complains at bind time
    if count < 0:
        raise ValueError("Parameter count must be non-negative")
    params: List[str] = []
    for i in range(count):
        lines: List[str] = []
        if ctx.rng.random() < 0.4:
            lines.append(f"[Parameter(Mandatory = $true, Position = {i})]")
        else:
            lines.append("[Parameter()]")
        if ctx.rng.random() < 0.5:
            lines.append(ctx.pick("Validations"))
        lines.append(f"{ctx.pick('Types')}${synthesize_identifier(ctx, 'parameter')}")
        params.append("\n".join(INDENT * 2 + line for line in lines))
    return params


# ──────────────────────────────────────────────────────────────
# Blocks
# ──────────────────────────────────────────────────────────────


def synthesize_comment_block(ctx: Context, subject: str, indent: str = "") -> str:
    detail = ctx.pick("Synopses")
    lines = [
        "<#",
        ".SYNOPSIS",
        f"{INDENT}{ctx.pick('Synopses')}",
        ".DESCRIPTION",
        f"{INDENT}{subject} {detail[0].lower()}{detail[1:]}",
        ".NOTES",
    ]
    pool = ctx.catalog.fragments("NoteLines")
    notes = ctx.rng.sample(pool, k=min(ctx.rng.randint(1, 3), len(pool)))
    lines.extend(f"{INDENT}{note}" for note in notes)
    lines.append(".EXAMPLE")
    lines.append(f"{INDENT}{subject}")
    lines.append("#>")
    return "".join(f"{indent}{line}\n" for line in lines)


def synthesize_using_block(ctx: Context) -> str:
    pool = ctx.catalog.fragments("Usings")
    chosen = ctx.rng.sample(pool, k=min(ctx.rng.randint(0, 3), len(pool)))
    return "".join(f"using namespace {ns}\n" for ns in chosen)


def synthesize_function_body(ctx: Context, category: str) -> str:
    ops = [ctx.pick(category) for _ in range(ctx.rng.randint(2, 6))]
    return "".join(f"{INDENT * 2}{op}\n" for op in ops)


def synthesize_function(ctx: Context, category: str, name: Optional[str] = None) -> str:
    name = name or ctx.names.fresh("function")
    params = synthesize_parameter_list(ctx, ctx.rng.randint(0, 4))

    parts: List[str] = [f"function {name} {{\n"]
    if ctx.include_comments:
        parts.append(synthesize_comment_block(ctx, name, indent=INDENT))
    parts.append(f"{INDENT}[CmdletBinding()]\n")
    if params:
        parts.append(f"{INDENT}param(\n" + ",\n\n".join(params) + f"\n{INDENT})\n\n")
    else:
        parts.append(f"{INDENT}param()\n\n")
    timer = synthesize_identifier(ctx, "variable")
    parts.append(f'{INDENT}Write-Verbose "Starting {name}"\n')
    parts.append(f"{INDENT}${timer} = [System.Diagnostics.Stopwatch]::StartNew()\n")
    parts.append(f"{INDENT}try {{\n")
    parts.append(synthesize_function_body(ctx, category))
    parts.append(f"{INDENT}}}\n")
    parts.append(f"{INDENT}catch {{\n")
    parts.append(f'{INDENT * 2}Write-Error "{name} failed: $_"\n')
    parts.append(f"{INDENT}}}\n")
    parts.append(f"{INDENT}finally {{\n")
    parts.append(f'{INDENT * 2}Write-Verbose "{name} finished in $(${timer}.ElapsedMilliseconds) ms"\n')
    parts.append(f"{INDENT}}}\n")
    parts.append("}\n")
    return "".join(parts)


def synthesize_class_body(ctx: Context, name: Optional[str] = None) -> str:
    name = name or ctx.names.fresh("class")
    props = []
    seen: Set[str] = set()
    for _ in range(ctx.rng.randint(2, 5)):
        prop = ctx.pick("Nouns")
        if prop in seen:
            prop += str(len(seen))
        seen.add(prop)
        props.append((ctx.pick("PropertyTypes"), prop))

    lines: List[str] = [f"class {name} {{"]
    lines.extend(f"{INDENT}{ty}${prop}" for ty, prop in props)
    lines.append("")
    lines.append(f"{INDENT}{name}() {{")
    lines.append(f"{INDENT * 2}$this.{props[0][1]} = $null")
    lines.append(f"{INDENT}}}")
    for _ in range(ctx.rng.randint(1, 4)):
        method = ctx.pick("Verbs") + ctx.pick("Nouns")
        ret = ctx.rng.choice(["[void]", "[string]", "[bool]", "[int]"])
        lines.append("")
        lines.append(f"{INDENT}{ret} {method}() {{")
        lines.append(f'{INDENT * 2}Write-Verbose "{name}.{method}"')
        if ret == "[string]":
            lines.append(f"{INDENT * 2}return [string]$this.{ctx.rng.choice(props)[1]}")
        elif ret == "[bool]":
            lines.append(f"{INDENT * 2}return $null -ne $this.{ctx.rng.choice(props)[1]}")
        elif ret == "[int]":
            lines.append(f"{INDENT * 2}return {ctx.rng.randint(0, 100)}")
        lines.append(f"{INDENT}}}")
    lines.append("}")
    return "\n".join(lines) + "\n"


# ──────────────────────────────────────────────────────────────
# Registered kinds
# ──────────────────────────────────────────────────────────────


@register("header")
def gen_header(ctx: Context) -> str:
    if not ctx.include_comments:
        return ""
    return synthesize_comment_block(ctx, ctx.pick("Verbs") + ctx.pick("Nouns"))


@register("requires")
def gen_requires(ctx: Context) -> str:
    return "#Requires -Version 5.1\n"


@register("using")
def gen_using(ctx: Context) -> str:
    return synthesize_using_block(ctx)

