#!/usr/bin/env python3
# ps_driver.py · v0.1.0
"""
Shared batch loop and command line for the synthetic PowerShell generators.

Every generator program supplies a `produce(ctx, request, index)` callable
that returns one AssembledDocument; the driver owns the random source, the
output directory, filename allocation and console reporting.
"""
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ps_catalog import TemplateCatalog, default_catalog
from ps_config import (
    ConfigError,
    GenerationRequest,
    catalog_from_config,
    load_config,
    parse_weights,
    request_from_config,
)
from ps_document import AssembledDocument, PROFILES
from ps_fragments import Context
from ps_output import ENCODING, NameAllocator, ensure_output_dir, write_document

__version__ = "0.1.0"

ProduceFn = Callable[[Context, GenerationRequest, int], AssembledDocument]

# ──────────────────────────────────────────────────────────────
# Batch
# ──────────────────────────────────────────────────────────────


def run_batch(
    request: GenerationRequest,
    produce: ProduceFn,
    catalog: Optional[TemplateCatalog] = None,
    echo: Callable[[str], None] = print,
    noun: str = "scripts",
) -> List[Path]:
    out_dir = ensure_output_dir(request.output_dir)
    ctx = Context(
        catalog=catalog or default_catalog(),
        rng=random.Random(request.seed),
        include_comments=request.include_comments,
    )
    allocator = NameAllocator(out_dir)

    written: List[Path] = []
    for index in range(1, request.count + 1):
        doc = produce(ctx, request, index)
        path = write_document(allocator, doc)
        written.append(path)
        echo(f"✔ Created {path.name} ({len(doc.text.encode(ENCODING))} bytes)")

    echo(f"✔ {len(written)} {noun} created in {out_dir}")
    return written


# ──────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────


def build_parser(description: str, default_out: Path) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description=description)
    p.add_argument("count", nargs="?", type=int, help="Number of files to generate (default 100)")
    p.add_argument("--out", type=Path, help=f"Output directory (default {default_out})")
    p.add_argument("--seed", type=int, help="Random seed for deterministic output")
    p.add_argument("--profile", help=f"Pin one size profile: {', '.join(PROFILES)}")
    p.add_argument("--weights", help="Profile weights, e.g. Small=40,Medium=30,Large=20,VeryLarge=10")
    p.add_argument("--no-comments", dest="include_comments", action="store_const", const=False,
                   help="Omit comment-based help blocks")
    p.add_argument("--config", type=Path, help="YAML file with generation settings")
    return p


def resolve_request(
    args: argparse.Namespace, default_out: Path
) -> Tuple[GenerationRequest, Optional[TemplateCatalog]]:
    request = GenerationRequest(output_dir=default_out)
    catalog = None
    if args.config:
        data = load_config(args.config)
        request = request_from_config(data, request)
        if "catalog" in data:
            catalog = catalog_from_config(data)

    weights: Optional[Dict[str, float]] = parse_weights(args.weights) if args.weights else None
    request = request.merged(
        count=args.count,
        output_dir=args.out,
        seed=args.seed,
        profile=args.profile,
        include_comments=args.include_comments,
        profile_weights=weights,
    )
    return request, catalog


def main(
    produce: ProduceFn,
    *,
    description: str,
    default_out: Path,
    noun: str = "scripts",
    argv: Optional[Sequence[str]] = None,
) -> None:
    args = build_parser(description, default_out).parse_args(argv)
    try:
        request, catalog = resolve_request(args, default_out)
        run_batch(request, produce, catalog, noun=noun)
    except (ConfigError, OSError) as exc:
        print("Generation failed:", exc, file=sys.stderr)
        sys.exit(1)
