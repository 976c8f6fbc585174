#!/usr/bin/env python3
# synthetic_powershell.py · v0.1.0
"""
Generate batches of synthetic PowerShell scripts of varying size.

Major features
--------------
* Deterministic output with --seed
* Weighted size profiles (Small/Medium/Large/VeryLarge), or pin one with --profile
* Collision-free filenames: Script_001_Small.ps1, Script_001_Small_1.ps1, ...
* Optional YAML config (--config) for weights, catalog pools and defaults

Usage
-----
python powershell_gen.py 100
python powershell_gen.py 20 --seed 42 --profile Large --out out/scripts
python powershell_gen.py 50 --weights Small=70,VeryLarge=30 --no-comments
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ps_config import GenerationRequest
from ps_document import AssembledDocument, assemble_document, choose_profile, resolve_profile
from ps_driver import main
from ps_fragments import Context

__version__ = "0.1.0"

DEFAULT_OUT = Path("synthetic_ps") / "scripts"


def produce_script(ctx: Context, request: GenerationRequest, index: int) -> AssembledDocument:
    if request.profile:
        profile = resolve_profile(request.profile)
    else:
        profile = choose_profile(ctx.rng, request.profile_weights)
    return assemble_document(ctx, profile, stem=f"Script_{index:03d}_{profile.name}")


def _cli(argv: Optional[Sequence[str]] = None) -> None:
    main(
        produce_script,
        description="Generate synthetic PowerShell scripts.",
        default_out=DEFAULT_OUT,
        argv=argv,
    )


if __name__ == "__main__":
    _cli()
