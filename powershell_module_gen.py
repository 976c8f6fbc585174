#!/usr/bin/env python3
# synthetic_psmodule.py · v0.1.0
"""
Generate synthetic PowerShell script modules (.psm1).

Each module draws every function body from one operation category
(FileSystem, Network, ...) and ends with an Export-ModuleMember line naming
the generated functions.  Files are named after the category:
NetworkTools.psm1, NetworkTools_1.psm1, ...

Usage
-----
python powershell_module_gen.py 25
python powershell_module_gen.py 10 --seed 7 --profile Medium --out out/modules
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ps_config import GenerationRequest
from ps_document import AssembledDocument, assemble_module, choose_profile, resolve_profile
from ps_driver import main
from ps_fragments import Context

__version__ = "0.1.0"

DEFAULT_OUT = Path("synthetic_ps") / "modules"


def produce_module(ctx: Context, request: GenerationRequest, index: int) -> AssembledDocument:
    if request.profile:
        profile = resolve_profile(request.profile)
    else:
        profile = choose_profile(ctx.rng, request.profile_weights)
    return assemble_module(ctx, profile)


def _cli(argv: Optional[Sequence[str]] = None) -> None:
    main(
        produce_module,
        description="Generate synthetic PowerShell modules.",
        default_out=DEFAULT_OUT,
        noun="modules",
        argv=argv,
    )


if __name__ == "__main__":
    _cli()
