#!/usr/bin/env python3
# synthetic_psfunction.py · v0.1.0
"""
Generate one advanced PowerShell function per file, named Verb-Noun.ps1.

Usage
-----
python powershell_function_gen.py 100
python powershell_function_gen.py 40 --seed 3 --no-comments
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ps_config import GenerationRequest
from ps_document import AssembledDocument, assemble_function_file
from ps_driver import main
from ps_fragments import Context

__version__ = "0.1.0"

DEFAULT_OUT = Path("synthetic_ps") / "functions"


def produce_function(ctx: Context, request: GenerationRequest, index: int) -> AssembledDocument:
    return assemble_function_file(ctx)


def _cli(argv: Optional[Sequence[str]] = None) -> None:
    main(
        produce_function,
        description="Generate one synthetic PowerShell function per file.",
        default_out=DEFAULT_OUT,
        argv=argv,
    )


if __name__ == "__main__":
    _cli()
