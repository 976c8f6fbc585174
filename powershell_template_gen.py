#!/usr/bin/env python3
# synthetic_pstemplate.py · v0.1.0
"""
Generate PowerShell scripts from the catalog's pre-authored templates.

Templates carry __PLACEHOLDER__ tokens (function name, log path, server,
threshold, service) that are filled with random values per file.  Files are
named after the template label: LogRotation.ps1, LogRotation_1.ps1, ...
Size profiles do not apply here.

Usage
-----
python powershell_template_gen.py 30
python powershell_template_gen.py 30 --seed 1 --config templates.yml
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ps_config import GenerationRequest
from ps_document import AssembledDocument, assemble_template
from ps_driver import main
from ps_fragments import Context

__version__ = "0.1.0"

DEFAULT_OUT = Path("synthetic_ps") / "templates"


def produce_template(ctx: Context, request: GenerationRequest, index: int) -> AssembledDocument:
    return assemble_template(ctx)


def _cli(argv: Optional[Sequence[str]] = None) -> None:
    main(
        produce_template,
        description="Generate PowerShell scripts from pre-authored templates.",
        default_out=DEFAULT_OUT,
        argv=argv,
    )


if __name__ == "__main__":
    _cli()
