"""
gen_paths.py - Default output roots shared by the tile tools.

Roots are relative to the directory the tool is run from.
"""

import os

GEN_ROOT = "gen"
ANALYSIS_ROOT = "gen/analysis"


def project_root() -> str:
    return os.getcwd()
