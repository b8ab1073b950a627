#!/usr/bin/env python3
"""
Refresh the INCLUDE-RUST blocks of a document from a source checkout.

Usage: update_md_includes.py <document>
Referenced paths resolve against the current working directory, so run it
from the repository root.
"""

import sys
from pathlib import Path

# Add the source tree to Python path
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from mdinclude.cli.main import main  # noqa: E402

if __name__ == "__main__":
    main()
