from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List

from replan.io import load_blocks
from replan.model import Block
from replan.validate import BlockValidationError


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def die(prog: str, msg: str, rc: int = 2) -> int:
    print(f"[{prog}] ERROR: {msg}", file=sys.stderr)
    return rc


def load_blocks_or_report(prog: str, path: Path) -> tuple[List[Block] | None, int]:
    """Load blocks for a tool; returns (blocks, 0) or (None, exit_code)."""
    if not path.exists():
        return None, die(prog, f"Missing input JSON: {path}")
    try:
        return load_blocks(path), 0
    except BlockValidationError as e:
        for line in str(e).splitlines()[:50]:
            print(f"[{prog}] ERROR: {line.strip()}", file=sys.stderr)
        return None, 3
    except ValueError as e:
        return None, die(prog, f"Failed to load JSON: {path} ({e})")
    except OSError as e:
        return None, die(prog, f"Failed to read {path} ({e})")
