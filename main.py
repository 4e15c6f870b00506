"""Development entry point (no install).

Run the CLI from a checkout with ``python main.py ...``. The code lives in
``src/``, so without an editable install Python would not find ``cli``,
``core`` and ``adapters``.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
