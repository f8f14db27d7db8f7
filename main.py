"""Entry point de desarrollo (sin instalar el paquete).

Permite ejecutar la CLI desde un checkout:
- `python main.py browser status`
- `python main.py --json browser tabs`

El código vive en `src/`; sin `pip install -e .` hay que añadirlo al path
antes de importar `cli`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

SRC_DIR = Path(__file__).resolve().parent / "src"


def main(argv: Sequence[str] | None = None) -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import app  # noqa: PLC0415

    app(args=list(argv) if argv is not None else None, prog_name="browserctl")


if __name__ == "__main__":
    main()
