"""Punto de entrada de la app Kivy."""

from __future__ import annotations

import argparse
from pathlib import Path

from glucose_tracker.storage import DEFAULT_DB_NAME, DEFAULT_STORAGE_KEY


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Registro de glucosa con grafico y recomendaciones."
    )
    parser.add_argument(
        "--db-path",
        default=str(Path.cwd() / DEFAULT_DB_NAME),
        help=f"Archivo SQLite (default: ./{DEFAULT_DB_NAME}).",
    )
    parser.add_argument(
        "--storage-key",
        default=DEFAULT_STORAGE_KEY,
        help=f"Clave bajo la que se guardan las lecturas (default: {DEFAULT_STORAGE_KEY}).",
    )
    return parser.parse_args(argv)


def main() -> int:
    """Run app entrypoint."""
    ns = parse_args()
    db_path = Path(ns.db_path).expanduser().resolve()
    try:
        from glucose_tracker.app import run_app

        return run_app(db_path, ns.storage_key)
    except ImportError as exc:
        print(f"No se pudo iniciar Kivy: {exc}")
        print("Instala dependencias de GUI: pip install kivy")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
