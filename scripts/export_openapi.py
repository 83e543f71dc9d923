from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI  # noqa: E402
from src.api.main import app as api_app  # noqa: E402


def export_openapi(app: FastAPI, destination: Path) -> None:
    """Persist the OpenAPI schema to the given destination."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    schema = app.openapi()
    destination.write_text(json.dumps(schema, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Export the session API OpenAPI schema")
    parser.add_argument("--output", type=Path, default=Path("docs/api/openapi.json"))
    args = parser.parse_args()
    export_openapi(api_app, args.output)
    print(f"OpenAPI schema written to {args.output}")


if __name__ == "__main__":
    main()
