"""Utility script to inspect the runtime environment."""
from __future__ import annotations

import platform
import sys
from importlib import metadata

from pranair.api.core.config import get_settings

DISTRIBUTIONS = (
    "fastapi",
    "uvicorn",
    "pydantic",
    "pydantic-settings",
    "python-multipart",
    "httpx",
    "python-dotenv",
    "streamlit",
    "pandas",
)


def installed_versions() -> dict[str, str | None]:
    versions: dict[str, str | None] = {}
    for name in DISTRIBUTIONS:
        try:
            versions[name] = metadata.version(name)
        except metadata.PackageNotFoundError:
            versions[name] = None
    return versions


def main() -> None:
    print("Python:", sys.version)
    print("Platform:", platform.platform())
    print("Packages:")
    for name, version in installed_versions().items():
        print(f" - {name}=={version}" if version else f" - {name}: NOT INSTALLED")
    cfg = get_settings()
    print("Distress provider:", cfg.distress_provider)
    print("Credentials:")
    for name, present in cfg.credential_status().items():
        print(f" - {name}: {'configured' if present else 'missing'}")


if __name__ == "__main__":
    main()
