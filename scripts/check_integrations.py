"""Check that the configured image generation backend is reachable."""

from __future__ import annotations

import asyncio
import sys
from typing import Iterable

from mockupgen.config.settings import get_settings
from mockupgen.integrations import IntegrationCheckResult, run_all_checks


def _format_result(result: IntegrationCheckResult) -> str:
    status = "✅" if result.success else "❌"
    return f"{status} {result.name}: {result.message}"


def print_results(results: Iterable[IntegrationCheckResult]) -> bool:
    ok = True
    for result in results:
        print(_format_result(result))
        ok = ok and result.success
    return ok


def main() -> int:
    settings = get_settings()
    print(f"Backend: {settings.backend} ({settings.environment})")
    results = asyncio.run(run_all_checks())
    return 0 if print_results(results) else 1


if __name__ == "__main__":
    sys.exit(main())
