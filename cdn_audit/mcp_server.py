"""MCP server exposing the cache audit as a tool."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .auditor import run_audit
from .config import AuditConfig
from .models import CheckMode
from .report import render_report

logger = logging.getLogger("cdn_audit.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="cdn-audit")


@mcp.tool()
async def audit(
    check_type: str = CheckMode.ALL.value,
    cookie: Optional[str] = None,
) -> str:
    """Check which catalog files are served from the CDN cache and return a Markdown report."""

    mode = CheckMode(check_type)
    # Left in place so the HTML pages listed in the report stay readable.
    output_dir = Path(tempfile.mkdtemp(prefix="cdn-audit-"))
    config = AuditConfig(output_dir=output_dir, mode=mode, cookie=cookie)
    report = await run_audit(config)
    return render_report(report)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
