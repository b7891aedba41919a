"""
Fleet Ledger Forecasting Engines - MCP Server

FastMCP server exposing forecasting tools:
- Forecast Engine: weekly forecast and truck scaling table
- Batch Tracker: batch status, invoice reconciliation and variance
"""

import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Import the MCP instance and tools from tool modules
# This registers all the tools with the MCP server
from engines.tools.forecast_engine import mcp  # noqa: E402
from engines.tools import batch_tracker  # noqa: E402, F401


def main():
    """Run the MCP server."""
    logger.info("Starting Fleet Ledger Forecasting Engines MCP Server")
    mcp.run()


if __name__ == "__main__":
    main()
