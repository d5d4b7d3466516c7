"""
MCP server for the finance tracker.

Exposes transactions, budgets and analytics through the Model Context
Protocol.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from finance_tracker_mcp.core.exceptions import FinanceTrackerError
from finance_tracker_mcp.core.snapshot import load_snapshot
from finance_tracker_mcp.core.storage import InMemoryStorage, Storage
from finance_tracker_mcp.tools.tools import (
    TOOLS_BY_NAME,
    FinanceTrackerTools,
    create_tool_schemas,
)

logger = logging.getLogger(__name__)

# Noun used in "Invalid <noun> data" messages.
VALIDATION_SUBJECTS = {
    "create_category": "category",
    "create_transaction": "transaction",
    "update_transaction": "transaction",
    "create_budget": "budget",
    "update_budget": "budget",
}


class FinanceTrackerServer:
    """MCP server for the finance tracker."""

    def __init__(
        self,
        storage: Optional[Storage] = None,
        data_file: Optional[Path] = None,
    ):
        """
        Initialize the MCP server.

        Args:
            storage: Store to serve. If None, a new in-memory store seeded
                    with the default categories is created.
            data_file: Optional JSON snapshot to load into the store.
        """
        self.storage = storage if storage is not None else InMemoryStorage()
        if data_file is not None:
            load_snapshot(data_file, self.storage)

        self.tools = FinanceTrackerTools(self.storage)
        self.server = Server("finance-tracker-mcp")

        # Register handlers
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return self.list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return self.call_tool(name, arguments)

    def list_tools(self) -> list[Tool]:
        schemas = create_tool_schemas()
        return [
            Tool(
                name=schema["name"],
                description=schema["description"],
                inputSchema=schema["inputSchema"],
            )
            for schema in schemas
        ]

    def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> list[TextContent]:
        """
        Validate the arguments of a tool call, run it and format the result.

        Validation errors, unknown ids and unexpected failures are reported
        as text rather than raised.
        """
        tool = TOOLS_BY_NAME.get(name)
        if tool is None:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

        try:
            request = tool.request_model.model_validate(arguments or {})
            result = self._dispatch(name, request)

            return [
                TextContent(
                    type="text",
                    text=json.dumps(result, indent=2),
                )
            ]

        except ValidationError as e:
            subject = VALIDATION_SUBJECTS.get(name, "request")
            logger.debug("Rejected %s arguments: %s", name, e)
            return [
                TextContent(
                    type="text",
                    text=f"Invalid {subject} data: {_describe_errors(e)}",
                )
            ]
        except FinanceTrackerError as e:
            # Handle lookups of unknown records
            return [TextContent(type="text", text=f"Error: {str(e)}")]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [
                TextContent(
                    type="text",
                    text=f"Error executing tool: {str(e)}",
                )
            ]

    def _dispatch(self, name: str, request: Any) -> Dict[str, Any]:
        """Route a validated request to the matching tool."""
        tools = self.tools

        if name == "get_categories":
            return tools.get_categories(type=request.type)
        elif name == "get_category":
            return tools.get_category(request.category_id)
        elif name == "create_category":
            return tools.create_category(request)
        elif name == "get_transactions":
            return tools.get_transactions(request)
        elif name == "get_transaction":
            return tools.get_transaction(request.transaction_id)
        elif name == "create_transaction":
            return tools.create_transaction(request)
        elif name == "update_transaction":
            return tools.update_transaction(request.transaction_id, request)
        elif name == "delete_transaction":
            return tools.delete_transaction(request.transaction_id)
        elif name == "get_budgets":
            return tools.get_budgets()
        elif name == "get_budget":
            return tools.get_budget(request.budget_id)
        elif name == "create_budget":
            return tools.create_budget(request)
        elif name == "update_budget":
            return tools.update_budget(request.budget_id, request)
        elif name == "delete_budget":
            return tools.delete_budget(request.budget_id)
        elif name == "get_monthly_expenses":
            return tools.get_monthly_expenses(months=request.month_count())
        elif name == "get_category_expenses":
            start_date, end_date = request.resolve()
            return tools.get_category_expenses(start_date=start_date, end_date=end_date)
        elif name == "get_summary":
            return tools.get_summary()
        elif name == "get_spending_trends":
            return tools.get_spending_trends(months=request.month_count())
        elif name == "get_spending_forecast":
            return tools.get_spending_forecast(months=request.months)
        elif name == "get_budget_performance":
            return tools.get_budget_performance()
        elif name == "export_transactions":
            start_date, end_date = request.resolve()
            return tools.export_transactions(
                format=request.format, start_date=start_date, end_date=end_date
            )
        else:
            raise ValueError(f"No handler for tool: {name}")

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def _describe_errors(error: ValidationError) -> str:
    """Compact "field: message" list for a validation error."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


async def run_server(
    data_file: Optional[Path] = None, seed_categories: bool = True
) -> None:  # pragma: no cover
    """
    Run the finance tracker MCP server.

    Args:
        data_file: Optional JSON snapshot to load at startup.
        seed_categories: Create the default categories in the new store.
    """
    storage = InMemoryStorage(seed_categories=seed_categories)
    server = FinanceTrackerServer(storage, data_file=data_file)
    await server.run()
