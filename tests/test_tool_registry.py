"""Tests for tool_registry.py: categories and registration."""

from __future__ import annotations

from unittest.mock import MagicMock

from prismic_search.presentation.mcp_server.tool_registry import (
    TOOL_CATEGORIES,
    get_tool_info,
    list_registered_tools,
    register_all_mcp_tools,
)


class TestListRegisteredTools:
    def test_has_all_categories(self):
        assert set(list_registered_tools()) == {"search", "saved_searches"}

    def test_search_tools(self):
        assert "advanced_search" in list_registered_tools()["search"]

    def test_returns_copies(self):
        list_registered_tools()["search"].append("bogus")
        assert "bogus" not in TOOL_CATEGORIES["search"]["tools"]


class TestGetToolInfo:
    def test_known_tool(self):
        info = get_tool_info("run_saved_search")
        assert info is not None
        assert info["category_id"] == "saved_searches"
        assert info["category_name"] == "Saved searches"

    def test_unknown_tool(self):
        assert get_tool_info("nonexistent") is None


class TestRegisterAllMcpTools:
    def test_registers_every_listed_tool(self, tmp_path):
        registered = []
        mcp = MagicMock()
        mcp.tool = lambda: lambda func: (registered.append(func.__name__), func)[1]

        stats = register_all_mcp_tools(mcp, MagicMock(), MagicMock())

        expected = [name for cat in TOOL_CATEGORIES.values() for name in cat["tools"]]
        assert sorted(registered) == sorted(expected)
        assert stats == {"search": 4, "saved_searches": 5}
