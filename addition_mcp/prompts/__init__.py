"""
MCP Prompts Package

Conversational templates, auto-discovered by registry.py the same way as tools.
"""
