"""
MCP tool modules.

Every public coroutine in a module here whose first parameter is `sdk` is
registered by ec_fdk.core.registry; `sdk` is injected, never exposed.
"""
