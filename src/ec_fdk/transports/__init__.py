"""Transport adapters exposing the ec-fdk tools."""
