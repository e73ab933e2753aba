"""Adaptadores: HTTP (httpx), sinks y wiring de la consola."""
