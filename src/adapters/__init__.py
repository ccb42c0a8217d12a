"""Adaptadores de infraestructura (HTTP, HTML, exportación)."""
