"""Capa CLI (Typer + Rich): comandos y presentación, sin lógica de validación."""
