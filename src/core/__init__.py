"""Core: dominio, reglas y servicios de validación (sin CLI)."""
