"""Capa CLI (Typer + Rich): no contiene lógica de negocio."""
