"""Capa CLI (Typer + Rich): parsing de tokens, render y códigos de salida."""
