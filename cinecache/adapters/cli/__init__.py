"""Adaptateur CLI (typer + rich) : consultation du catalogue en ligne de commande."""
