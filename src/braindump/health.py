"""
Health check module for Braindump.

Reports system status across all components.
"""

from braindump.config import get_config_path, get_db_path, load_config
from braindump.errors import ConfigError


def check_config() -> tuple[str, str]:
    """Check the config file parses."""
    config_path = get_config_path()
    if not config_path.exists():
        return "-", "Defaults (no config.toml)"

    try:
        load_config()
        return "✓", f"OK ({config_path})"
    except ConfigError as e:
        return "✗", f"Error: {e}"


def check_database() -> tuple[str, str]:
    """Check database status."""
    db_path = get_db_path()
    if not db_path.exists():
        return "!", "Not created yet"

    try:
        from braindump.db import Database
        db = Database()
        stats = db.get_stats()
        return "✓", f"OK ({stats['total_notes']} notes)"
    except Exception as e:
        return "✗", f"Error: {e}"


def check_categorizer() -> tuple[str, str]:
    """Check the category table builds and has its fallback."""
    try:
        from braindump.categorizer import Categorizer
        categorizer = Categorizer.from_config(load_config())
    except ConfigError as e:
        return "✗", f"Error: {e}"

    count = len(categorizer.table)
    return "✓", f"OK ({count} categories, fallback: {categorizer.fallback})"


def run_health_check() -> dict[str, tuple[str, str]]:
    """Run all health checks."""
    return {
        "Config": check_config(),
        "Database": check_database(),
        "Categorizer": check_categorizer(),
    }


def format_health_report(checks: dict[str, tuple[str, str]]) -> str:
    """Format health check results."""
    lines = ["Braindump Health Check", "-" * 40]

    for name, (status, message) in checks.items():
        lines.append(f"{status} {name}: {message}")

    return "\n".join(lines)
