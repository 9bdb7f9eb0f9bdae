"""
CLI for Braindump.

Minimal CLI using stdlib for fast startup on the capture path.
Subcommands are imported lazily to avoid startup overhead.

Usage:
    braindump "your thought here"   # Capture (primary interface)
    braindump list                  # Review notes
    braindump --help                # Show help
"""

import sys


def print_help() -> None:
    """Print help message."""
    print("""braindump - capture thoughts, sorted for you

Usage:
    braindump "your thought here"      Capture a thought (auto-categorized)

Commands:
    braindump list [options]           List notes (--category/-c NAME, --limit/-n N)
    braindump show <id>                Show a single note
    braindump edit <id> <text>         Replace a note's text (re-categorized)
    braindump delete <id>              Delete a note
    braindump categories               List categories with icons
    braindump categorize <text>        Dry run: show scores without saving
    braindump tags <text>              Show #tags and @mentions found in text
    braindump learn <category> <word>  Teach a category a new keyword
    braindump stats                    Show database statistics
    braindump health                   Check config, database and categorizer

Options:
    braindump --help, -h               Show this help
    braindump --version, -v            Show version
    braindump --verbose                Log to stderr (any position)

Examples:
    braindump "muszę zadzwonić do mamy"
    braindump list -c zadanie
    braindump categorize "dlaczego niebo jest niebieskie?"
    braindump learn zakupy biedronka""")


def print_version() -> None:
    """Print version."""
    from braindump import __version__
    print(f"braindump {__version__}")


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout stays clean for output."""
    import logging

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
    )


def capture(text: str) -> dict:
    """
    Capture a thought.

    Returns the stored note.
    """
    from braindump.config import ensure_dirs
    from braindump.notebook import Notebook

    ensure_dirs()
    notebook = Notebook()
    return notebook.add(text)


def print_captured(note: dict) -> None:
    """Print the new note ID and where it was filed."""
    print(f"{note['id']}")
    print(f"Zapisano: {note['category_icon']} {note['category']} ({note['confidence']:.2f})")


def cmd_capture(args: list[str]) -> int:
    """Capture the joined text as a new note."""
    note = capture(" ".join(args))
    print_captured(note)
    return 0


def cmd_list(args: list[str]) -> int:
    """List notes with optional category filter."""
    from braindump.config import load_config
    from braindump.surfacing import get_notes_formatted

    config = load_config()
    display = config.get("display", {})
    category = None
    limit = display.get("limit", 50)

    # Parse arguments
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--category", "-c") and i + 1 < len(args):
            category = args[i + 1]
            i += 2
        elif arg in ("--limit", "-n") and i + 1 < len(args):
            try:
                limit = int(args[i + 1])
            except ValueError:
                print(f"Error: Invalid limit: {args[i + 1]}", file=sys.stderr)
                return 1
            i += 2
        elif arg in ("--all", "-a"):
            limit = None
            i += 1
        else:
            i += 1

    if category == "all":
        category = None

    print(get_notes_formatted(
        category=category,
        limit=limit,
        width=display.get("truncate", 60),
    ))
    return 0


def cmd_show(args: list[str]) -> int:
    """Show a single note."""
    from braindump.notebook import Notebook
    from braindump.surfacing import format_note_detail

    if not args:
        print("Usage: braindump show <id>", file=sys.stderr)
        return 1

    note = Notebook().get(args[0])
    print(format_note_detail(note))
    return 0


def cmd_edit(args: list[str]) -> int:
    """Replace a note's content."""
    from braindump.notebook import Notebook

    if len(args) < 2:
        print("Usage: braindump edit <id> <text>", file=sys.stderr)
        return 1

    note_id = args[0]
    text = " ".join(args[1:])

    note = Notebook().edit(note_id, text)
    print(f"Zapisano: {note['category_icon']} {note['category']} ({note['confidence']:.2f})")
    return 0


def cmd_delete(args: list[str]) -> int:
    """Delete a note."""
    from braindump.notebook import Notebook

    if not args:
        print("Usage: braindump delete <id>", file=sys.stderr)
        return 1

    note_id = args[0]
    if Notebook().delete(note_id):
        print(f"Usunięto: {note_id}")
        return 0

    print(f"Not found: {note_id}", file=sys.stderr)
    return 1


def cmd_categories() -> int:
    """List categories, marking those in use."""
    from braindump.notebook import Notebook
    from braindump.surfacing import format_categories

    notebook = Notebook()
    print(format_categories(notebook.categories(), used=notebook.db.get_categories()))
    return 0


def cmd_categorize(args: list[str]) -> int:
    """Show how a text would be categorized, without saving it."""
    from braindump.notebook import Notebook
    from braindump.surfacing import format_scores

    if not args:
        print("Usage: braindump categorize <text>", file=sys.stderr)
        return 1

    notebook = Notebook()
    print(format_scores(" ".join(args), notebook.categorizer))
    return 0


def cmd_tags(args: list[str]) -> int:
    """Print tags found in text, one per line."""
    from braindump.categorizer import get_categorizer

    for tag in get_categorizer().extract_tags(" ".join(args)):
        print(tag)
    return 0


def cmd_learn(args: list[str]) -> int:
    """Teach a category a new keyword."""
    from braindump.notebook import Notebook

    if len(args) < 2:
        print("Usage: braindump learn <category> <keyword>", file=sys.stderr)
        return 1

    category = args[0]
    keyword = " ".join(args[1:])

    if Notebook().learn(category, keyword):
        print(f"Learned: '{keyword.lower()}' → {category}")
        return 0

    print(f"Unknown category or empty keyword: {category}", file=sys.stderr)
    return 1


def cmd_stats() -> int:
    """Show database statistics."""
    from braindump.notebook import Notebook
    from braindump.surfacing import format_stats

    notebook = Notebook()
    icons = {cat["name"]: cat["icon"] for cat in notebook.categories()}
    print(format_stats(notebook.db.get_stats(), icons=icons))
    return 0


def cmd_health() -> int:
    """Run health checks."""
    from braindump.health import format_health_report, run_health_check

    checks = run_health_check()
    print(format_health_report(checks))
    return 1 if any(status == "✗" for status, _ in checks.values()) else 0


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "categorize": cmd_categorize,
    "tags": cmd_tags,
    "learn": cmd_learn,
}

COMMANDS_NO_ARGS = {
    "categories": cmd_categories,
    "stats": cmd_stats,
    "health": cmd_health,
}


def run_command(name: str, args: list[str]) -> int:
    """Run a subcommand, turning errors into a message and exit code 1."""
    try:
        if name in COMMANDS_NO_ARGS:
            return COMMANDS_NO_ARGS[name]()
        if name in COMMANDS:
            return COMMANDS[name](args)
        return cmd_capture(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Optimized for minimal startup time on the capture path.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    verbose = "--verbose" in args
    args = [arg for arg in args if arg != "--verbose"]
    setup_logging(verbose)

    # No args - check for piped input
    if not args:
        if not sys.stdin.isatty():
            # Reading from pipe
            text = sys.stdin.read().strip()
            if text:
                return run_command("capture", [text])
        print_help()
        return 0

    # Handle flags and commands
    first_arg = args[0]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return 0

    if first_arg in ("--version", "-v", "version"):
        print_version()
        return 0

    # Subcommands (lazy import to keep startup fast)
    if first_arg in COMMANDS or first_arg in COMMANDS_NO_ARGS:
        return run_command(first_arg, args[1:])

    # Everything else is a thought to capture
    # Join all args (allows: braindump kupić mleko)
    text = " ".join(args)

    if not text.strip():
        print("Error: Empty thought", file=sys.stderr)
        return 1

    return run_command("capture", [text])


if __name__ == "__main__":
    sys.exit(main())
