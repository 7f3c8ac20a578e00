"""Click CLI entry point with lazy-loaded subcommands."""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click


# Lazy-loading command group: imports command modules only when invoked.
# This avoids importing networkx on --help.
_COMMANDS = {
    "dashboard": ("kbgraph.commands.cmd_dashboard", "dashboard"),
    "clusters":  ("kbgraph.commands.cmd_clusters",  "clusters"),
    "orphans":   ("kbgraph.commands.cmd_orphans",   "orphans"),
    "central":   ("kbgraph.commands.cmd_central",   "central"),
    "walk":      ("kbgraph.commands.cmd_walk",      "walk"),
    "render":    ("kbgraph.commands.cmd_render",    "render"),
}

# Command categories for organized --help display
_CATEGORIES = {
    "Corpus Structure": ["dashboard", "clusters", "central", "orphans"],
    "Walk Mode": ["walk", "render"],
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)

    def format_help(self, ctx, formatter):
        """Categorized help display instead of flat alphabetical list."""
        self.format_usage(ctx, formatter)
        formatter.write("\n")
        if self.help:
            formatter.write(self.help + "\n\n")

        for cat_name, cmds in _CATEGORIES.items():
            formatter.write(f"  {cat_name}:\n")
            for cmd_name in cmds:
                cmd = self.get_command(ctx, cmd_name)
                help_text = cmd.get_short_help_str(limit=60) if cmd else ""
                formatter.write(f"    {cmd_name:12s} {help_text}\n")
            formatter.write("\n")

        self.format_options(ctx, formatter)

        from kbgraph.exit_codes import DESCRIPTIONS

        formatter.write("\nExit codes:\n")
        for code, text in DESCRIPTIONS.items():
            formatter.write(f"  {code}  {text}\n")
        formatter.write("\n  Run `kbgraph <command> --help` for details on any command.\n")


@click.group(cls=LazyGroup)
@click.version_option(package_name="kbgraph")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('--compact', is_flag=True, help='Compact output: TSV tables, minimal JSON envelope')
@click.option('--database', 'database', type=click.Path(dir_okay=False), default=None,
              help='Entity snapshot (database.json). Overrides KBGRAPH_DATABASE and .kbgraph/config.json')
@click.option('-v', '--verbose', is_flag=True, help='Log progress to stderr')
@click.pass_context
def cli(ctx, json_mode, compact, database, verbose):
    """kbgraph: entity-relationship graph engine for knowledge-base wikis."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    ctx.obj['compact'] = compact
    ctx.obj['database'] = database
